"""
Section renderers for the fire alarm inspection report.

One function per form section, called in a fixed order by the assembler.
Each takes the ``LayoutEngine`` and the record and leaves the cursor below
whatever it drew. Every section checks for room before it starts so no block
is drawn past the bottom margin.
"""

import logging
from itertools import zip_longest

from . import config
from .images import decode_data_url, embed_image, scaled_size
from .layout import DARK_GRAY, PAGE_H, PAGE_W, PRIMARY, WHITE
from .record import CONTROL_PANEL_KEYS, FUNCTIONAL_TEST_KEYS, POST_TEST_KEYS
from .text import sanitize, wrap_text

logger = logging.getLogger(__name__)

TITLE = "Fire Alarm Inspection & Test Report"
LOGO_SCALE = 0.35
ROW_H = 12
QUESTION_H = 15
WRAPPED_LINE_H = 12
WRAPPED_LINE_GUARD = 15
COL_W = 125
TABLE_ROW_H = 20
CELL_SIZE = 8
CELL_LINE_H = 10
CELL_TEXT_W = COL_W - 10
SIGNATURE_SCALE = 0.3
SIGNATURE_MAX = (200, 30)
SIGNOFF_H = 100
NO_ISSUES = "None - all equipment functioning properly"

CONTROL_QUESTIONS = (
    "A. Is panel monitored by outside agency?",
    "B. Is the power light on?",
    "C. Is the trouble light on?",
    "D. Is the alarm light on?",
    "E. Is the supervisory light on?",
    "F. Is the ground fault light on?",
    "G. Is the AC power on?",
    "H. Is the system in normal operation?",
    "I. Does the panel have battery backup?",
    "J. Do the batteries indicate proper charge?",
    "K. Have Fire Dept. and Monitoring Agency been notified?",
)

FUNCTIONAL_QUESTIONS = (
    "A. Did all indicating circuits function normally?",
    "B. If tested, did air handlers shut down?",
    "C. If tested, did elevators recall?",
    "D. If tested, did suppression system solenoid energize?",
    "E. If tested, did panel send alarm signal to monitoring agency?",
    "F. If tested, did panel send trouble signal to monitoring agency?",
)

POST_TEST_QUESTIONS = (
    "A. All initiating circuits returned to normal?",
    "B. All indicating circuits returned to normal?",
    "C. All shut-down circuits returned to normal?",
    "D. All valves seals replaced?",
    "E. Have all authorities been notified?",
)

TABLE_HEADERS = ("Equipment", "Total Number", "Total No. Tested", "Device Function")


# ── shared pieces ─────────────────────────────────────────────────────────────
def heading(engine, title):
    engine.text(title, 50, engine.y, 12, bold=True, color=PRIMARY)

def answer_for(answers, key):
    return answers.get(key) or "N/A"

def draw_questions(engine, questions, keys, answers):
    for key, question in zip(keys, questions):
        engine.tri_state(question, answer_for(answers, key), 55, engine.y)
        engine.advance(QUESTION_H)

def draw_wrapped(engine, text, x, width, size=9):
    for line in wrap_text(text, width, size):
        engine.ensure_space(WRAPPED_LINE_GUARD)
        engine.text(line, x, engine.y, size)
        engine.advance(WRAPPED_LINE_H)


# ── 1. header ─────────────────────────────────────────────────────────────────
def render_header(engine, report, logo=None):
    if logo is not None:
        w, h = scaled_size(logo.width, logo.height, LOGO_SCALE)
        engine.image(logo.reader, (PAGE_W - w) / 2, PAGE_H - 70, w, h)
    engine.centered_text(TITLE, PAGE_H - 100, 16, color=PRIMARY)
    engine.advance_to(PAGE_H - 130)


# ── 2. property information ───────────────────────────────────────────────────
PROPERTY_BLOCK_H = 60

def render_property_info(engine, report):
    left = (
        ("Property Name:", report.property_name),
        ("Street:", report.street),
        ("Contact:", report.contact),
        ("Frequency:", report.frequency_of_inspection),
    )
    right = (
        ("City, State, Zip:", report.city_state_zip),
        ("Phone:", report.phone),
        ("Date:", report.date),
    )
    engine.ensure_space(15 + PROPERTY_BLOCK_H)
    heading(engine, "Section 1 - Property Information")
    engine.advance(15)

    start_y = engine.y
    for lrow, rrow in zip_longest(left, right):
        if lrow:
            engine.text(lrow[0], 55, engine.y, 9, bold=True)
            engine.text(lrow[1] or "", 140, engine.y, 9)
        if rrow:
            engine.text(rrow[0], 320, engine.y, 9, bold=True)
            engine.text(rrow[1] or "", 420, engine.y, 9)
        engine.advance(ROW_H)
    engine.advance_to(start_y - PROPERTY_BLOCK_H)


# ── 3. notify prior to testing ────────────────────────────────────────────────
def entity_line(e):
    return f"{e.entity}: {e.name or ''} ({e.phone or ''})"

def render_notify_entities(engine, report):
    entities = [e for e in report.notify_entities if (e.entity or "").strip()]
    rows = (len(entities) + 1) // 2
    engine.ensure_space(15 + rows * ROW_H + 15)
    heading(engine, "Section 2 - Notify Prior to Testing")
    engine.advance(15)

    for i in range(0, len(entities), 2):
        engine.text(entity_line(entities[i]), 55, engine.y, 9)
        if i + 1 < len(entities):
            engine.text(entity_line(entities[i + 1]), 320, engine.y, 9)
        engine.advance(ROW_H)
    engine.advance(15)


# ── 4. control panel status ───────────────────────────────────────────────────
def render_control_panel(engine, report):
    engine.ensure_space(15 + 15 + len(CONTROL_QUESTIONS) * QUESTION_H + 20)
    heading(engine, "Section 3 - Control Panel Status")
    engine.advance(15)

    engine.text(f"Manufacturer: {report.manufacturer or ''}", 55, engine.y, 9)
    engine.text(f"Model: {report.model or ''}", 320, engine.y, 9)
    engine.advance(15)

    draw_questions(engine, CONTROL_QUESTIONS, CONTROL_PANEL_KEYS, report.control_panel_status)

    engine.text(f"System Put in Test At: {report.put_system_in_test_at or ''}",
                55, engine.y, 9, bold=True)
    engine.advance(20)

    if sanitize(report.comments):
        engine.ensure_space(ROW_H + WRAPPED_LINE_GUARD)
        engine.text("Comments:", 55, engine.y, 9, bold=True)
        engine.advance(ROW_H)
        draw_wrapped(engine, report.comments, 55, 500)
    engine.advance(15)


# ── 5. equipment tested ───────────────────────────────────────────────────────
def equipment_cells(row):
    return (
        row.label,
        str(row.total_number) if row.total_number is not None else "0",
        str(row.total_tested) if row.total_tested is not None else "0",
        row.function_ok or "N/A",
    )

def draw_table_header(engine):
    x = 50
    for header in TABLE_HEADERS:
        engine.rect(x - 2, engine.y - 15, COL_W, TABLE_ROW_H, fill=PRIMARY)
        engine.text(header, x + 5, engine.y - 8, 9, bold=True, color=WHITE)
        x += COL_W
    engine.advance(25)

def equipment_row_lines(row):
    """Wrapped lines per cell; every cell has at least one line."""
    return [wrap_text(value, CELL_TEXT_W, CELL_SIZE) or [""] for value in equipment_cells(row)]

def draw_equipment_row(engine, cells):
    extra = (max(len(lines) for lines in cells) - 1) * CELL_LINE_H
    row_h = TABLE_ROW_H + extra
    if engine.ensure_space(row_h):
        draw_table_header(engine)
    x = 50
    for lines in cells:
        engine.rect(x - 2, engine.y - 15 - extra, COL_W, row_h, stroke=DARK_GRAY, line_width=0.5)
        for i, line in enumerate(lines):
            engine.text(line, x + 5, engine.y - 8 - i * CELL_LINE_H, CELL_SIZE)
        x += COL_W
    engine.advance(row_h)

def render_equipment_table(engine, report):
    engine.new_page("explicit")
    heading(engine, "Section 4 - Equipment Tested")
    engine.advance(20)

    engine.text(f"System Type: {report.system_type or ''}", 55, engine.y, 9)
    engine.advance(20)

    draw_table_header(engine)
    for row in report.equipment_tested:
        if not (row.label or "").strip():
            continue
        draw_equipment_row(engine, equipment_row_lines(row))
    engine.advance(20)


# ── 6. functional test ────────────────────────────────────────────────────────
def render_functional_test(engine, report):
    engine.ensure_space(15 + len(FUNCTIONAL_QUESTIONS) * QUESTION_H + 15)
    heading(engine, "Section 5 - Functional Test of Output Devices")
    engine.advance(15)
    draw_questions(engine, FUNCTIONAL_QUESTIONS, FUNCTIONAL_TEST_KEYS, report.functional_test)
    engine.advance(15)


# ── 7. power supplies ─────────────────────────────────────────────────────────
def render_power_supplies(engine, report):
    engine.ensure_space(200)
    heading(engine, "Section 6 - System Power Supplies")
    engine.advance(15)

    generator = "Yes" if report.emergency_generator_connected else "No"
    fields = (
        ("Primary Power:", report.primary_power),
        ("Nominal Voltage:", report.nominal_voltage),
        ("Nominal Voltage (Amps):", report.nominal_voltage_amps),
        ("Overcurrent Protection:", report.overcurrent_protection),
        ("Overcurrent Protection (Amps):", report.overcurrent_protection_amps),
        ("Storage Battery (Amp Hour Rating):", report.storage_battery),
        ("Calculated to operate system for (Hours):", report.hours_system_must_operate),
        ("Emergency Generator Connected:", generator),
    )
    for label, value in fields:
        engine.text(label, 55, engine.y, 9, bold=True)
        engine.text(value or "", 280, engine.y, 9)
        engine.advance(ROW_H)

    long_fields = (
        ("Panel, Breaker No. & Location:", report.panel_breaker_location),
        ("Battery Test Reading:", report.battery_test_reading),
        ("Location of Fuel Source:", report.fuel_source_location),
    )
    for label, value in long_fields:
        if not sanitize(value):
            continue
        engine.ensure_space(10 + WRAPPED_LINE_GUARD)
        engine.text(label, 55, engine.y, 9, bold=True)
        engine.advance(10)
        draw_wrapped(engine, value, 75, 400)
    engine.advance(15)


# ── 8. post test ──────────────────────────────────────────────────────────────
def render_post_test(engine, report):
    engine.ensure_space(120)
    heading(engine, "Section 7 - Post Test")
    engine.advance(15)
    draw_questions(engine, POST_TEST_QUESTIONS, POST_TEST_KEYS, report.post_test)
    engine.text(f"System Returned to Service At: {report.return_to_service_at or ''}",
                55, engine.y, 9, bold=True)
    engine.advance(20)


# ── 9. comments and sign-off ──────────────────────────────────────────────────
def draw_signature(engine, signature, who):
    if not signature:
        return
    try:
        sig = embed_image(decode_data_url(signature))
    except ValueError as ex:
        logger.warning("Failed to embed %s signature: %s", who, ex)
        return
    w, h = scaled_size(sig.width, sig.height, SIGNATURE_SCALE, *SIGNATURE_MAX)
    engine.image(sig.reader, 55, engine.y - 30, w, h)

def draw_signoff(engine, title, caption, block):
    engine.ensure_space(SIGNOFF_H)
    engine.text(title, 55, engine.y, 10, bold=True)
    engine.advance(15)
    engine.text(f"Name: {block.name or ''}", 55, engine.y, 9)
    engine.text(f"Title: {block.title or ''}", 300, engine.y, 9)
    engine.advance(12)
    engine.text(f"Date: {block.date or ''}", 55, engine.y, 9)
    engine.advance(25)

    draw_signature(engine, block.signature, caption)
    engine.line(55, engine.y - 35, 300, engine.y - 35)
    engine.text(caption, 55, engine.y - 45, 8)
    engine.signature_floor_y = engine.y - 45

def render_comments_signoff(engine, report):
    engine.ensure_space(150)
    heading(engine, "Section 8 - Incorrectly Operating Equipment / Comments")
    engine.advance(20)
    engine.text("Comments", 55, engine.y, 10, bold=True)
    engine.advance(15)
    draw_wrapped(engine, sanitize(report.incorrectly_operating_equipment) or NO_ISSUES, 55, 500)
    engine.advance(15)

    engine.ensure_space(20 + SIGNOFF_H)
    heading(engine, "Section 9 - Test Verification")
    engine.advance(20)

    draw_signoff(engine, "Test Verification - Owner", "Owner Signature", report.owner_signoff)
    engine.advance(60)
    short = config.COMPANY_SHORT
    draw_signoff(engine, f"Test Verification - {short}", f"{short} Signature",
                 report.technician_signoff)


# Body sections in print order; the header runs first and takes the logo.
SECTIONS = (
    ("property_info", render_property_info),
    ("notify_entities", render_notify_entities),
    ("control_panel", render_control_panel),
    ("equipment_table", render_equipment_table),
    ("functional_test", render_functional_test),
    ("power_supplies", render_power_supplies),
    ("post_test", render_post_test),
    ("comments_signoff", render_comments_signoff),
)
