"""
Bottom-anchored disclaimer footer.

The footer is not part of the text flow: it is placed against the bottom edge
of the last page. When the sign-off blocks already reach down into that band
the footer moves to a page of its own.
"""

from . import config
from .layout import PAGE_W
from .text import measure_width, wrap_text

FOOTER_WIDTH = 500
FOOTER_SIZE = 8
FOOTER_LINE_H = FOOTER_SIZE + 2
BOTTOM_PADDING = 10
SAFE_GAP = 12
RULE_OFFSET = 4

DISCLAIMER = (
    "{company} is not responsible for nor offers any opinion and/or guidance as to "
    "the condition or functionality of the wet and/or dry Sprinkler system components "
    "that may be installed at the property noted on this Report nor any Elevator life "
    "safety components. This Fire Alarm Inspection & Test Report only reflects the "
    "electrical continuity of the necessary signals required for the proper alarm "
    "sequencing and signaling and reports only on the devices noted on this Report. "
    "{company} does not perform water flow testing associated with any wet and/or dry "
    "Sprinkler system components nor do we perform an Elevator shut down test procedure. "
    "Property Owners and/or Managers are required to be familiar with the NFPA "
    "requirements related to the proper inspection procedures related to Fire Alarm "
    "panel(s) and/or any associated wet/dry sprinkler system(s) and/or Elevator systems "
    "installed at the property referenced on this report. Local Authorities may also "
    "have separate reporting requirements."
)


def disclaimer_lines(company=None):
    text = DISCLAIMER.format(company=company or config.COMPANY_NAME)
    return wrap_text(text, FOOTER_WIDTH, FOOTER_SIZE)


def resolve_footer_anchor(signature_floor_y, block_height):
    """
    Top y of the footer block and whether it needs a fresh page.

    The block starts anchored at ``BOTTOM_PADDING``. It has to stay
    ``SAFE_GAP`` below ``signature_floor_y``; it can be shifted no lower
    than the padding, so once the anchored block collides the only room
    left is a new page, where it is anchored again.
    """
    top = BOTTOM_PADDING + block_height
    if signature_floor_y is None or top + SAFE_GAP <= signature_floor_y:
        return top, False
    return top, True


def render_footer(engine, signature_floor_y):
    lines = disclaimer_lines()
    block_height = len(lines) * FOOTER_LINE_H
    top, needs_page = resolve_footer_anchor(signature_floor_y, block_height)
    if needs_page:
        engine.new_page("footer")

    engine.line(50, top + RULE_OFFSET, PAGE_W - 50, top + RULE_OFFSET)
    y = top - block_height
    for line in reversed(lines):
        w = measure_width(line, FOOTER_SIZE)
        engine.text(line, (PAGE_W - w) / 2, y, FOOTER_SIZE)
        y += FOOTER_LINE_H
    return top
