"""
Document assembler: builds the whole report in one pass.

    record -> header + sections 1..9 -> footer -> PDF bytes

Anything that goes wrong inside a stage is wrapped in
``ReportGenerationError`` naming that stage; no partial PDF is returned.
Missing logo and signature images are logged and skipped instead.
"""

import io
import logging
import re
from collections import namedtuple
from datetime import date

import httpx
from reportlab.lib.pagesizes import letter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from . import config
from .errors import ReportGenerationError
from .footer import render_footer
from .images import embed_image
from .layout import LayoutEngine
from .logo import default_logo_provider
from .record import FireAlarmReport
from .sections import SECTIONS, TITLE, render_header
from .text import FONT, FONT_BOLD, sanitize

logger = logging.getLogger(__name__)

# pages: one list of DrawOp per page; page_breaks: reason for each new page
RenderedReport = namedtuple("RenderedReport", "pages page_breaks pdf")


def load_logo(provider):
    """Fetch and embed the logo once; any failure means no logo."""
    try:
        logo = provider.fetch()
    except (httpx.HTTPError, OSError, ValueError) as ex:
        logger.warning("Logo lookup failed; continuing without logo: %s", ex)
        return None
    if logo is None:
        return None
    if logo.image is not None:
        return logo.image
    try:
        return embed_image(logo.data)
    except ValueError as ex:
        logger.warning("Failed to embed logo from %s: %s", logo.source, ex)
        return None


def render_report(report, logo_provider=None):
    """Lay out ``report`` and return its pages, page breaks and PDF bytes."""
    if logo_provider is None:
        logo_provider = default_logo_provider()

    stage = "record"
    try:
        if isinstance(report, dict):
            report = FireAlarmReport.from_dict(report)

        stage = "initialize"
        buf = io.BytesIO()
        cv = canvas.Canvas(buf, pagesize=letter, invariant=1)
        cv.setTitle(TITLE)
        cv.setAuthor(config.COMPANY_NAME)
        cv.setSubject(sanitize(report.property_name))

        stage = "fonts"
        for name in (FONT, FONT_BOLD):
            pdfmetrics.getFont(name)

        stage = "logo"
        logo = load_logo(logo_provider)

        engine = LayoutEngine(cv)
        stage = "section:header"
        render_header(engine, report, logo)
        for name, render_section in SECTIONS:
            stage = f"section:{name}"
            render_section(engine, report)

        stage = "footer"
        render_footer(engine, engine.signature_floor_y)

        stage = "save"
        cv.save()
    except Exception as ex:
        logger.error("Error generating PDF during %s: %s", stage, ex)
        raise ReportGenerationError(stage, ex) from ex

    pdf = buf.getvalue()
    logger.info("PDF generated successfully: %d page(s), %d bytes", engine.page_num, len(pdf))
    return RenderedReport(engine.pages, tuple(engine.page_breaks), pdf)


def generate_report_pdf(report, logo_provider=None):
    """Render ``report`` (a record or the form's dict payload) to PDF bytes."""
    return render_report(report, logo_provider).pdf


def report_filename(report, day=None):
    """``Fire_Alarm_Report_<property>_<YYYY-MM-DD>.pdf``"""
    name = re.sub(r'[^a-zA-Z0-9]', '_', report.property_name or "")
    day = day or date.today()
    return f"Fire_Alarm_Report_{name}_{day.isoformat()}.pdf"
