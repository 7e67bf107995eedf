"""
Text layout primitives: sanitizing, measuring and wrapping.

All output text is restricted to printable ASCII so it can be drawn with the
standard Times faces without glyph lookups. Anything outside 0x20-0x7E is
dropped; non-ASCII input is lossy by design of the font choice.
"""

import re

from reportlab.pdfbase import pdfmetrics

FONT = "Times-Roman"
FONT_BOLD = "Times-Bold"

_CONTROL = re.compile(r'[\r\n\t]')
_NON_PRINTABLE = re.compile(r'[^\x20-\x7E]')
_SPACES = re.compile(r'\s+')


def font_name(bold=False):
    return FONT_BOLD if bold else FONT


def sanitize(text):
    """Single-line, printable-ASCII version of ``text`` (``None`` -> "")."""
    if not text:
        return ""
    s = _CONTROL.sub(' ', str(text))
    s = _NON_PRINTABLE.sub('', s)
    return _SPACES.sub(' ', s).strip()


def measure_width(text, size, bold=False):
    return pdfmetrics.stringWidth(sanitize(text), font_name(bold), size)


def wrap_text(text, max_width, size):
    """
    Greedy word wrap measured against the regular face.

    Words are added to the current line while the line still fits in
    ``max_width``. A single word wider than ``max_width`` is kept whole on
    its own line and allowed to overflow.
    """
    sanitized = sanitize(text)
    if not sanitized:
        return []
    lines = []
    current = ""
    for word in sanitized.split(' '):
        candidate = f"{current} {word}" if current else word
        if current and measure_width(candidate, size) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines

