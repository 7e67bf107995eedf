"""
Page layout engine: the vertical cursor, page breaks and every draw call.

The engine wraps a reportlab canvas. Each draw call goes to the canvas and is
also recorded as a ``DrawOp`` on the current page, so a render can be compared
or inspected without parsing the PDF back.
"""

from collections import namedtuple

from reportlab.lib.pagesizes import letter

from .errors import LayoutError
from .text import font_name, sanitize

PAGE_W, PAGE_H = letter
PAGE_TOP = PAGE_H - 50
BOTTOM_MARGIN = 50

BLACK = (0, 0, 0)
WHITE = (1, 1, 1)
PRIMARY = (0.078, 0.298, 0.518)
DARK_GRAY = (0.3, 0.3, 0.3)
GREEN = (0, 0.7, 0)

# Tri-state answer slots: (label, x offset from the first slot, box width)
ANSWER_X = 380
ANSWER_SLOTS = (("Yes", 0, 26), ("No", 35, 22), ("N/A", 70, 24))

# kind: "text" | "rect" | "line" | "image".  Lines store their end point in w/h.
DrawOp = namedtuple("DrawOp", "kind x y w h text size bold fill stroke")


def _op(kind, x, y, w=0.0, h=0.0, text="", size=0.0, bold=False, fill=None, stroke=None):
    return DrawOp(kind, round(x, 3), round(y, 3), round(w, 3), round(h, 3),
                  text, size, bold, fill, stroke)


class LayoutEngine:
    def __init__(self, cv):
        self.cv = cv
        self.y = PAGE_TOP
        self.page_num = 1
        self.pages = [[]]
        self.page_breaks = []
        self.signature_floor_y = None

    # ── cursor ────────────────────────────────────────────────────────────
    def remaining(self):
        return self.y - BOTTOM_MARGIN

    def new_page(self, reason="explicit"):
        self.cv.showPage()
        self.page_num += 1
        self.pages.append([])
        self.page_breaks.append(reason)
        self.y = PAGE_TOP

    def ensure_space(self, needed):
        if self.remaining() < needed:
            self.new_page("ensure_space")
            return True
        return False

    def advance(self, h):
        if h < 0:
            raise LayoutError(f"cursor cannot move up mid-page (advance {h})")
        self.y -= h

    def advance_to(self, y):
        self.advance(self.y - y)

    @property
    def ops(self):
        return self.pages[-1]

    # ── drawing ───────────────────────────────────────────────────────────
    def text(self, txt, x, y, size=10, bold=False, color=BLACK):
        s = sanitize(txt)
        self.cv.setFont(font_name(bold), size)
        self.cv.setFillColorRGB(*color)
        self.cv.drawString(x, y, s)
        self.ops.append(_op("text", x, y, text=s, size=size, bold=bold, fill=color))

    def centered_text(self, txt, y, size=10, bold=False, color=BLACK):
        s = sanitize(txt)
        w = self.cv.stringWidth(s, font_name(bold), size)
        self.text(s, (PAGE_W - w) / 2, y, size, bold, color)

    def rect(self, x, y, w, h, fill=None, stroke=None, line_width=1.0):
        if fill:
            self.cv.setFillColorRGB(*fill)
        if stroke:
            self.cv.setStrokeColorRGB(*stroke)
            self.cv.setLineWidth(line_width)
        self.cv.rect(x, y, w, h, fill=1 if fill else 0, stroke=1 if stroke else 0)
        self.ops.append(_op("rect", x, y, w, h, fill=fill, stroke=stroke))

    def line(self, x1, y1, x2, y2, thickness=0.5, color=DARK_GRAY):
        self.cv.setStrokeColorRGB(*color)
        self.cv.setLineWidth(thickness)
        self.cv.line(x1, y1, x2, y2)
        self.ops.append(_op("line", x1, y1, x2, y2, stroke=color))

    def image(self, reader, x, y, w, h):
        self.cv.drawImage(reader, x, y, width=w, height=h, mask='auto')
        self.ops.append(_op("image", x, y, w, h))

    def tri_state(self, question, answer, x, y):
        """Question text plus Yes / No / N/A slots; the chosen one is boxed."""
        self.text(question, x, y, 9)
        for label, offset, box_w in ANSWER_SLOTS:
            sx = ANSWER_X + offset
            if answer == label:
                self.rect(sx - 3, y - 2, box_w, 12, stroke=GREEN, line_width=1.5)
                self.text(label, sx, y, 10, bold=True, color=GREEN)
            else:
                self.text(label, sx, y, 9)
