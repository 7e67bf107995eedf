"""Read back a produced PDF to summarize its pages."""

import io

import pikepdf


def page_sizes(data):
    """(width, height) in points of every page in the PDF ``data``."""
    sizes = []
    with pikepdf.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            x0, y0, x1, y1 = (float(v) for v in page.mediabox)
            sizes.append((x1 - x0, y1 - y0))
    return sizes
