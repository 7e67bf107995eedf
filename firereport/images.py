"""Raster image decoding and embedding helpers (Pillow + reportlab)."""

import base64
import binascii
import io
from collections import namedtuple

from PIL import Image as PILImage
from reportlab.lib.utils import ImageReader

# reader: reportlab ImageReader; width/height: intrinsic pixel size
Embedded = namedtuple("Embedded", "reader width height")


def decode_data_url(value):
    """Raw bytes from a ``data:image/png;base64,...`` URL or bare base64."""
    payload = value.split(",", 1)[1] if "," in value else value
    payload = payload.replace('\n', '').replace(' ', '').replace('\r', '')
    if not payload:
        raise ValueError("empty image payload")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as ex:
        raise ValueError(f"invalid base64 image payload: {ex}") from ex


def embed_image(data):
    """
    Open encoded PNG/JPEG bytes and wrap them for ``canvas.drawImage``.

    Raises ``ValueError`` when the bytes are not a readable image.
    """
    try:
        img = PILImage.open(io.BytesIO(data))
        img.load()
    except (OSError, PILImage.DecompressionBombError) as ex:
        raise ValueError(f"unreadable image: {ex}") from ex
    if img.mode not in ('RGB', 'RGBA', 'L'):
        img = img.convert('RGBA' if 'A' in img.getbands() else 'RGB')
    return Embedded(ImageReader(img), img.width, img.height)


def scaled_size(width, height, factor, max_w=None, max_h=None):
    """Scale by ``factor``, then shrink further (keeping aspect) to the bounds."""
    w, h = width * factor, height * factor
    shrink = 1.0
    if max_w and w > max_w:
        shrink = min(shrink, max_w / w)
    if max_h and h > max_h:
        shrink = min(shrink, max_h / h)
    return w * shrink, h * shrink
