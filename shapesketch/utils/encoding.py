"""Surface encodings — base64 RGBA buffers, PNG / data-URL images, mask previews."""

from __future__ import annotations

import base64
import binascii
import io

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from shapesketch.utils.pixel_mask import PixelMask, SurfaceError, SurfaceTooLarge

_DATA_URL_PREFIX = "data:"


def decode_rgba(data: str, width: int, height: int) -> NDArray[np.uint8]:
    """Decode a base64 row-major RGBA buffer into an ``H x W x 4`` array."""
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SurfaceError(f"Invalid base64 RGBA data: {e}") from e

    expected = width * height * 4
    if len(raw) != expected:
        raise SurfaceError(
            f"RGBA buffer has {len(raw)} bytes, expected {expected} for {width}x{height}"
        )
    return np.frombuffer(raw, dtype=np.uint8).reshape(height, width, 4)


def decode_image(
    data: str,
    max_width: int | None = None,
    max_height: int | None = None,
) -> NDArray[np.uint8]:
    """Decode a base64 image (PNG etc.) or ``data:`` URL into an RGBA array.

    The header is checked against ``max_width`` / ``max_height`` before any
    pixel data is decoded.

    Raises:
        SurfaceTooLarge: If the image is wider or taller than the limits.
        SurfaceError: If the data is not a readable image.
    """
    if data.startswith(_DATA_URL_PREFIX):
        _, _, data = data.partition(",")
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SurfaceError(f"Invalid base64 image data: {e}") from e

    try:
        with Image.open(io.BytesIO(raw)) as img:
            width, height = img.size
            if (max_width is not None and width > max_width) or (
                max_height is not None and height > max_height
            ):
                raise SurfaceTooLarge(
                    f"Image is {width}x{height}, maximum is {max_width}x{max_height}"
                )
            return np.asarray(img.convert("RGBA"), dtype=np.uint8)
    except Image.DecompressionBombError as e:
        raise SurfaceError(f"Image is too large to decode: {e}") from e
    except (UnidentifiedImageError, OSError) as e:
        raise SurfaceError(f"Could not decode image: {e}") from e


def mask_to_png_data_url(mask: PixelMask) -> str:
    """Encode a mask as a black-on-transparent PNG data URL for previews."""
    h, w = mask.shape
    rgba = np.zeros((h, w, 4), dtype=np.uint8)
    rgba[mask, 3] = 255
    buf = io.BytesIO()
    Image.fromarray(rgba).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
