"""PixelMask — the binary ink grid every pipeline stage works on.

A pixel is ink iff the sum of its four RGBA channels is non-zero. Masks are
read-only numpy bool arrays of shape (height, width), row-major.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from PIL import Image

PixelMask = NDArray[np.bool_]

# Bytes per pixel in the RGBA wire format
_CHANNELS = 4


class SurfaceError(ValueError):
    """Raised when a pixel buffer does not match its declared dimensions."""


class SurfaceTooLarge(SurfaceError):
    """Raised when a surface exceeds the accepted width or height."""


RGBABuffer = Union[NDArray[np.uint8], bytes, bytearray, memoryview]


def _freeze(mask: NDArray[np.bool_]) -> PixelMask:
    mask.setflags(write=False)
    return mask


def empty_mask() -> PixelMask:
    """Mask with zero rows — the result of reading a surface that does not exist."""
    return _freeze(np.zeros((0, 0), dtype=bool))


def blank_mask(width: int, height: int) -> PixelMask:
    """All-false mask of the given size."""
    return _freeze(np.zeros((height, width), dtype=bool))


def mask_from_rgba(
    buffer: RGBABuffer | None,
    width: int | None = None,
    height: int | None = None,
) -> PixelMask:
    """Extract the ink mask from an RGBA pixel buffer.

    Args:
        buffer: ``H x W x 4`` uint8 array, or a flat row-major byte buffer of
            ``W * H * 4`` bytes. ``None`` means no render context is available.
        width: Buffer width; required for flat buffers.
        height: Buffer height; required for flat buffers.

    Returns:
        Read-only ``H x W`` bool array, or an empty mask when ``buffer`` is None.

    Raises:
        SurfaceError: If the buffer size does not match ``width x height x 4``.
    """
    if buffer is None:
        return empty_mask()

    if isinstance(buffer, np.ndarray) and buffer.ndim == 3:
        if buffer.shape[2] != _CHANNELS:
            raise SurfaceError(f"Expected {_CHANNELS} channels, got {buffer.shape[2]}")
        if width is not None and buffer.shape[1] != width:
            raise SurfaceError(f"Buffer width {buffer.shape[1]} != declared {width}")
        if height is not None and buffer.shape[0] != height:
            raise SurfaceError(f"Buffer height {buffer.shape[0]} != declared {height}")
        pixels = buffer
    else:
        if width is None or height is None:
            raise SurfaceError("Flat buffers need explicit width and height")
        flat = np.frombuffer(buffer, dtype=np.uint8) if not isinstance(buffer, np.ndarray) else buffer.ravel()
        expected = width * height * _CHANNELS
        if flat.size != expected:
            raise SurfaceError(
                f"Buffer has {flat.size} bytes, expected {expected} for {width}x{height} RGBA"
            )
        pixels = flat.reshape(height, width, _CHANNELS)

    # Widen before summing so 4 x 255 does not wrap around in uint8
    ink = pixels.astype(np.uint16).sum(axis=2) > 0
    return _freeze(ink)


def mask_from_image(image: "Image.Image") -> PixelMask:
    """Extract the ink mask from a Pillow image (converted to RGBA first)."""
    rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    return mask_from_rgba(rgba)


def has_ink(mask: PixelMask) -> bool:
    return mask.size > 0 and bool(mask.any())


def ink_count(mask: PixelMask) -> int:
    return int(np.count_nonzero(mask))
