"""Stroke classifier — entry point tying the stages together."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, Union

import numpy as np
from numpy.typing import NDArray

from shapesketch.engine.config import ClassifierConfig
from shapesketch.engine.context import ClassificationContext
from shapesketch.utils.pixel_mask import RGBABuffer, SurfaceError
from shapesketch.utils.scoring import ERROR_SUFFIX, ErrorScores

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)

Surface = Union[RGBABuffer, "Image.Image", None]


def select_label(errors: ErrorScores | Mapping[str, int]) -> str:
    """Return the bare shape name with the strictly smallest error.

    Iteration order is square, ellipse, line, so the earlier shape wins ties.
    """
    scores = errors.as_dict() if isinstance(errors, ErrorScores) else dict(errors)
    best_name = ""
    best_value = sys.maxsize
    for name, value in scores.items():
        if value < best_value:
            best_name = name
            best_value = value
    return best_name.split(ERROR_SUFFIX)[0].lower()


def _as_rgba_array(
    surface: Surface,
    width: int | None,
    height: int | None,
) -> NDArray[np.uint8] | None:
    if surface is None:
        return None
    if isinstance(surface, np.ndarray):
        if surface.ndim == 3:
            if surface.shape[2] != 4:
                raise SurfaceError(f"Expected 4 channels, got {surface.shape[2]}")
            return surface.astype(np.uint8, copy=False)
        arr = surface.astype(np.uint8, copy=False).ravel()
    elif isinstance(surface, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(surface, dtype=np.uint8)
    else:
        # Pillow image
        return np.asarray(surface.convert("RGBA"), dtype=np.uint8)

    if width is None or height is None:
        raise SurfaceError("Flat buffers need explicit width and height")
    if arr.size != width * height * 4:
        raise SurfaceError(
            f"Buffer has {arr.size} bytes, expected {width * height * 4} for {width}x{height} RGBA"
        )
    return arr.reshape(height, width, 4)


def classify_context(
    surface: Surface,
    width: int | None = None,
    height: int | None = None,
    config: ClassifierConfig | None = None,
) -> ClassificationContext:
    """Run the full pipeline and return the context with every stage output.

    Raises:
        SurfaceError: If an array is not RGBA, or a flat buffer does not match
            ``width x height x 4``.
    """
    from shapesketch.engine.pipeline import create_pipeline

    rgba = _as_rgba_array(surface, width, height)
    if rgba is not None:
        height, width = rgba.shape[:2]

    ctx = ClassificationContext(
        surface=rgba,
        width=width or 0,
        height=height or 0,
        config=config or ClassifierConfig(),
    )
    return create_pipeline().run(ctx)


def classify_stroke(
    surface: Surface,
    width: int | None = None,
    height: int | None = None,
    config: ClassifierConfig | None = None,
) -> str | None:
    """Classify a rendered stroke as ``"square"``, ``"ellipse"`` or ``"line"``.

    Args:
        surface: ``H x W x 4`` RGBA array, flat row-major RGBA bytes, a Pillow
            image, or None when no render context is available.
        width: Surface width (flat buffers only).
        height: Surface height (flat buffers only).
        config: Rendering / extrema options.

    Returns:
        The label, or None when the surface has no ink.
    """
    ctx = classify_context(surface, width, height, config)
    if ctx.stage_errors:
        logger.warning("Classification incomplete: %s", ctx.stage_errors)
    return ctx.label
