"""Rasterization utilities — reference outlines on a private render target.

Each reference shape is stroked with Pillow onto a transparent RGBA image
that belongs to the call, then read back with the same ink rule as the user
surface. The user's drawing is never touched.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw

from shapesketch.utils.bounds import CornerSet, compute_bounds
from shapesketch.utils.pixel_mask import PixelMask, blank_mask, mask_from_image

# ── Named constants ──

_TRANSPARENT = (0, 0, 0, 0)
_INK = (0, 0, 0, 255)

# Stroke width of the reference outlines (px). Wide enough to absorb the
# wobble of a hand-drawn stroke on a typical canvas.
DEFAULT_STROKE_WIDTH = 25

# Bounds below this size (px) cannot show corners or curvature.
DEFAULT_DEGENERATE_THRESHOLD = 10

# One segment per degree gives sub-pixel chord error for radii under ~1000px.
_ELLIPSE_SEGMENTS = 360


class RenderTarget:
    """Disposable RGBA drawing target, same size as the surface being classified."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.image = Image.new("RGBA", (width, height), _TRANSPARENT)
        self.draw = ImageDraw.Draw(self.image)

    def clear(self) -> None:
        self.draw.rectangle([0, 0, self.width, self.height], fill=_TRANSPARENT)

    def to_mask(self) -> PixelMask:
        return mask_from_image(self.image)

    def stroke_rectangle(self, x0: int, y0: int, x1: int, y1: int, stroke_width: int) -> None:
        """Closed axis-aligned outline, stroke centred on the path, mitred corners."""
        half = stroke_width // 2
        self.draw.rectangle([x0 - half, y0 - half, x1 + half, y1 + half], fill=_INK)
        # Knock out the interior; a box thinner than the stroke stays solid
        ix0, iy0, ix1, iy1 = x0 + half + 1, y0 + half + 1, x1 - half - 1, y1 - half - 1
        if ix0 <= ix1 and iy0 <= iy1:
            self.draw.rectangle(
                [ix0, iy0, ix1, iy1],
                fill=_TRANSPARENT,
            )

    def stroke_ellipse(
        self,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        stroke_width: int,
        segments: int = _ELLIPSE_SEGMENTS,
    ) -> None:
        """Full revolution of an axis-aligned ellipse, stroke centred on the path."""
        theta = np.linspace(0.0, 2.0 * math.pi, segments + 1)
        xs = cx + rx * np.cos(theta)
        ys = cy + ry * np.sin(theta)
        points = list(zip(xs.tolist(), ys.tolist()))
        self.draw.line(points, fill=_INK, width=stroke_width, joint="curve")

    def stroke_segment(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        stroke_width: int,
    ) -> None:
        """Straight segment with round caps, so both endpoints are always covered."""
        self.draw.line([(x0, y0), (x1, y1)], fill=_INK, width=stroke_width)
        r = stroke_width // 2
        for x, y in ((x0, y0), (x1, y1)):
            self.draw.ellipse([x - r, y - r, x + r, y + r], fill=_INK)


def render_references(
    corners: CornerSet,
    width: int,
    height: int,
    stroke_width: int = DEFAULT_STROKE_WIDTH,
    degenerate_threshold: int = DEFAULT_DEGENERATE_THRESHOLD,
    ellipse_segments: int = _ELLIPSE_SEGMENTS,
) -> dict[str, PixelMask]:
    """Render the square, ellipse and line candidates for a stroke.

    Args:
        corners: Extremal ink pixels of the user's stroke.
        width: Surface width; every candidate has this width.
        height: Surface height; every candidate has this height.
        stroke_width: Outline thickness in pixels.
        degenerate_threshold: Bounds narrower or shorter than this replace the
            square and ellipse candidates with blank masks.
        ellipse_segments: Polyline resolution of the ellipse.

    Returns:
        ``{"square": ..., "ellipse": ..., "line": ...}`` in that order.
    """
    left, top, right, bottom = (
        corners.leftmost,
        corners.topmost,
        corners.rightmost,
        corners.bottommost,
    )
    bounds = compute_bounds(corners)
    degenerate = bounds.is_degenerate(degenerate_threshold)
    target = RenderTarget(width, height)

    if degenerate:
        square = blank_mask(width, height)
        ellipse = blank_mask(width, height)
    else:
        target.stroke_rectangle(left.x, top.y, right.x, bottom.y, stroke_width)
        square = target.to_mask()

        target.clear()
        target.stroke_ellipse(
            (left.x + right.x) / 2,
            (top.y + bottom.y) / 2,
            (right.x - left.x) / 2,
            (bottom.y - top.y) / 2,
            stroke_width,
            segments=ellipse_segments,
        )
        ellipse = target.to_mask()
        target.clear()

    # The line runs between the raw leftmost and rightmost anchors, not the box
    target.stroke_segment(left.x, left.y, right.x, right.y, stroke_width)
    line = target.to_mask()

    return {"square": square, "ellipse": ellipse, "line": line}


def mask_to_halfblock(mask: PixelMask, max_cols: int = 80) -> str:
    """Render a mask as Unicode half-block text, downsampled to ``max_cols`` columns.

    Each output character covers 2 vertical cells:
    - █ both filled, ▀ top only, ▄ bottom only, space neither.
    """
    if mask.size == 0:
        return ""
    rows, cols = mask.shape
    step = max(1, math.ceil(cols / max_cols))
    grid: NDArray[np.bool_] = _downsample_any(mask, step)

    rows, cols = grid.shape
    lines = []
    for r in range(0, rows, 2):
        line_chars = []
        for c in range(cols):
            top = grid[r, c]
            bottom = grid[r + 1, c] if r + 1 < rows else False
            if top and bottom:
                line_chars.append("█")
            elif top:
                line_chars.append("▀")
            elif bottom:
                line_chars.append("▄")
            else:
                line_chars.append(" ")
        lines.append("".join(line_chars).rstrip())
    return "\n".join(lines)


def _downsample_any(mask: PixelMask, step: int) -> NDArray[np.bool_]:
    """Block-reduce: a cell is set if any pixel in its ``step x step`` block is set."""
    if step == 1:
        return np.asarray(mask)
    rows, cols = mask.shape
    pad_r = (-rows) % step
    pad_c = (-cols) % step
    padded = np.pad(mask, ((0, pad_r), (0, pad_c)), mode="constant", constant_values=False)
    r2, c2 = padded.shape
    return padded.reshape(r2 // step, step, c2 // step, step).any(axis=(1, 3))
