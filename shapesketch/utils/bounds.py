"""Bounding geometry — extremal ink pixels and the envelope they span."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import numpy as np

from shapesketch.utils.pixel_mask import PixelMask

CORNER_NAMES = ("leftmost", "topmost", "rightmost", "bottommost")


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class CornerSet:
    """The first ink pixel (row-major) reaching each extremal coordinate.

    These are anchors, not rectangle corners: ``leftmost`` carries the row it
    was found on, which the line reference uses directly.
    """

    leftmost: Point
    topmost: Point
    rightmost: Point
    bottommost: Point

    def items(self) -> Iterator[tuple[str, Point]]:
        for name in CORNER_NAMES:
            yield name, getattr(self, name)

    def as_dict(self) -> dict[str, dict[str, int]]:
        return {name: {"x": p.x, "y": p.y} for name, p in self.items()}


@dataclass(frozen=True)
class Bounds:
    x_min: int
    y_min: int
    width: int
    height: int

    def is_degenerate(self, threshold: int) -> bool:
        return self.width < threshold or self.height < threshold

    def as_dict(self) -> dict[str, int]:
        return {
            "x_min": self.x_min,
            "y_min": self.y_min,
            "width": self.width,
            "height": self.height,
        }


CornerCallback = Callable[[str, Point], None]


def extract_corners(
    mask: PixelMask,
    legacy_sentinel: bool = False,
    on_corner: Optional[CornerCallback] = None,
) -> CornerSet | None:
    """Scan ``mask`` row-major for the four extremal ink pixels.

    Each extremum only moves on strict improvement, so among equal
    coordinates the first pixel in scan order wins.

    Args:
        mask: Ink mask to scan.
        legacy_sentinel: Zero-sentinel extrema tracking, kept for compatibility:
            every extremum starts at 0 and ``0`` also means "unset" for the
            minima. A genuine column/row 0 then never sticks as a minimum, and
            ink confined to column/row 0 never registers as a maximum (the
            point stays at ``(0, 0)``).
        on_corner: Called with ``(name, point)`` for each resulting corner,
            e.g. to draw debug markers.

    Returns:
        The CornerSet, or None when the mask holds no ink.
    """
    if mask.size == 0 or not mask.any():
        return None

    rows, cols = np.nonzero(mask)  # row-major order
    if legacy_sentinel:
        corners = _scan_legacy(rows, cols)
    else:
        corners = _scan(rows, cols)

    if on_corner is not None:
        for name, point in corners.items():
            on_corner(name, point)
    return corners


def _scan(rows: np.ndarray, cols: np.ndarray) -> CornerSet:
    # np.argmin/argmax return the first occurrence, which is the first pixel
    # in row-major order achieving the extremum.
    i_left = int(np.argmin(cols))
    i_top = int(np.argmin(rows))
    i_right = int(np.argmax(cols))
    i_bottom = int(np.argmax(rows))

    def _pt(i: int) -> Point:
        return Point(int(cols[i]), int(rows[i]))

    return CornerSet(
        leftmost=_pt(i_left),
        topmost=_pt(i_top),
        rightmost=_pt(i_right),
        bottommost=_pt(i_bottom),
    )


def _scan_legacy(rows: np.ndarray, cols: np.ndarray) -> CornerSet:
    x_min = y_min = x_max = y_max = 0
    origin = Point(0, 0)
    left = top = right = bottom = origin

    for r, c in zip(rows.tolist(), cols.tolist()):
        if x_min == 0 or c < x_min:
            x_min = c
            left = Point(c, r)
        if y_min == 0 or r < y_min:
            y_min = r
            top = Point(c, r)
        if c > x_max:
            x_max = c
            right = Point(c, r)
        if r > y_max:
            y_max = r
            bottom = Point(c, r)

    return CornerSet(leftmost=left, topmost=top, rightmost=right, bottommost=bottom)


def compute_bounds(corners: CornerSet) -> Bounds:
    """Axis-aligned envelope spanned by the corner anchors."""
    return Bounds(
        x_min=corners.leftmost.x,
        y_min=corners.topmost.y,
        width=corners.rightmost.x - corners.leftmost.x,
        height=corners.bottommost.y - corners.topmost.y,
    )
