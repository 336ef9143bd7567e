"""DrawingSurface — the visible canvas the user draws on.

An owned Pillow RGBA image. Only the session's event handlers write to it;
the classifier reads a copy of its pixels.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw

_TRANSPARENT = (0, 0, 0, 0)


class DrawingSurface:
    """Transparent RGBA canvas with a canvas-2D-style path API."""

    def __init__(
        self,
        width: int,
        height: int,
        line_width: int = 1,
        ink: tuple[int, int, int, int] = (0, 0, 0, 255),
    ) -> None:
        self.line_width = line_width
        self.ink = ink
        self._image = Image.new("RGBA", (width, height), _TRANSPARENT)
        self._draw = ImageDraw.Draw(self._image)
        self._cursor: tuple[float, float] | None = None

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def clear(self) -> None:
        self._draw.rectangle([0, 0, self.width, self.height], fill=_TRANSPARENT)
        self._cursor = None

    def begin_path(self, x: float, y: float) -> None:
        self._cursor = (x, y)

    def line_to(self, x: float, y: float) -> None:
        """Stroke a segment from the current point to ``(x, y)``."""
        if self._cursor is None:
            self._cursor = (x, y)
            return
        self._draw.line([self._cursor, (x, y)], fill=self.ink, width=self.line_width)
        self._cursor = (x, y)

    def fill_rect(self, x: int, y: int, w: int, h: int) -> None:
        if w <= 0 or h <= 0:
            return
        self._draw.rectangle([x, y, x + w - 1, y + h - 1], fill=self.ink)

    def resize(self, width: int, height: int) -> None:
        """Resize the canvas; like an HTML canvas, resizing wipes the drawing."""
        self._image = Image.new("RGBA", (width, height), _TRANSPARENT)
        self._draw = ImageDraw.Draw(self._image)
        self._cursor = None

    def rgba(self) -> NDArray[np.uint8]:
        """Copy of the pixels as an ``H x W x 4`` uint8 array."""
        return np.array(self._image, dtype=np.uint8)
