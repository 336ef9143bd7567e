"""Shared test fixtures — strokes rendered with Pillow onto transparent canvases."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image, ImageDraw

INK = (0, 0, 0, 255)

# Square / ellipse envelope used by the end-to-end scenarios:
# a 200x200 outline inside a 220x220 canvas.
CANVAS = 220
BOX = (10, 10, 210, 210)
STROKE = 3


def _canvas(width: int, height: int | None = None) -> tuple[Image.Image, ImageDraw.ImageDraw]:
    img = Image.new("RGBA", (width, height or width), (0, 0, 0, 0))
    return img, ImageDraw.Draw(img)


def square_outline(scale: int = 1) -> np.ndarray:
    img, draw = _canvas(CANVAS * scale)
    draw.rectangle([v * scale for v in BOX], outline=INK, width=STROKE * scale)
    return np.array(img)


def ellipse_outline(scale: int = 1) -> np.ndarray:
    img, draw = _canvas(CANVAS * scale)
    draw.ellipse([v * scale for v in BOX], outline=INK, width=STROKE * scale)
    return np.array(img)


def diagonal_line(scale: int = 1) -> np.ndarray:
    img, draw = _canvas(CANVAS * scale)
    draw.line([(10 * scale, 10 * scale), (200 * scale, 200 * scale)], fill=INK, width=STROKE * scale)
    return np.array(img)


def dot(x: int = 50, y: int = 50, size: int = 3) -> np.ndarray:
    img, draw = _canvas(CANVAS)
    draw.rectangle([x, y, x + size - 1, y + size - 1], fill=INK)
    return np.array(img)


def blank(width: int = CANVAS, height: int = CANVAS) -> np.ndarray:
    return np.zeros((height, width, 4), dtype=np.uint8)


def mask_from_points(shape: tuple[int, int], points: list[tuple[int, int]]) -> np.ndarray:
    """Bool mask with the given ``(x, y)`` pixels set."""
    mask = np.zeros(shape, dtype=bool)
    for x, y in points:
        mask[y, x] = True
    return mask


@pytest.fixture
def square_surface() -> np.ndarray:
    return square_outline()


@pytest.fixture
def ellipse_surface() -> np.ndarray:
    return ellipse_outline()


@pytest.fixture
def line_surface() -> np.ndarray:
    return diagonal_line()


@pytest.fixture
def dot_surface() -> np.ndarray:
    return dot()


@pytest.fixture
def blank_surface() -> np.ndarray:
    return blank()
