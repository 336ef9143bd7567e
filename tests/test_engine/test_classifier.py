"""End-to-end classification tests."""

import numpy as np
import pytest
from PIL import Image

from shapesketch.engine.classifier import classify_context, classify_stroke, select_label
from shapesketch.engine.config import ClassifierConfig
from shapesketch.utils.pixel_mask import SurfaceError
from shapesketch.utils.scoring import ErrorScores
from tests.conftest import (
    CANVAS,
    INK,
    diagonal_line,
    dot,
    ellipse_outline,
    square_outline,
)


def test_square(square_surface):
    assert classify_stroke(square_surface) == "square"


def test_ellipse(ellipse_surface):
    assert classify_stroke(ellipse_surface) == "ellipse"


def test_diagonal_line(line_surface):
    assert classify_stroke(line_surface) == "line"


def test_small_dot_is_a_line(dot_surface):
    assert classify_stroke(dot_surface) == "line"


def test_blank_surface_has_no_label(blank_surface):
    assert classify_stroke(blank_surface) is None


def test_missing_surface_has_no_label():
    assert classify_stroke(None) is None


@pytest.mark.parametrize(
    "draw, expected",
    [(square_outline, "square"), (ellipse_outline, "ellipse"), (diagonal_line, "line")],
)
def test_scale_invariance(draw, expected):
    assert classify_stroke(draw(scale=1)) == expected
    assert classify_stroke(draw(scale=2)) == expected


def test_identical_buffers_give_identical_results(ellipse_surface):
    a = classify_context(ellipse_surface)
    b = classify_context(ellipse_surface.copy())
    assert a.label == b.label
    assert a.errors == b.errors
    assert a.corners == b.corners


def test_surface_is_not_modified(square_surface):
    before = square_surface.copy()
    classify_stroke(square_surface)
    assert np.array_equal(before, square_surface)


def test_flat_bytes_input(square_surface):
    raw = square_surface.tobytes()
    assert classify_stroke(raw, width=CANVAS, height=CANVAS) == "square"


def test_pillow_image_input(ellipse_surface):
    assert classify_stroke(Image.fromarray(ellipse_surface)) == "ellipse"


def test_malformed_flat_buffer_raises():
    with pytest.raises(SurfaceError):
        classify_stroke(b"\x00" * 10, width=4, height=4)


@pytest.mark.parametrize(
    "box",
    [
        (40, 60, 89, 62),    # short horizontal dash
        (100, 20, 102, 150),  # tall vertical stroke, 3px wide
        (5, 5, 12, 12),      # small square blob
        (150, 150, 150, 150),  # single pixel
    ],
)
def test_degenerate_strokes_are_lines(box):
    img = Image.new("RGBA", (CANVAS, CANVAS), (0, 0, 0, 0))
    img.paste(INK, box=(box[0], box[1], box[2] + 1, box[3] + 1))
    assert classify_stroke(np.array(img)) == "line"


def test_random_small_marks_always_classify_as_line():
    rng = np.random.default_rng(2024)
    for _ in range(25):
        rgba = np.zeros((120, 120, 4), dtype=np.uint8)
        x0, y0 = rng.integers(1, 110, size=2)
        blob = rng.random((9, 9)) > 0.5
        blob[0, 0] = True
        rgba[y0:y0 + 9, x0:x0 + 9, 3] = blob * 255
        ctx = classify_context(rgba)
        assert ctx.degenerate
        assert ctx.errors.line_error == 0
        assert ctx.errors.square_error >= 1
        assert ctx.label == "line"


def test_legacy_sentinel_mode_still_classifies(square_surface):
    config = ClassifierConfig(legacy_sentinel=True)
    assert classify_stroke(square_surface, config=config) == "square"
    assert classify_stroke(dot(), config=config) == "line"


def test_select_label_minimum():
    assert select_label(ErrorScores(9, 3, 7)) == "ellipse"
    assert select_label({"squareError": 9, "ellipseError": 8, "lineError": 2}) == "line"


def test_select_label_ties_follow_priority_order():
    assert select_label(ErrorScores(5, 5, 5)) == "square"
    assert select_label(ErrorScores(6, 5, 5)) == "ellipse"
    assert select_label(ErrorScores(5, 6, 5)) == "square"
    assert select_label(ErrorScores(0, 0, 0)) == "square"


def test_rgb_array_raises():
    rgb = np.zeros((CANVAS, CANVAS, 3), dtype=np.uint8)
    with pytest.raises(SurfaceError, match="4 channels"):
        classify_stroke(rgb)
