"""Tests for cross-vote error scoring."""

import numpy as np
import pytest

from shapesketch.utils.scoring import ErrorScores, compute_errors


def _mask(shape, flat_indices):
    m = np.zeros(shape, dtype=bool)
    m.flat[list(flat_indices)] = True
    return m


def _reference_loop(mask, candidates):
    square = ellipse = line = 0
    rows, cols = mask.shape
    for r in range(rows):
        for c in range(cols):
            if not mask[r, c]:
                continue
            if candidates["line"][r, c]:
                square += 1
                ellipse += 1
            if candidates["ellipse"][r, c]:
                square += 1
                line += 1
            if candidates["square"][r, c]:
                ellipse += 1
                line += 1
    return ErrorScores(square, ellipse, line)


def test_votes_go_to_the_other_two_shapes():
    mask = np.ones((4, 4), dtype=bool)
    candidates = {
        "square": _mask((4, 4), range(5)),
        "ellipse": _mask((4, 4), range(3)),
        "line": _mask((4, 4), range(2)),
    }
    errors = compute_errors(mask, candidates)
    assert errors == ErrorScores(square_error=5, ellipse_error=7, line_error=8)


def test_pixels_without_ink_do_not_vote():
    mask = np.zeros((3, 3), dtype=bool)
    full = np.ones((3, 3), dtype=bool)
    errors = compute_errors(mask, {"square": full, "ellipse": full, "line": full})
    assert errors == ErrorScores(0, 0, 0)


def test_matches_per_pixel_loop():
    rng = np.random.default_rng(7)
    shape = (23, 31)
    mask = rng.random(shape) > 0.5
    candidates = {name: rng.random(shape) > 0.6 for name in ("square", "ellipse", "line")}
    assert compute_errors(mask, candidates) == _reference_loop(mask, candidates)


def test_scores_bounded_by_twice_the_ink():
    rng = np.random.default_rng(11)
    mask = rng.random((10, 10)) > 0.3
    full = np.ones((10, 10), dtype=bool)
    errors = compute_errors(mask, {"square": full, "ellipse": full, "line": full})
    ink = int(mask.sum())
    assert errors == ErrorScores(2 * ink, 2 * ink, 2 * ink)


def test_shape_mismatch_raises():
    mask = np.zeros((3, 3), dtype=bool)
    candidates = {
        "square": np.zeros((3, 3), dtype=bool),
        "ellipse": np.zeros((3, 4), dtype=bool),
        "line": np.zeros((3, 3), dtype=bool),
    }
    with pytest.raises(ValueError):
        compute_errors(mask, candidates)


def test_as_dict_is_in_priority_order():
    assert list(ErrorScores(1, 2, 3).as_dict()) == ["squareError", "ellipseError", "lineError"]
