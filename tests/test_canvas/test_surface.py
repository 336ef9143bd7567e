"""Tests for the drawing surface."""

from shapesketch.canvas.surface import DrawingSurface


def _ink(surface: DrawingSurface):
    return surface.rgba().sum(axis=2) > 0


def test_new_surface_is_transparent():
    surface = DrawingSurface(30, 20)
    assert surface.rgba().shape == (20, 30, 4)
    assert not _ink(surface).any()


def test_line_to_strokes_from_current_point():
    surface = DrawingSurface(30, 20)
    surface.begin_path(2, 5)
    surface.line_to(20, 5)
    ink = _ink(surface)
    assert ink[5, 2]
    assert ink[5, 20]
    assert not ink[10, 10]


def test_line_to_without_path_only_moves():
    surface = DrawingSurface(30, 20)
    surface.line_to(5, 5)
    assert not _ink(surface).any()


def test_clear_and_fill_rect():
    surface = DrawingSurface(30, 20)
    surface.fill_rect(3, 4, 5, 5)
    ink = _ink(surface)
    assert ink[4:9, 3:8].all()
    assert ink.sum() == 25
    surface.clear()
    assert not _ink(surface).any()


def test_resize_wipes_drawing():
    surface = DrawingSurface(30, 20)
    surface.fill_rect(0, 0, 5, 5)
    surface.resize(40, 10)
    assert (surface.width, surface.height) == (40, 10)
    assert not _ink(surface).any()


def test_rgba_is_a_copy():
    surface = DrawingSurface(10, 10)
    pixels = surface.rgba()
    pixels[:] = 255
    assert not _ink(surface).any()
