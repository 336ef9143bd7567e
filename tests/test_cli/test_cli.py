"""Tests for the command-line entry point."""

import json

import pytest
from PIL import Image

from shapesketch.cli import main
from tests.conftest import blank, diagonal_line, square_outline


def _save(tmp_path, rgba, name="stroke.png"):
    path = tmp_path / name
    Image.fromarray(rgba).save(path)
    return str(path)


def test_prints_label(tmp_path, capsys):
    assert main([_save(tmp_path, square_outline())]) == 0
    assert capsys.readouterr().out.strip() == "square"


def test_blank_image(tmp_path, capsys):
    assert main([_save(tmp_path, blank())]) == 0
    assert capsys.readouterr().out.strip() == "no shape"


def test_json_output(tmp_path, capsys):
    assert main([_save(tmp_path, diagonal_line()), "--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["label"] == "line"
    assert out["width"] == 220
    assert out["bounds"]["width"] > 100


def test_preview(tmp_path, capsys):
    assert main([_save(tmp_path, square_outline()), "--preview"]) == 0
    out = capsys.readouterr().out
    assert "█" in out or "▀" in out or "▄" in out
    assert out.strip().endswith("square")


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.png")]) == 1
    assert "Cannot read image" in capsys.readouterr().err


def test_usage_error():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2
