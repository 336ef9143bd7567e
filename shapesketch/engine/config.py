"""Classifier configuration — controls reference rendering and extrema policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapesketch.config import Settings


@dataclass(frozen=True)
class ClassifierConfig:
    """Per-call knobs for the classification pipeline."""

    # Reference outlines are stroked this wide to tolerate hand-drawn wobble
    stroke_width: int = 25

    # Bounds narrower or shorter than this drop the square/ellipse candidates
    degenerate_threshold: int = 10

    # Track extrema with 0 doubling as "unset"
    legacy_sentinel: bool = False

    # Polyline segments used to trace the ellipse outline
    ellipse_segments: int = 360

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ClassifierConfig":
        return cls(
            stroke_width=settings.reference_stroke_width,
            degenerate_threshold=settings.degenerate_size_threshold,
            legacy_sentinel=settings.legacy_sentinel_extrema,
        )
