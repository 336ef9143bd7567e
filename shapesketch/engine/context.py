"""ClassificationContext — the single state object flowing through all stages.

Each stage reads what earlier stages produced and fills in its own field.
A context is built per stroke and discarded after classification.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from shapesketch.engine.config import ClassifierConfig
from shapesketch.utils.bounds import Bounds, CornerSet
from shapesketch.utils.pixel_mask import PixelMask, has_ink
from shapesketch.utils.scoring import ErrorScores


@dataclass
class ClassificationContext:
    """Shared state for one classification call."""

    # Source surface: H x W x 4 uint8 RGBA, or None when no render context exists
    surface: NDArray[np.uint8] | None = None
    # Surface dimensions
    width: int = 0
    height: int = 0
    config: ClassifierConfig = field(default_factory=ClassifierConfig)

    # --- Stage outputs ---
    mask: PixelMask | None = None
    corners: CornerSet | None = None
    bounds: Bounds | None = None
    degenerate: bool = False
    candidates: dict[str, PixelMask] = field(default_factory=dict)
    errors: ErrorScores | None = None
    label: str | None = None

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    stage_errors: dict[str, str] = field(default_factory=dict)

    @property
    def has_ink(self) -> bool:
        return self.mask is not None and has_ink(self.mask)

    def summary(self) -> dict[str, Any]:
        """JSON-friendly view of the stage outputs."""
        return {
            "label": self.label,
            "degenerate": self.degenerate,
            "corners": self.corners.as_dict() if self.corners else None,
            "bounds": self.bounds.as_dict() if self.bounds else None,
            "errors": self.errors.as_dict() if self.errors else None,
        }
