"""Cross-vote disagreement scores between the user mask and the candidates.

Every ink pixel that lands on a candidate outline votes *against* the other
two shapes. A shape therefore scores low when the ink avoids the other
outlines; its own overlap never counts for or against it.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from shapesketch.utils.pixel_mask import PixelMask

SHAPE_LABELS = ("square", "ellipse", "line")

# Score key suffix, stripped when turning a score name into a label
ERROR_SUFFIX = "Error"


@dataclass(frozen=True)
class ErrorScores:
    square_error: int = 0
    ellipse_error: int = 0
    line_error: int = 0

    def as_dict(self) -> dict[str, int]:
        """Score mapping in tie-break priority order."""
        return {
            "squareError": self.square_error,
            "ellipseError": self.ellipse_error,
            "lineError": self.line_error,
        }


def compute_errors(mask: PixelMask, candidates: dict[str, PixelMask]) -> ErrorScores:
    """Score each shape by the ink pixels that fall on the *other* outlines.

    For an ink pixel on the line candidate, square and ellipse gain a vote;
    on the ellipse candidate, square and line; on the square candidate,
    ellipse and line.

    Raises:
        ValueError: If a candidate's shape differs from the mask's.
    """
    for name in SHAPE_LABELS:
        if candidates[name].shape != mask.shape:
            raise ValueError(
                f"Candidate {name!r} has shape {candidates[name].shape}, mask has {mask.shape}"
            )

    on_line = int(np.count_nonzero(mask & candidates["line"]))
    on_ellipse = int(np.count_nonzero(mask & candidates["ellipse"]))
    on_square = int(np.count_nonzero(mask & candidates["square"]))

    return ErrorScores(
        square_error=on_line + on_ellipse,
        ellipse_error=on_line + on_square,
        line_error=on_ellipse + on_square,
    )
