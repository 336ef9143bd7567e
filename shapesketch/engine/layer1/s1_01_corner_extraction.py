"""S1.01 — Corner extraction.

Leftmost / topmost / rightmost / bottommost ink pixels, first in row-major
scan order on ties.
"""

from __future__ import annotations

from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.registry import Layer, stage
from shapesketch.utils.bounds import extract_corners


@stage(
    id="S1.01",
    layer=Layer.BOUNDS,
    dependencies=["S0.01"],
    description="Find the four extremal ink pixels",
)
def corner_extraction(ctx: ClassificationContext) -> None:
    if not ctx.has_ink:
        return
    ctx.corners = extract_corners(ctx.mask, legacy_sentinel=ctx.config.legacy_sentinel)
