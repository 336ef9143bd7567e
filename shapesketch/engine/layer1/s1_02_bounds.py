"""S1.02 — Bounding envelope + degenerate-size check."""

from __future__ import annotations

from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.registry import Layer, stage
from shapesketch.utils.bounds import compute_bounds


@stage(
    id="S1.02",
    layer=Layer.BOUNDS,
    dependencies=["S1.01"],
    description="Derive bounds and flag strokes too small for square/ellipse",
)
def bounds(ctx: ClassificationContext) -> None:
    if ctx.corners is None:
        return
    ctx.bounds = compute_bounds(ctx.corners)
    ctx.degenerate = ctx.bounds.is_degenerate(ctx.config.degenerate_threshold)
