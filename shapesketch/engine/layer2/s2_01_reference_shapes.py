"""S2.01 — Reference shapes.

Square, ellipse and line outlines fitted to the corners, stroked on a
private render target. Degenerate bounds blank the square and ellipse.
"""

from __future__ import annotations

from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.registry import Layer, stage
from shapesketch.utils.rasterizer import render_references


@stage(
    id="S2.01",
    layer=Layer.RENDERING,
    dependencies=["S1.02"],
    description="Render square / ellipse / line reference outlines",
)
def reference_shapes(ctx: ClassificationContext) -> None:
    if ctx.corners is None or ctx.mask is None:
        return
    height, width = ctx.mask.shape
    ctx.candidates = render_references(
        ctx.corners,
        width,
        height,
        stroke_width=ctx.config.stroke_width,
        degenerate_threshold=ctx.config.degenerate_threshold,
        ellipse_segments=ctx.config.ellipse_segments,
    )
