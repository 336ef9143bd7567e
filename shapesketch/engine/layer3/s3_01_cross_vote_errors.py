"""S3.01 — Cross-vote disagreement scores."""

from __future__ import annotations

from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.registry import Layer, stage
from shapesketch.utils.scoring import compute_errors


@stage(
    id="S3.01",
    layer=Layer.SCORING,
    dependencies=["S2.01"],
    description="Score each shape by ink overlapping the other outlines",
)
def cross_vote_errors(ctx: ClassificationContext) -> None:
    if not ctx.candidates or ctx.mask is None:
        return
    ctx.errors = compute_errors(ctx.mask, ctx.candidates)
