"""S4.01 — Label selection (argmin, square > ellipse > line on ties)."""

from __future__ import annotations

from shapesketch.engine.classifier import select_label
from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.registry import Layer, stage


@stage(
    id="S4.01",
    layer=Layer.CLASSIFICATION,
    dependencies=["S3.01"],
    description="Pick the shape with the lowest error",
)
def label_selection(ctx: ClassificationContext) -> None:
    if ctx.errors is None or not ctx.has_ink:
        return
    ctx.label = select_label(ctx.errors)
