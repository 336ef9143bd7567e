"""S0.01 — Pixel mask extraction.

Ink iff R + G + B + A > 0. A missing surface yields an empty mask.
"""

from __future__ import annotations

from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.registry import Layer, stage
from shapesketch.utils.pixel_mask import mask_from_rgba


@stage(
    id="S0.01",
    layer=Layer.EXTRACTION,
    description="Extract binary ink mask from the RGBA surface",
)
def pixel_mask(ctx: ClassificationContext) -> None:
    if ctx.surface is None:
        ctx.mask = mask_from_rgba(None)
        return
    ctx.mask = mask_from_rgba(ctx.surface, ctx.width, ctx.height)
