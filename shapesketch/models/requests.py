"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class ClassifyRequest(BaseModel):
    width: int | None = Field(default=None, ge=1, description="Surface width (required with rgba)")
    height: int | None = Field(default=None, ge=1, description="Surface height (required with rgba)")
    rgba: str | None = Field(
        default=None,
        description="Base64 row-major RGBA buffer, 4 bytes per pixel",
    )
    image: str | None = Field(
        default=None,
        description="Base64 PNG or data: URL (e.g. canvas.toDataURL())",
    )
    include_candidates: bool = Field(
        default=False,
        description="Return the reference outlines as PNG data URLs",
    )

    @model_validator(mode="after")
    def _one_source(self) -> "ClassifyRequest":
        if (self.rgba is None) == (self.image is None):
            raise ValueError("Provide exactly one of 'rgba' or 'image'")
        if self.rgba is not None and (self.width is None or self.height is None):
            raise ValueError("'width' and 'height' are required with 'rgba'")
        return self
