"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class PointModel(BaseModel):
    x: int
    y: int


class CornersModel(BaseModel):
    leftmost: PointModel
    topmost: PointModel
    rightmost: PointModel
    bottommost: PointModel


class BoundsModel(BaseModel):
    x_min: int
    y_min: int
    width: int
    height: int


class ClassifyResponse(BaseModel):
    label: str | None = None
    label_text: str = ""
    width: int = 0
    height: int = 0
    degenerate: bool = False
    errors: dict[str, int] | None = None
    corners: CornersModel | None = None
    bounds: BoundsModel | None = None
    candidates: dict[str, str] | None = None
    processing_time_ms: float = 0.0
    stages_completed: int = 0
    stage_errors: dict[str, str] = Field(default_factory=dict)
