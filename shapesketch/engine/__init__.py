"""shapesketch classification engine."""

from shapesketch.engine.registry import stage, Layer, get_registry
from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.pipeline import Pipeline, create_pipeline
from shapesketch.engine.classifier import classify_context, classify_stroke, select_label

__all__ = [
    "stage",
    "Layer",
    "get_registry",
    "ClassificationContext",
    "Pipeline",
    "create_pipeline",
    "classify_context",
    "classify_stroke",
    "select_label",
]
