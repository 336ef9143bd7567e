"""FastAPI dependency injection."""

from __future__ import annotations

from shapesketch.config import Settings, settings
from shapesketch.engine.config import ClassifierConfig


def get_settings() -> Settings:
    return settings


def get_classifier_config() -> ClassifierConfig:
    return ClassifierConfig.from_settings(settings)
