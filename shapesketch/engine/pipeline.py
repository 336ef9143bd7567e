"""Pipeline orchestrator — runs stages in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Generator
from typing import Any

from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.registry import Layer, StageRegistry, get_registry

logger = logging.getLogger(__name__)

_STAGE_PACKAGES = ["layer0", "layer1", "layer2", "layer3", "layer4"]


def register_stages() -> None:
    """Import all stage modules so @stage decorators fire.

    Safe to call repeatedly: modules are only executed on first import.
    """
    for layer_name in _STAGE_PACKAGES:
        package_name = f"shapesketch.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


class Pipeline:
    """Orchestrates the classification stages."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
    ) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: ClassificationContext) -> ClassificationContext:
        """Run every registered stage on the given context."""
        start = time.perf_counter()
        ordered = self.registry.resolve_order()

        logger.debug("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_stages.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.stage_errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages in %.0fms, label=%s",
            len(ctx.completed_stages),
            len(ordered),
            total,
            ctx.label,
        )
        return ctx

    def run_streaming(self, ctx: ClassificationContext) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding a progress dict before and after each stage.

        The caller's ``ctx`` is mutated in-place, so after the generator is
        exhausted the context contains all results (same as ``run()``).
        """
        ordered = self.registry.resolve_order()
        total = len(ordered)

        for i, spec in enumerate(ordered):
            yield {
                "stage_id": spec.id,
                "description": spec.description,
                "layer": spec.layer.name,
                "index": i,
                "total": total,
                "elapsed_ms": 0.0,
                "status": "running",
                "error": "",
            }

            t0 = time.perf_counter()
            status = "ok"
            error = ""
            try:
                spec.fn(ctx)
                ctx.completed_stages.add(spec.id)
            except Exception as e:
                ctx.stage_errors[spec.id] = str(e)
                status = "error"
                error = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

            yield {
                "stage_id": spec.id,
                "description": spec.description,
                "layer": spec.layer.name,
                "index": i,
                "total": total,
                "elapsed_ms": round((time.perf_counter() - t0) * 1000, 1),
                "status": status,
                "error": error,
            }

    def run_layer(self, ctx: ClassificationContext, layer: Layer) -> ClassificationContext:
        """Run only stages in a specific layer."""
        specs = self.registry.get_layer(layer)
        for spec in specs:
            try:
                spec.fn(ctx)
                ctx.completed_stages.add(spec.id)
            except Exception as e:
                ctx.stage_errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx


def create_pipeline() -> Pipeline:
    """Factory function for creating a pipeline over the global stage registry."""
    register_stages()
    return Pipeline()
