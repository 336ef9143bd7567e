"""Stage registry — the classification steps, grouped by layer.

A stage is a plain function over the ClassificationContext. Registering one
only takes the decorator:

    @stage(id="S1.01", layer=Layer.BOUNDS, dependencies=["S0.01"])
    def corner_extraction(ctx: ClassificationContext) -> None:
        ctx.corners = extract_corners(ctx.mask)

Layers run in ascending order. A stage may only depend on stages in its own
or an earlier layer.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from shapesketch.engine.context import ClassificationContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    EXTRACTION = 0
    BOUNDS = 1
    RENDERING = 2
    SCORING = 3
    CLASSIFICATION = 4


@dataclass
class StageSpec:
    id: str
    layer: Layer
    fn: Callable[["ClassificationContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Registered stages, keyed by id."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.layer.name)

    def get_layer(self, layer: Layer) -> list[StageSpec]:
        specs = [s for s in self._stages.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def resolve_order(self) -> list[StageSpec]:
        """Execution order: layer by layer, and within a layer by dependency then id.

        Raises:
            ValueError: If a dependency is unknown, lives in a later layer, or
                forms a cycle inside a layer.
        """
        ordered: list[StageSpec] = []
        done: set[str] = set()

        for layer in Layer:
            pending = self.get_layer(layer)
            while pending:
                ready = [s for s in pending if all(d in done for d in s.dependencies)]
                if not ready:
                    blocked = {s.id: [d for d in s.dependencies if d not in done] for s in pending}
                    raise ValueError(f"Unsatisfiable stage dependencies in {layer.name}: {blocked}")
                for spec in ready:
                    ordered.append(spec)
                    done.add(spec.id)
                pending = [s for s in pending if s.id not in done]

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Register the decorated function as a pipeline stage."""

    def decorator(fn: Callable[["ClassificationContext"], None]):
        _registry.register(
            StageSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
