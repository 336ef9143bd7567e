"""DrawingSession — pointer / keyboard handling around one drawing surface.

Events are handled one at a time on the caller's thread. ``is_drawing`` is
owned by the session and only changes inside these handlers.
"""

from __future__ import annotations

import logging

from shapesketch.canvas.surface import DrawingSurface
from shapesketch.engine.classifier import classify_context
from shapesketch.engine.config import ClassifierConfig
from shapesketch.engine.context import ClassificationContext

logger = logging.getLogger(__name__)

MAC_PLATFORMS = ("MacIntel", "MacPPC", "Mac68K")
UNDO_KEY = "z"


class DrawingSession:
    """Turns raw UI events into strokes and classifies each finished stroke."""

    def __init__(
        self,
        surface: DrawingSurface | None,
        max_width: int = 1000,
        max_height: int = 800,
        config: ClassifierConfig | None = None,
        mark_corners: bool = True,
        marker_size: int = 5,
    ) -> None:
        self.surface = surface
        self.max_width = max_width
        self.max_height = max_height
        self.config = config or ClassifierConfig()
        self.mark_corners = mark_corners
        self.marker_size = marker_size

        self.is_drawing = False
        self.shape_label = ""
        self.last_result: ClassificationContext | None = None

    @classmethod
    def from_settings(cls, settings) -> "DrawingSession":
        surface = DrawingSurface(settings.max_width, settings.max_height)
        return cls(
            surface,
            max_width=settings.max_width,
            max_height=settings.max_height,
            config=ClassifierConfig.from_settings(settings),
            mark_corners=settings.mark_corners,
            marker_size=settings.corner_marker_size,
        )

    @property
    def label_text(self) -> str:
        return f"This is a {self.shape_label}" if self.shape_label else ""

    def resize(self, window_width: int, window_height: int) -> None:
        """Fit the surface to the window, never beyond the configured maximum."""
        if self.surface is None:
            return
        width = min(window_width, self.max_width)
        height = min(window_height, self.max_height)
        self.surface.resize(width, height)

    def pointer_down(self, x: float, y: float) -> None:
        if self.surface is None:
            return
        self.surface.clear()
        self.is_drawing = True
        self.surface.begin_path(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        if self.surface is None or not self.is_drawing:
            return
        self.surface.line_to(x, y)

    def pointer_up(self, x: float | None = None, y: float | None = None) -> str | None:
        """Finish the stroke and classify it.

        Returns:
            The label, or None when the surface held no ink.
        """
        if self.surface is None:
            return None

        ctx = classify_context(self.surface.rgba(), config=self.config)
        self.last_result = ctx
        self.shape_label = ctx.label or ""
        logger.info("Stroke classified as %s", ctx.label)

        # Markers go on after the pixels were read, so they never feed back in
        if self.mark_corners and ctx.corners is not None:
            for _, point in ctx.corners.items():
                self.surface.fill_rect(point.x, point.y, self.marker_size, self.marker_size)

        self.is_drawing = False
        return ctx.label

    def key_down(
        self,
        key: str,
        ctrl: bool = False,
        meta: bool = False,
        platform: str = "",
    ) -> bool:
        """Clear the surface on Ctrl+Z (Cmd+Z on Mac). Returns True if cleared."""
        if self.surface is None or key != UNDO_KEY:
            return False
        modifier = meta if platform in MAC_PLATFORMS else ctrl
        if not modifier:
            return False
        self.surface.clear()
        return True
