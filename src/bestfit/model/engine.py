"""
Regression Engine
=================
The single source of truth for the point set and the rendering mode.

Why is this file needed?
------------------------
1. State Management: It owns the points, the mode and the canvas size.
2. Notification: It pushes lifecycle events (`RenderEvent`) to every
   registered renderer, synchronously and in registration order.
3. Derivation: The best-fit line is computed from the current points on
   every request; nothing derived is cached.

Renderers are observers with optional handlers named after the events
(`redraw`, `clear`, `regenerate`). A renderer without a handler for an event
simply does not hear it.
"""
from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QObject, Signal

from bestfit.config import DEFAULT_BATCH_SIZE, DEFAULT_HEIGHT, DEFAULT_WIDTH, EngineConfig
from bestfit.model.exceptions import InvalidModeError
from bestfit.model.point import Point, random_color
from bestfit.model.regression import BestFitLine, fit_line

if TYPE_CHECKING:
    from bestfit.view.renderers.base import Renderer

logger = logging.getLogger(__name__)


class RenderEvent(StrEnum):
    """Events broadcast to renderers. The value is the handler name."""
    REDRAW = "redraw"
    CLEAR = "clear"
    REGENERATE = "regenerate"


class RenderMode(StrEnum):
    COLORED = "colored"
    WIREFRAME = "wireframe"


class RegressionEngine(QObject):
    """
    Owns the point set and notifies renderers when it changes.

    Only `add_point`, `clear`, `generate` and `set_mode` broadcast.
    `append_point` and `generate_random_points` mutate silently so that
    callers can batch work and decide how to notify.
    """
    # Emitted once per broadcast, after every renderer has handled it
    event_broadcast = Signal(str)

    def __init__(
        self,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        rng: np.random.Generator | None = None,
        populate: bool = True,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        # Validates the size arguments
        self._config = EngineConfig(width=float(width), height=float(height), batch_size=batch_size)
        self._rng = rng if rng is not None else np.random.default_rng()

        self._points: list[Point] = []
        self._mode = RenderMode.COLORED
        self._renderers: list[Renderer] = []

        if populate:
            self.generate_random_points()

    @classmethod
    def from_config(cls, config: EngineConfig, **kwargs: Any) -> RegressionEngine:
        return cls(config.width, config.height, batch_size=config.batch_size, **kwargs)

    # ------------------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------------------

    @property
    def width(self) -> float:
        return self._config.width

    @property
    def height(self) -> float:
        return self._config.height

    @property
    def batch_size(self) -> int:
        return self._config.batch_size

    @property
    def mode(self) -> RenderMode:
        return self._mode

    @property
    def points(self) -> tuple[Point, ...]:
        """Snapshot of the points in insertion order."""
        return tuple(self._points)

    @property
    def last_point(self) -> Point | None:
        return self._points[-1] if self._points else None

    @property
    def renderers(self) -> tuple[Renderer, ...]:
        return tuple(self._renderers)

    def __len__(self) -> int:
        return len(self._points)

    def has_best_fit_line(self) -> bool:
        """True when enough points exist for a line to be requested."""
        return len(self._points) >= 2

    # ------------------------------------------------------------------------------
    # Renderer registry
    # ------------------------------------------------------------------------------

    def register_renderer(self, renderer: Renderer) -> None:
        """Add a renderer; it is notified after all previously registered ones."""
        if any(r is renderer for r in self._renderers):
            logger.debug(f"Renderer {renderer!r} is already registered.")
            return
        self._renderers.append(renderer)
        logger.debug(f"Registered renderer {type(renderer).__name__} ({len(self._renderers)} total).")

    def unregister_renderer(self, renderer: Renderer) -> None:
        for i, r in enumerate(self._renderers):
            if r is renderer:
                del self._renderers[i]
                return
        raise ValueError(f"Renderer {renderer!r} is not registered.")

    def iterate(self, event: RenderEvent | str) -> None:
        """
        Invoke the handler for `event` on every renderer, in registration order.

        Renderers lacking the handler are skipped without error.
        """
        event = RenderEvent(event)
        handler_name = event.value
        logger.debug(f"Broadcasting '{handler_name}' to {len(self._renderers)} renderer(s).")
        # Copy so that a handler (un)registering renderers does not disturb this pass
        for renderer in list(self._renderers):
            handler = getattr(renderer, handler_name, None)
            if callable(handler):
                handler()
        self.event_broadcast.emit(handler_name)

    # ------------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------------

    def append_point(self, x: float, y: float) -> Point:
        """Append one point with a random color, without notifying anyone."""
        point = Point(float(x), float(y), random_color(self._rng))
        self._points.append(point)
        return point

    def generate_random_points(self) -> tuple[Point, ...]:
        """Append a batch of uniformly distributed points, without notifying."""
        xs = self._rng.uniform(0.0, self.width, self.batch_size)
        ys = self._rng.uniform(0.0, self.height, self.batch_size)
        for x, y in zip(xs, ys):
            self.append_point(x, y)
        return self.points

    def add_point(self, x: float, y: float) -> Point:
        """Append one point and broadcast `redraw`."""
        point = self.append_point(x, y)
        self.iterate(RenderEvent.REDRAW)
        return point

    def clear(self) -> None:
        """Remove every point and broadcast `clear`."""
        self._points.clear()
        logger.info("Point set cleared.")
        self.iterate(RenderEvent.CLEAR)

    def generate(self) -> tuple[Point, ...]:
        """Append a random batch and broadcast `regenerate`."""
        points = self.generate_random_points()
        logger.info(f"Generated {self.batch_size} points ({len(points)} total).")
        self.iterate(RenderEvent.REGENERATE)
        return points

    def set_mode(self, mode: RenderMode | str) -> None:
        """
        Switch the rendering mode, then broadcast `clear` followed by `regenerate`.

        Raises:
            InvalidModeError: `mode` is not one of the RenderMode values.
        """
        try:
            mode = RenderMode(mode)
        except ValueError:
            raise InvalidModeError(
                f"Unknown mode {mode!r}; expected one of {[m.value for m in RenderMode]}."
            ) from None

        self._mode = mode
        logger.info(f"Render mode set to '{mode.value}'.")
        self.iterate(RenderEvent.CLEAR)
        self.iterate(RenderEvent.REGENERATE)

    # ------------------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------------------

    def compute_best_fit_line(self) -> BestFitLine:
        """
        Least-squares line over the current points, spanning x = 0..width.

        Callers check `has_best_fit_line()` first.

        Raises:
            DegenerateInputError: fewer than 2 points or all x identical.
        """
        return fit_line(self._points, self.width)
