"""
Renderer Contract
=================
What the engine expects from an observer, and the pieces every concrete
renderer shares (drag-to-add, color policy).

A renderer is anything with the attributes of `Renderer`. Handlers are looked
up by event name at broadcast time, so a renderer may implement a subset.

`supports_incremental_redraw` documents which `redraw` contract the renderer
fulfils:

    True  -> retained scene: draw only `engine.last_point`, replace the line.
    False -> immediate mode: wipe the surface and repaint everything.
"""
from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable, TYPE_CHECKING

from PySide6.QtCore import QEvent, QObject, QPoint, Qt
from PySide6.QtGui import QBrush, QColor, QMouseEvent, QPen

from bestfit.config import LINE_WIDTH, OUTLINE_COLOR
from bestfit.model.engine import RenderMode
from bestfit.model.exceptions import DegenerateInputError

if TYPE_CHECKING:
    from bestfit.model.engine import RegressionEngine
    from bestfit.model.point import Point
    from bestfit.model.regression import BestFitLine

logger = logging.getLogger(__name__)


@runtime_checkable
class Renderer(Protocol):
    supports_incremental_redraw: bool

    def init(self) -> None: ...
    def render(self) -> None: ...
    def redraw(self) -> None: ...
    def regenerate(self) -> None: ...
    def clear(self) -> None: ...


# ------------------------------------------------------------------------------
# Drag to add
# ------------------------------------------------------------------------------

class DragToAdd:
    """
    Turns pointer positions into `engine.add_point` calls while enabled.

    Positions arrive in global (page) coordinates together with the global
    position of the drawing surface's top-left corner, so the added point
    does not depend on where the surface sits on screen.
    """
    def __init__(self, engine: RegressionEngine, enabled: bool = False) -> None:
        self.engine = engine
        self.enabled = enabled

    def forward(self, page_x: float, page_y: float, origin_x: float, origin_y: float) -> Point | None:
        if not self.enabled:
            return None
        return self.engine.add_point(page_x - origin_x, page_y - origin_y)


class DragFilter(QObject):
    """
    Qt event filter feeding mouse press/drag events on a surface into DragToAdd.

    Install it on the widget that receives the mouse events (for a
    QGraphicsView that is its viewport).
    """
    def __init__(self, drag: DragToAdd, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.drag = drag

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        etype = event.type()
        if etype == QEvent.Type.MouseButtonPress:
            pressed = event.button() == Qt.MouseButton.LeftButton
        elif etype == QEvent.Type.MouseMove:
            pressed = bool(event.buttons() & Qt.MouseButton.LeftButton)
        else:
            return False

        if not pressed or not self.drag.enabled:
            return False

        # Presses that add nothing (e.g. on plot axes) reach the widget as usual
        return self.forward_mouse_event(watched, event) is not None

    def forward_mouse_event(self, surface: QObject, event: QMouseEvent) -> Point | None:
        glob = event.globalPosition()
        origin = surface.mapToGlobal(QPoint(0, 0))
        return self.drag.forward(glob.x(), glob.y(), origin.x(), origin.y())


# ------------------------------------------------------------------------------
# Shared drawing helpers
# ------------------------------------------------------------------------------

def point_brush(point: Point, mode: RenderMode) -> QBrush:
    """Own color when colored; no fill in wireframe mode."""
    if mode == RenderMode.COLORED:
        return QBrush(QColor(point.hex_color))
    return QBrush(Qt.BrushStyle.NoBrush)


def point_pen(point: Point, mode: RenderMode) -> QPen:
    if mode == RenderMode.COLORED:
        return QPen(QColor(point.hex_color), 1)
    return QPen(QColor(OUTLINE_COLOR), 1)


def line_pen(color: str) -> QPen:
    pen = QPen(QColor(color))
    pen.setWidthF(LINE_WIDTH)
    return pen


def best_fit_or_none(engine: RegressionEngine) -> BestFitLine | None:
    """The engine's line, or None when there is nothing to draw."""
    if not engine.has_best_fit_line():
        return None
    try:
        return engine.compute_best_fit_line()
    except DegenerateInputError as e:
        logger.debug(f"Skipping best-fit line: {e}")
        return None
