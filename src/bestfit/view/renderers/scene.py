"""
Retained-Scene Renderer
Draws the engine state as QGraphicsScene items and keeps handles to them,
so a single added point costs one new item plus a replaced line.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QBrush, QColor, QPainter, QPen
from PySide6.QtWidgets import (
    QFrame, QGraphicsEllipseItem, QGraphicsLineItem, QGraphicsRectItem, QGraphicsScene,
    QGraphicsView, QWidget,
)

from bestfit.config import AXIS_COLOR, AXIS_INSET, BACKGROUND_COLOR, BEST_FIT_COLOR, POINT_RADIUS
from bestfit.view.renderers.base import (
    DragFilter, DragToAdd, best_fit_or_none, line_pen, point_brush, point_pen,
)

if TYPE_CHECKING:
    from bestfit.model.engine import RegressionEngine
    from bestfit.model.point import Point

logger = logging.getLogger(__name__)

# stacking order of the primitives
Z_BACKGROUND = -10.0
Z_AXES = -5.0
Z_POINTS = 0.0
Z_LINE = 5.0


class SceneView(QGraphicsView):
    """Fixed-size, non-scrolling view whose viewport pixels equal scene units."""
    def __init__(self, scene: QGraphicsScene, parent: QWidget | None = None) -> None:
        super().__init__(scene, parent)
        self.setRenderHints(self.renderHints() | QPainter.RenderHint.Antialiasing)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        rect = scene.sceneRect()
        self.setFixedSize(int(rect.width()), int(rect.height()))


class SceneRenderer:
    """
    Retained-scene renderer.

    On `redraw` only the newest point is added and the line is swapped.
    On `regenerate` and `clear` the whole scene is rebuilt; the background
    rect, which gives the empty surface something to press on, is restored
    after every full clear.
    """
    supports_incremental_redraw = True

    def __init__(
        self,
        engine: RegressionEngine,
        drag: DragToAdd | None = None,
        parent: QWidget | None = None,
    ) -> None:
        self.engine = engine
        self.drag = drag if drag is not None else DragToAdd(engine)

        self.scene = QGraphicsScene(QRectF(0.0, 0.0, engine.width, engine.height))
        self.view = SceneView(self.scene, parent)
        self.scene.setParent(self.view)

        # item handles
        self.background_item: QGraphicsRectItem | None = None
        self.axis_items: list[QGraphicsLineItem] = []
        self.point_items: list[QGraphicsEllipseItem] = []
        self.line_item: QGraphicsLineItem | None = None

        self._drag_filter: DragFilter | None = None

        self.init()

    @property
    def widget(self) -> QWidget:
        return self.view

    # ------------------------------------------------------------------------------
    # Renderer contract
    # ------------------------------------------------------------------------------

    def init(self) -> None:
        self.render()
        self._install_listeners()

    def render(self) -> None:
        self.clear()
        for point in self.engine.points:
            self._draw_point(point)
        self._draw_line()
        logger.debug(f"Scene rebuilt with {len(self.point_items)} point items.")

    def redraw(self) -> None:
        point = self.engine.last_point
        if point is not None:
            self._draw_point(point)
        self._draw_line()

    def regenerate(self) -> None:
        self.render()

    def clear(self) -> None:
        # QGraphicsScene.clear() deletes the C++ items; drop the stale wrappers
        self.scene.clear()
        self.background_item = None
        self.axis_items = []
        self.point_items = []
        self.line_item = None

        self._draw_background()
        self._draw_axes()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _install_listeners(self) -> None:
        self._drag_filter = DragFilter(self.drag, parent=self.view)
        self.view.viewport().installEventFilter(self._drag_filter)

    def _draw_background(self) -> None:
        item = self.scene.addRect(
            self.scene.sceneRect(),
            QPen(Qt.PenStyle.NoPen),
            QBrush(QColor(BACKGROUND_COLOR)),
        )
        item.setZValue(Z_BACKGROUND)
        self.background_item = item

    def _draw_axes(self) -> None:
        w, h = self.engine.width, self.engine.height
        pen = QPen(QColor(AXIS_COLOR), 1)
        # y axis along the left edge, x axis along the bottom edge
        y_axis = self.scene.addLine(AXIS_INSET, 0.0, AXIS_INSET, h - AXIS_INSET, pen)
        x_axis = self.scene.addLine(AXIS_INSET, h - AXIS_INSET, w, h - AXIS_INSET, pen)
        for item in (y_axis, x_axis):
            item.setZValue(Z_AXES)
        self.axis_items = [y_axis, x_axis]

    def _draw_point(self, point: Point) -> QGraphicsEllipseItem:
        r = POINT_RADIUS
        mode = self.engine.mode
        item = self.scene.addEllipse(
            point.x - r, point.y - r, 2 * r, 2 * r,
            point_pen(point, mode),
            point_brush(point, mode),
        )
        item.setZValue(Z_POINTS)
        self.point_items.append(item)
        return item

    def _draw_line(self) -> None:
        if self.line_item is not None:
            self.scene.removeItem(self.line_item)
            self.line_item = None

        line = best_fit_or_none(self.engine)
        if line is None:
            return
        item = self.scene.addLine(
            line.start.x, line.start.y, line.end.x, line.end.y, line_pen(BEST_FIT_COLOR),
        )
        item.setZValue(Z_LINE)
        self.line_item = item
