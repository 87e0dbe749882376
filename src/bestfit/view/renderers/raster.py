"""
Immediate-Mode Raster Renderer
Paints the engine state into a QImage. Nothing drawn is addressable
afterwards, so every change repaints the whole image.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QColor, QImage, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QWidget

from bestfit.config import AXIS_COLOR, AXIS_INSET, BACKGROUND_COLOR, BEST_FIT_COLOR, POINT_RADIUS
from bestfit.view.renderers.base import (
    DragFilter, DragToAdd, best_fit_or_none, line_pen, point_brush, point_pen,
)

if TYPE_CHECKING:
    from bestfit.model.engine import RegressionEngine

logger = logging.getLogger(__name__)


class RasterSurface(QWidget):
    """Widget that only blits the renderer's image."""
    def __init__(self, image: QImage, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.image = image
        self.setFixedSize(image.width(), image.height())

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.drawImage(0, 0, self.image)
        painter.end()


class RasterRenderer:
    """
    Immediate-mode renderer.

    There is no cheaper path than a full repaint: `redraw` and `regenerate`
    both wipe the image and draw axes, every point and the line again.
    """
    supports_incremental_redraw = False

    def __init__(
        self,
        engine: RegressionEngine,
        drag: DragToAdd | None = None,
        parent: QWidget | None = None,
    ) -> None:
        self.engine = engine
        self.drag = drag if drag is not None else DragToAdd(engine)

        self.image = QImage(int(engine.width), int(engine.height), QImage.Format.Format_RGB32)
        self.surface = RasterSurface(self.image, parent)
        self._drag_filter: DragFilter | None = None

        self.init()

    @property
    def widget(self) -> QWidget:
        return self.surface

    # ------------------------------------------------------------------------------
    # Renderer contract
    # ------------------------------------------------------------------------------

    def init(self) -> None:
        self.render()
        self._install_listeners()

    def render(self) -> None:
        self._repaint()

    def redraw(self) -> None:
        self._repaint()

    def regenerate(self) -> None:
        self._repaint()

    def clear(self) -> None:
        painter = self._begin()
        try:
            self._paint_axes(painter)
        finally:
            painter.end()
        self.surface.update()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _install_listeners(self) -> None:
        self._drag_filter = DragFilter(self.drag, parent=self.surface)
        self.surface.installEventFilter(self._drag_filter)

    def _begin(self) -> QPainter:
        """Wipe the image and return a painter on it."""
        self.image.fill(QColor(BACKGROUND_COLOR))
        painter = QPainter(self.image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        return painter

    def _repaint(self) -> None:
        painter = self._begin()
        try:
            self._paint_axes(painter)
            self._paint_points(painter)
            self._paint_line(painter)
        finally:
            painter.end()
        self.surface.update()
        logger.debug(f"Raster repainted with {len(self.engine)} points.")

    def _paint_axes(self, painter: QPainter) -> None:
        w, h = self.engine.width, self.engine.height
        painter.setPen(QPen(QColor(AXIS_COLOR), 1))
        painter.drawLine(QPointF(AXIS_INSET, 0.0), QPointF(AXIS_INSET, h - AXIS_INSET))
        painter.drawLine(QPointF(AXIS_INSET, h - AXIS_INSET), QPointF(w, h - AXIS_INSET))

    def _paint_points(self, painter: QPainter) -> None:
        r = POINT_RADIUS
        mode = self.engine.mode
        for point in self.engine.points:
            painter.setPen(point_pen(point, mode))
            painter.setBrush(point_brush(point, mode))
            painter.drawEllipse(QRectF(point.x - r, point.y - r, 2 * r, 2 * r))

    def _paint_line(self, painter: QPainter) -> None:
        line = best_fit_or_none(self.engine)
        if line is None:
            return
        painter.setPen(line_pen(BEST_FIT_COLOR))
        painter.drawLine(QPointF(line.start.x, line.start.y), QPointF(line.end.x, line.end.y))
