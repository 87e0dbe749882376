"""
Plot Renderer
Retained renderer on a pyqtgraph PlotWidget: one ScatterPlotItem holding
every point and one PlotDataItem for the best-fit line. The plot's own axes
are the static decoration and survive `clear`.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pyqtgraph as pg
from PySide6.QtCore import QObject
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QWidget

from bestfit.config import BACKGROUND_COLOR, BEST_FIT_COLOR, LINE_WIDTH, POINT_RADIUS
from bestfit.view.renderers.base import DragFilter, DragToAdd, best_fit_or_none, point_brush, point_pen

if TYPE_CHECKING:
    from bestfit.model.engine import RegressionEngine
    from bestfit.model.point import Point

logger = logging.getLogger(__name__)


class PlotDragFilter(DragFilter):
    """Maps viewport pixels through the view box into data coordinates."""
    def __init__(self, drag: DragToAdd, plot: pg.PlotWidget, parent: QObject | None = None) -> None:
        super().__init__(drag, parent)
        self.plot = plot

    def forward_mouse_event(self, surface: QObject, event: QMouseEvent) -> Point | None:
        view_box = self.plot.getPlotItem().getViewBox()
        scene_pos = self.plot.mapToScene(event.position().toPoint())
        if not view_box.sceneBoundingRect().contains(scene_pos):
            return None
        data_pos = view_box.mapSceneToView(scene_pos)
        # data coordinates already have the canvas origin at (0, 0)
        return self.drag.forward(data_pos.x(), data_pos.y(), 0.0, 0.0)


class PlotRenderer:
    """
    Retained renderer backed by pyqtgraph.

    `redraw` appends a single spot to the scatter item and resets the line
    data; `regenerate` replaces all spots at once.
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

        self.plot = pg.PlotWidget(parent=parent, background=BACKGROUND_COLOR)
        plot_item = self.plot.getPlotItem()
        plot_item.setMouseEnabled(x=False, y=False)
        plot_item.setMenuEnabled(False)
        plot_item.hideButtons()
        plot_item.setXRange(0.0, engine.width, padding=0.0)
        plot_item.setYRange(0.0, engine.height, padding=0.0)
        # Same orientation as the other surfaces: y grows downwards
        plot_item.invertY(True)

        self.scatter = pg.ScatterPlotItem(pxMode=True)
        self.line = pg.PlotDataItem(pen=pg.mkPen(BEST_FIT_COLOR, width=LINE_WIDTH))
        plot_item.addItem(self.scatter)
        plot_item.addItem(self.line)

        self.line_endpoints: tuple[tuple[float, float], tuple[float, float]] | None = None
        self._drag_filter: PlotDragFilter | None = None

        self.init()

    @property
    def widget(self) -> QWidget:
        return self.plot

    def init(self) -> None:
        self.render()
        self._install_listeners()

    def render(self) -> None:
        points = self.engine.points
        if points:
            self.scatter.setData(spots=[self._spot(p) for p in points])
        else:
            self.scatter.clear()
        self._update_line()
        logger.debug(f"Plot reset with {len(points)} spots.")

    def redraw(self) -> None:
        point = self.engine.last_point
        if point is not None:
            self.scatter.addPoints(spots=[self._spot(point)])
        self._update_line()

    def regenerate(self) -> None:
        self.render()

    def clear(self) -> None:
        self.scatter.clear()
        self.line.clear()
        self.line_endpoints = None

    def _install_listeners(self) -> None:
        self._drag_filter = PlotDragFilter(self.drag, self.plot, parent=self.plot)
        self.plot.viewport().installEventFilter(self._drag_filter)

    def _spot(self, point: Point) -> dict:
        mode = self.engine.mode
        return {
            "pos": (point.x, point.y),
            "size": 2 * POINT_RADIUS,
            "pen": point_pen(point, mode),
            "brush": point_brush(point, mode),
        }

    def _update_line(self) -> None:
        line = best_fit_or_none(self.engine)
        if line is None:
            self.line.clear()
            self.line_endpoints = None
            return
        self.line.setData([line.start.x, line.end.x], [line.start.y, line.end.y])
        self.line_endpoints = ((line.start.x, line.start.y), (line.end.x, line.end.y))
