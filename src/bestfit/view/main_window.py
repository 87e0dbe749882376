"""
Main Application Window
=======================
Control panel on the left, the renderers side by side on the right and a
status bar read-out of the current fit.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Wiring: It registers every renderer with the engine, in display order,
   and shares one click-to-add toggle between them.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QSplitter, QStatusBar, QVBoxLayout, QWidget

from bestfit.app.application import VISIBLE_APP_NAME
from bestfit.model.engine import RegressionEngine
from bestfit.view.renderers.base import DragToAdd, Renderer, best_fit_or_none
from bestfit.view.renderers.plot import PlotRenderer
from bestfit.view.renderers.raster import RasterRenderer
from bestfit.view.renderers.scene import SceneRenderer
from bestfit.view.widgets.controls import ControlPanel

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 5000


def _titled(title: str, widget: QWidget) -> QWidget:
    box = QWidget()
    v = QVBoxLayout(box)
    v.setContentsMargins(4, 4, 4, 4)
    label = QLabel(title)
    label.setAlignment(Qt.AlignmentFlag.AlignCenter)
    v.addWidget(label)
    v.addWidget(widget, 1)
    return box


class MainWindow(QMainWindow):
    def __init__(self, engine: RegressionEngine) -> None:
        super().__init__()
        self.engine = engine
        self.setWindowTitle(VISIBLE_APP_NAME)

        # One toggle drives drag-to-add on every surface
        self.drag = DragToAdd(engine)

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QHBoxLayout(main_widget)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.controls = ControlPanel(engine, self.drag)
        splitter.addWidget(self.controls)

        # --- RIGHT SIDE: Renderers ---
        renderer_area = QWidget()
        renderer_layout = QHBoxLayout(renderer_area)
        self.scene_renderer = SceneRenderer(engine, self.drag)
        self.raster_renderer = RasterRenderer(engine, self.drag)
        self.plot_renderer = PlotRenderer(engine, self.drag)
        self.renderers: list[Renderer] = [self.scene_renderer, self.raster_renderer, self.plot_renderer]

        renderer_layout.addWidget(_titled("Scene", self.scene_renderer.widget))
        renderer_layout.addWidget(_titled("Raster", self.raster_renderer.widget))
        renderer_layout.addWidget(_titled("Plot", self.plot_renderer.widget))
        splitter.addWidget(renderer_area)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)

        for renderer in self.renderers:
            engine.register_renderer(renderer)
        logger.info(f"Wired {len(self.renderers)} renderers to the engine.")

        # --- STATUS BAR ---
        self.setStatusBar(QStatusBar())
        self.lbl_fit = QLabel("")
        self.statusBar().addPermanentWidget(self.lbl_fit)

        # --- SIGNAL CONNECTIONS ---
        engine.event_broadcast.connect(self.on_engine_event)
        self.controls.error_occurred.connect(self.on_error)

        self.update_fit_label()

    @Slot(str)
    def on_engine_event(self, event: str) -> None:
        self.update_fit_label()

    @Slot(str)
    def on_error(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)

    def update_fit_label(self) -> None:
        n = len(self.engine)
        line = best_fit_or_none(self.engine)
        if line is None:
            self.lbl_fit.setText(f"Points: {n} | no line")
        else:
            self.lbl_fit.setText(
                f"Points: {n} | slope: {line.slope:.4f} | intercept: {line.intercept:.2f}"
            )
