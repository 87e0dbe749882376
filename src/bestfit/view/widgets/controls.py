"""
Control Panel
Generate / clear buttons, mode selector and the click-to-add toggle.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Signal, Slot
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QFormLayout, QGroupBox, QPushButton, QVBoxLayout, QWidget,
)

from bestfit.model.engine import RegressionEngine, RenderMode
from bestfit.model.exceptions import BestFitError
from bestfit.view.renderers.base import DragToAdd

logger = logging.getLogger(__name__)

MODE_LABELS = {
    RenderMode.COLORED: "Colored",
    RenderMode.WIREFRAME: "Wireframe",
}


class ControlPanel(QWidget):
    # Emitted with a user-facing message when an engine call fails
    error_occurred = Signal(str)

    def __init__(self, engine: RegressionEngine, drag: DragToAdd, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.engine = engine
        self.drag = drag

        layout = QVBoxLayout(self)

        # --- Points Group ---
        grp_points = QGroupBox("Points")
        points_layout = QVBoxLayout(grp_points)

        self.btn_generate = QPushButton("Generate")
        self.btn_generate.clicked.connect(self.on_generate_clicked)
        points_layout.addWidget(self.btn_generate)

        self.btn_clear = QPushButton("Clear")
        self.btn_clear.clicked.connect(self.on_clear_clicked)
        points_layout.addWidget(self.btn_clear)

        self.chk_click_to_add = QCheckBox("Click to add")
        self.chk_click_to_add.setChecked(drag.enabled)
        self.chk_click_to_add.toggled.connect(self.on_click_to_add_toggled)
        points_layout.addWidget(self.chk_click_to_add)

        layout.addWidget(grp_points)

        # --- Display Group ---
        grp_display = QGroupBox("Display")
        form = QFormLayout(grp_display)

        self.combo_mode = QComboBox()
        for mode, label in MODE_LABELS.items():
            self.combo_mode.addItem(label, userData=mode.value)
        self.combo_mode.setCurrentIndex(self.combo_mode.findData(engine.mode.value))
        self.combo_mode.currentIndexChanged.connect(self.on_mode_changed)
        form.addRow("Mode:", self.combo_mode)

        layout.addWidget(grp_display)
        layout.addStretch()

    @Slot()
    def on_generate_clicked(self) -> None:
        self.engine.generate()

    @Slot()
    def on_clear_clicked(self) -> None:
        self.engine.clear()

    @Slot(bool)
    def on_click_to_add_toggled(self, checked: bool) -> None:
        self.drag.enabled = checked
        logger.debug(f"Click to add {'enabled' if checked else 'disabled'}.")

    @Slot(int)
    def on_mode_changed(self, index: int) -> None:
        try:
            self.engine.set_mode(self.combo_mode.itemData(index))
        except BestFitError as e:
            logger.error(f"Could not change mode: {e}")
            self.error_occurred.emit(str(e))
