"""
Configuration & Defaults
========================
This module serves as the central registry for global constants and the
engine configuration.

Why is this file needed?
------------------------
1. Abstraction: It prevents canvas sizes and batch sizes from being
   hardcoded throughout the renderers and the engine.
2. Persistence of preferences: It reads user overrides from QSettings
   (INI format, set up in `bestfit.app.application.create_app`).

Exports:
    DEFAULT_WIDTH, DEFAULT_HEIGHT (float): Logical canvas size.
    DEFAULT_BATCH_SIZE (int): Number of points added by one generate call.
    AXIS_INSET (float): Offset of axis lines drawn flush to the surface edge.
    EngineConfig: Dataclass bundling the values above.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


# Global Constants
DEFAULT_WIDTH: float = 600.0
DEFAULT_HEIGHT: float = 500.0
DEFAULT_BATCH_SIZE: int = 21

AXIS_INSET: float = 1.0
POINT_RADIUS: float = 4.0
LINE_WIDTH: float = 2.0

BACKGROUND_COLOR: str = "#FFFFFF"
AXIS_COLOR: str = "#000000"
OUTLINE_COLOR: str = "#000000"
BEST_FIT_COLOR: str = "#D62728"

# QSettings keys
SETTINGS_WIDTH_KEY = "canvas/width"
SETTINGS_HEIGHT_KEY = "canvas/height"
SETTINGS_BATCH_SIZE_KEY = "points/batch_size"


@dataclass(frozen=True)
class EngineConfig:
    """Canvas size and batch size used to construct a RegressionEngine."""
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}.")
        if self.batch_size < 0:
            raise ValueError(f"Batch size must not be negative, got {self.batch_size}.")

    @classmethod
    def from_settings(cls, settings: QSettings) -> EngineConfig:
        """Build a config from stored preferences, falling back to defaults."""
        return cls(
            width=float(settings.value(SETTINGS_WIDTH_KEY, DEFAULT_WIDTH, type=float)),
            height=float(settings.value(SETTINGS_HEIGHT_KEY, DEFAULT_HEIGHT, type=float)),
            batch_size=int(settings.value(SETTINGS_BATCH_SIZE_KEY, DEFAULT_BATCH_SIZE, type=int)),
        )

    def save(self, settings: QSettings) -> None:
        settings.setValue(SETTINGS_WIDTH_KEY, self.width)
        settings.setValue(SETTINGS_HEIGHT_KEY, self.height)
        settings.setValue(SETTINGS_BATCH_SIZE_KEY, self.batch_size)
