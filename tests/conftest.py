"""
pytest configuration and shared fixtures.
"""
import os

# Widgets and QImage painting need a GUI application; no display is required
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
from PySide6.QtWidgets import QApplication

from bestfit.model.engine import RegressionEngine


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole test session."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def engine(rng):
    """Default-sized engine, pre-populated with a random batch."""
    return RegressionEngine(rng=rng)


@pytest.fixture
def empty_engine(rng):
    """Default-sized engine with no points."""
    return RegressionEngine(rng=rng, populate=False)


class RecordingRenderer:
    """Renderer double that logs every handler call into a shared list."""
    supports_incremental_redraw = True

    def __init__(self, name: str, log: list):
        self.name = name
        self.log = log

    def init(self):
        self.log.append((self.name, "init"))

    def render(self):
        self.log.append((self.name, "render"))

    def redraw(self):
        self.log.append((self.name, "redraw"))

    def regenerate(self):
        self.log.append((self.name, "regenerate"))

    def clear(self):
        self.log.append((self.name, "clear"))


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def make_recorder(call_log):
    def _make(name: str) -> RecordingRenderer:
        return RecordingRenderer(name, call_log)
    return _make
