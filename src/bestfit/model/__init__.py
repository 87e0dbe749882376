"""
The MODEL layer contains the point data and the regression engine.
It draws nothing itself: renderers observe the engine and read from it.
"""
from bestfit.model.engine import RegressionEngine, RenderEvent, RenderMode
from bestfit.model.exceptions import BestFitError, DegenerateInputError, InvalidModeError
from bestfit.model.point import Point, random_color
from bestfit.model.regression import BestFitLine, fit_line

__all__ = [
    "BestFitError",
    "BestFitLine",
    "DegenerateInputError",
    "InvalidModeError",
    "Point",
    "RegressionEngine",
    "RenderEvent",
    "RenderMode",
    "fit_line",
    "random_color",
]
