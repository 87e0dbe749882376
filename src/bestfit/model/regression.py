"""
Least-Squares Line
==================
Closed-form ordinary least squares for a single predictor.

Given n points, the line y = intercept + slope * x minimising the squared
vertical distances is

    slope     = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)
    intercept = (Sy*Sxx - Sx*Sxy) / (n*Sxx - Sx^2)

The shared denominator vanishes for fewer than two points and for point sets
where every x is identical. Both cases raise DegenerateInputError.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING

import numpy as np

from bestfit.model.exceptions import DegenerateInputError
from bestfit.model.point import Point

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class BestFitLine:
    """The fitted line clipped to the canvas, from x = 0 to x = width."""
    start: Point
    end: Point
    slope: float
    intercept: float


def _coordinates(points: Sequence[Point]) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    return xs, ys


def slope_intercept(points: Sequence[Point]) -> tuple[float, float]:
    """
    Return (slope, intercept) of the least-squares line through the points.

    Raises:
        DegenerateInputError: fewer than two points, or all points share
            one x-coordinate.
    """
    n = len(points)
    if n < 2:
        raise DegenerateInputError(f"At least 2 points are required, got {n}.")

    xs, ys = _coordinates(points)
    if np.all(xs == xs[0]):
        raise DegenerateInputError(f"All {n} points share x = {xs[0]:g}; the slope is undefined.")

    sum_x = xs.sum()
    sum_y = ys.sum()
    sum_xy = np.dot(xs, ys)
    sum_xx = np.dot(xs, xs)

    denominator = n * sum_xx - sum_x ** 2
    if denominator == 0 or not np.isfinite(denominator):
        raise DegenerateInputError(f"Regression denominator is {denominator!r}.")

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y * sum_xx - sum_x * sum_xy) / denominator
    return float(slope), float(intercept)


def fit_line(points: Sequence[Point], width: float) -> BestFitLine:
    """Fit the points and span the result over [0, width]."""
    slope, intercept = slope_intercept(points)
    return BestFitLine(
        start=Point(0.0, intercept),
        end=Point(float(width), intercept + slope * width),
        slope=slope,
        intercept=intercept,
    )
