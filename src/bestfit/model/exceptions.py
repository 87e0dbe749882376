"""Exceptions raised by the model layer."""


class BestFitError(Exception):
    """Base class for all errors raised by the engine."""


class DegenerateInputError(BestFitError, ValueError):
    """
    The point set does not determine a line.

    Raised when the regression denominator is zero: fewer than two points,
    or every point shares the same x-coordinate.
    """


class InvalidModeError(BestFitError, ValueError):
    """An unknown rendering mode was requested."""
