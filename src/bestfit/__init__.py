"""Interactive least-squares line of best fit with synchronized renderers."""

__version__ = "0.1.0"
