from __future__ import annotations


class TextPlotError(Exception):
    """Base class for textplot errors."""


class ConfigurationError(TextPlotError, ValueError):
    """Invalid grid dimensions, limits or chart configuration."""


class PlotDataError(ConfigurationError):
    """Shape data that cannot be plotted."""


class ExpressionError(TextPlotError):
    """Formula text that cannot be parsed or bound to the plot variable."""
