from textplot.api import chart
from textplot.chart import Chart
from textplot.colors import Color
from textplot.config import AxisStyle, ChartConfig
from textplot.errors import ConfigurationError, ExpressionError, PlotDataError, TextPlotError
from textplot.raster import Canvas, DotGrid
from textplot.scales import Interval
from textplot.shapes import Bars, Continuous, Lines, Points, Shape, Steps
from textplot.text import TextBlock, TextRow
from textplot.utils import histogram

__all__ = [
    "AxisStyle",
    "Bars",
    "Canvas",
    "Chart",
    "ChartConfig",
    "Color",
    "ConfigurationError",
    "Continuous",
    "DotGrid",
    "ExpressionError",
    "Interval",
    "Lines",
    "PlotDataError",
    "Points",
    "Shape",
    "Steps",
    "TextBlock",
    "TextPlotError",
    "TextRow",
    "chart",
    "histogram",
]
