from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from textplot.colors import Color, coerce_color
from textplot.errors import ConfigurationError


DEFAULT_WIDTH = 60
DEFAULT_HEIGHT = 15
DEFAULT_SIGNIFICANT_DIGITS = 3
DEFAULT_DOMAIN = (-10.0, 10.0)


class AxisStyle(Enum):
    """How zero axis lines are drawn onto the rendered body."""

    NONE = "none"
    DOTTED = "dotted"
    SOLID = "solid"


@dataclass(frozen=True)
class ChartConfig:
    """Settings fixed once when a chart is built.

    ``width``/``height`` are character cells; the dot grid is twice as wide and
    four times as tall. ``default_domain`` is used when a continuous shape is
    plotted before any domain exists.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    default_domain: tuple[float, float] | None = None
    color: Color | None = None
    marker_radius: int = 0
    significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS
    x_ticks: int = 2
    y_ticks: int = 2
    x_axis_style: AxisStyle = AxisStyle.NONE
    y_axis_style: AxisStyle = AxisStyle.NONE
    borders: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"chart size must be > 0, got {self.width}x{self.height}")
        if self.marker_radius < 0:
            raise ConfigurationError("marker_radius must be >= 0")
        if self.significant_digits < 1:
            raise ConfigurationError("significant_digits must be >= 1")
        if self.x_ticks < 2 or self.y_ticks < 2:
            raise ConfigurationError("at least 2 ticks are required per axis")
        if self.default_domain is not None:
            lo, hi = self.default_domain
            if not lo < hi:
                raise ConfigurationError(f"default_domain must satisfy min < max, got {self.default_domain}")
        object.__setattr__(self, "color", coerce_color(self.color))
        object.__setattr__(self, "x_axis_style", AxisStyle(self.x_axis_style))
        object.__setattr__(self, "y_axis_style", AxisStyle(self.y_axis_style))

    def replace(self, **changes: Any) -> "ChartConfig":
        return dataclasses.replace(self, **changes)
