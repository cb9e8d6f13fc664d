from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from textplot.colors import Color
from textplot.raster.dotgrid import CELL_HEIGHT, CELL_WIDTH, DotGrid
from textplot.raster.draw_lines import clip_segment, line_dots
from textplot.raster.draw_markers import marker_dots
from textplot.scales import Interval, Scale, coerce_interval


class Canvas:
    """A :class:`DotGrid` addressed in data coordinates.

    ``columns`` x ``rows`` character cells back a grid of
    ``columns * 2`` x ``rows * 4`` dots. ``domain`` maps onto dot columns
    left to right and ``range`` onto dot rows bottom to top.
    """

    def __init__(
        self,
        columns: int,
        rows: int,
        domain: Interval | Sequence[float],
        range: Interval | Sequence[float],
        *,
        marker_radius: int = 0,
    ) -> None:
        self.grid = DotGrid(columns * CELL_WIDTH, rows * CELL_HEIGHT)
        self.domain = coerce_interval(domain, label="domain")
        self.range = coerce_interval(range, label="range")
        self.marker_radius = max(0, int(marker_radius))
        self._x_scale = Scale(self.domain, self.grid.width - 1)
        self._y_scale = Scale(self.range, self.grid.height - 1)

    @property
    def x_scale(self) -> Scale:
        return self._x_scale

    @property
    def y_scale(self) -> Scale:
        return self._y_scale

    def _fx(self, x: float) -> float:
        return self._x_scale.linear(x)

    def _fy(self, y: float) -> float:
        return (self.grid.height - 1) - self._y_scale.linear(y)

    def _round_y(self, fy: float) -> int:
        top = self.grid.height - 1
        return top - int(np.rint(top - fy))

    def map_x(self, x: float) -> int:
        return int(np.rint(self._fx(x)))

    def map_y(self, y: float) -> int:
        return (self.grid.height - 1) - int(np.rint(self._y_scale.linear(y)))

    def map_point(self, x: float, y: float) -> tuple[int, int]:
        return self.map_x(x), self.map_y(y)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: Color | None = None) -> None:
        if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
            return
        fx0, fy0, fx1, fy1 = self._fx(x0), self._fy(y0), self._fx(x1), self._fy(y1)
        if not all(math.isfinite(v) for v in (fx0, fy0, fx1, fy1)):
            return
        xmax = float(self.grid.width - 1)
        ymax = float(self.grid.height - 1)
        inside = all(0.0 <= fx <= xmax for fx in (fx0, fx1)) and all(0.0 <= fy <= ymax for fy in (fy0, fy1))
        if inside:
            self.draw_dots_line(self.map_x(x0), self.map_y(y0), self.map_x(x1), self.map_y(y1), color)
            return
        clipped = clip_segment(fx0, fy0, fx1, fy1, xmax=xmax, ymax=ymax)
        if clipped is None:
            return
        cx0, cy0, cx1, cy1 = clipped
        self.draw_dots_line(int(np.rint(cx0)), self._round_y(cy0), int(np.rint(cx1)), self._round_y(cy1), color)

    def draw_point(self, x: float, y: float, color: Color | None = None) -> None:
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        fx, fy = self._fx(x), self._fy(y)
        if not (math.isfinite(fx) and math.isfinite(fy)):
            return
        reach = self.marker_radius + 1
        if fx < -reach or fy < -reach or fx > self.grid.width + reach or fy > self.grid.height + reach:
            return
        self.draw_dot(self.map_x(x), self.map_y(y), color)

    def draw_dots_line(self, x0: int, y0: int, x1: int, y1: int, color: Color | None = None) -> None:
        for x, y in line_dots(x0, y0, x1, y1):
            self.grid.set_colored(x, y, color)

    def draw_dot(self, x: int, y: int, color: Color | None = None) -> None:
        for xx, yy in marker_dots(x, y, self.marker_radius):
            self.grid.set_colored(xx, yy, color)
