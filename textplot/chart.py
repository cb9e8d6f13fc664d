from __future__ import annotations

import logging
import sys
from typing import Callable, TextIO, Union

import numpy as np

from textplot.colors import Color, ColorLike, coerce_color
from textplot.config import DEFAULT_DOMAIN, AxisStyle, ChartConfig
from textplot.errors import ConfigurationError, PlotDataError
from textplot.raster import Canvas, DotGrid
from textplot.scales import Interval, extent_limits, format_tick, generate_ticks
from textplot.shapes import Continuous, Shape
from textplot.text import TextBlock, TextRow


LOGGER = logging.getLogger(__name__)

LabelFormat = Union[str, Callable[[float], str], None]

# Decorations light every third dot unless drawn solid.
DOTTED_STRIDE = 3


def _explicit_interval(lo: float | None, hi: float | None, axis: str) -> Interval | None:
    if lo is None and hi is None:
        return None
    if lo is None or hi is None:
        raise ConfigurationError(f"both {axis}min and {axis}max must be given")
    return Interval(lo, hi)


def _union(a: tuple[float, float] | None, b: tuple[float, float] | None) -> tuple[float, float] | None:
    if a is None:
        return b
    if b is None:
        return a
    return (min(a[0], b[0]), max(a[1], b[1]))


def _extent(values: np.ndarray) -> tuple[float, float] | None:
    if values.size == 0:
        return None
    return (float(np.min(values)), float(np.max(values)))


def _check_label_format(fmt: LabelFormat) -> LabelFormat:
    if fmt is None or callable(fmt) or fmt == "value":
        return fmt
    raise ConfigurationError(f"label format must be 'value', a callable or None, got {fmt!r}")


class Chart:
    """Layers shapes onto one shared braille canvas and renders it as text.

    ``width``/``height`` are character columns/rows. The x domain is explicit
    when ``xmin``/``xmax`` are given, otherwise it grows to cover the plotted
    data; the y range likewise with ``ymin``/``ymax``.

        Chart(40, 10, xmin=-1, xmax=1).plot(Continuous(math.sin)).display()
    """

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        *,
        xmin: float | None = None,
        xmax: float | None = None,
        ymin: float | None = None,
        ymax: float | None = None,
        config: ChartConfig | None = None,
    ) -> None:
        config = config if config is not None else ChartConfig()
        if width is not None or height is not None:
            config = config.replace(
                width=config.width if width is None else int(width),
                height=config.height if height is None else int(height),
            )
        self.config = config
        self._explicit_domain = _explicit_interval(xmin, xmax, "x")
        self._explicit_range = _explicit_interval(ymin, ymax, "y")
        self._data_x: tuple[float, float] | None = None
        self._data_y: tuple[float, float] | None = None
        self._entries: list[tuple[Shape, Color | None]] = []
        self._canvas: Canvas | None = None
        self._x_label_format: LabelFormat = "value"
        self._y_label_format: LabelFormat = "value"
        self._x_axis_style = config.x_axis_style
        self._y_axis_style = config.y_axis_style
        self._borders = config.borders

    @classmethod
    def default(cls, config: ChartConfig | None = None) -> "Chart":
        return cls(xmin=DEFAULT_DOMAIN[0], xmax=DEFAULT_DOMAIN[1], config=config)

    def __repr__(self) -> str:
        return (
            f"Chart(width={self.width}, height={self.height}, domain={self.domain}, "
            f"range={self.range}, shapes={len(self._entries)})"
        )

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def samples(self) -> int:
        """Continuous shapes are sampled once per dot column."""
        return self.config.width * 2

    @property
    def domain(self) -> Interval | None:
        return self._resolve_domain(self._data_x)

    @property
    def range(self) -> Interval | None:
        if self.domain is None:
            return None
        return self._resolve_range(self._data_y)

    @property
    def shapes(self) -> tuple[Shape, ...]:
        return tuple(shape for shape, _ in self._entries)

    @property
    def canvas(self) -> Canvas | None:
        return self._canvas

    def _resolve_domain(self, data_x: tuple[float, float] | None) -> Interval | None:
        if self._explicit_domain is not None:
            return self._explicit_domain
        if data_x is not None:
            lo, hi = extent_limits(*data_x)
            if (lo, hi) != data_x:
                LOGGER.debug("widened degenerate x extent %s to [%g, %g]", data_x, lo, hi)
            return Interval(lo, hi)
        if self.config.default_domain is not None:
            return Interval(*self.config.default_domain)
        return None

    def _resolve_range(self, data_y: tuple[float, float] | None) -> Interval:
        if self._explicit_range is not None:
            return self._explicit_range
        if data_y is None:
            return Interval(-1.0, 1.0)
        lo, hi = extent_limits(*data_y)
        if (lo, hi) != data_y:
            LOGGER.debug("widened degenerate y extent %s to [%g, %g]", data_y, lo, hi)
        return Interval(lo, hi)

    def _fold_y(self, shapes: list[Shape], domain: Interval) -> tuple[float, float] | None:
        folded: tuple[float, float] | None = None
        for shape in shapes:
            folded = _union(folded, _extent(shape.y_values(domain, self.samples)))
        return folded

    def plot(self, shape: Shape, color: ColorLike | None = None) -> "Chart":
        """Rasterize ``shape`` onto the shared canvas and return the chart.

        Later shapes are layered over earlier ones; a dot lit twice keeps the
        color of the last draw.
        """
        if not isinstance(shape, Shape):
            raise PlotDataError(f"expected a Shape, got {type(shape)!r}")
        resolved_color = coerce_color(color) if color is not None else self.config.color

        previous_domain = self.domain
        data_x = self._data_x
        if self._explicit_domain is None:
            data_x = _union(data_x, shape.x_extent())
        domain = self._resolve_domain(data_x)
        if domain is None:
            if not isinstance(shape, Continuous):
                raise PlotDataError("series contains no finite points")
            raise ConfigurationError(
                f"cannot plot a {shape.kind} shape without a domain; pass xmin/xmax or ChartConfig.default_domain"
            )

        data_y = self._data_y
        if self._explicit_range is None:
            if domain != previous_domain:
                data_y = self._fold_y([s for s, _ in self._entries] + [shape], domain)
            else:
                data_y = _union(data_y, _extent(shape.y_values(domain, self.samples)))

        range_ = self._resolve_range(data_y)
        entries = self._entries + [(shape, resolved_color)]
        canvas = self._canvas
        if canvas is not None and canvas.domain == domain and canvas.range == range_:
            self._rasterize(canvas, shape, resolved_color)
        else:
            if canvas is not None:
                LOGGER.debug(
                    "limits changed to x=[%g, %g] y=[%g, %g]; replaying %d shapes",
                    domain.lo,
                    domain.hi,
                    range_.lo,
                    range_.hi,
                    len(entries),
                )
            canvas = self._build_canvas(domain, range_, entries)

        # Chart state only changes once the shape has been drawn.
        self._data_x = data_x
        self._data_y = data_y
        self._entries = entries
        self._canvas = canvas
        return self

    def lineplot(self, shape: Shape) -> "Chart":
        return self.plot(shape)

    def colorplot(self, shape: Shape, color: ColorLike) -> "Chart":
        return self.plot(shape, color)

    def _build_canvas(
        self, domain: Interval, range_: Interval, entries: list[tuple[Shape, Color | None]]
    ) -> Canvas:
        canvas = Canvas(self.width, self.height, domain, range_, marker_radius=self.config.marker_radius)
        for shape, color in entries:
            self._rasterize(canvas, shape, color)
        return canvas

    def _rasterize(self, canvas: Canvas, shape: Shape, color: Color | None) -> None:
        geometry = shape.geometry(canvas.domain, canvas.grid.width)
        for (x0, y0), (x1, y1) in geometry.segments:
            canvas.draw_line(x0, y0, x1, y1, color)
        for x, y in geometry.markers:
            canvas.draw_point(x, y, color)

    def set_x_label_format(self, fmt: LabelFormat) -> "Chart":
        self._x_label_format = _check_label_format(fmt)
        return self

    def set_y_label_format(self, fmt: LabelFormat) -> "Chart":
        self._y_label_format = _check_label_format(fmt)
        return self

    def set_x_axis_style(self, style: AxisStyle | str) -> "Chart":
        self._x_axis_style = AxisStyle(style)
        return self

    def set_y_axis_style(self, style: AxisStyle | str) -> "Chart":
        self._y_axis_style = AxisStyle(style)
        return self

    def set_borders(self, show: bool) -> "Chart":
        self._borders = bool(show)
        return self

    def _current_canvas(self) -> Canvas:
        domain = self.domain
        if domain is None:
            raise ConfigurationError("chart has no domain; plot a shape or pass xmin/xmax")
        range_ = self._resolve_range(self._data_y)
        if self._canvas is not None:
            return self._canvas
        return Canvas(self.width, self.height, domain, range_, marker_radius=self.config.marker_radius)

    def _decorated_grid(self, canvas: Canvas) -> DotGrid:
        grid = canvas.grid.copy()
        w, h = grid.width, grid.height
        if self._x_axis_style is not AxisStyle.NONE and canvas.range.contains(0.0):
            row = canvas.map_y(0.0)
            for i in range(w):
                if self._x_axis_style is AxisStyle.SOLID or i % DOTTED_STRIDE == 0:
                    grid.set(i, row)
        if self._y_axis_style is not AxisStyle.NONE and canvas.domain.contains(0.0):
            col = canvas.map_x(0.0)
            for j in range(h):
                if self._y_axis_style is AxisStyle.SOLID or j % DOTTED_STRIDE == 0:
                    grid.set(col, j)
        if self._borders:
            for i in range(0, w, DOTTED_STRIDE):
                grid.set(i, 0)
                grid.set(i, h - 1)
            for j in range(0, h, DOTTED_STRIDE):
                grid.set(0, j)
                grid.set(w - 1, j)
        return grid

    def _format_label(self, fmt: LabelFormat, value: float) -> str:
        if callable(fmt):
            return str(fmt(value))
        return format_tick(value, self.config.significant_digits)

    def _y_labels(self, range_: Interval) -> dict[int, str]:
        if self._y_label_format is None:
            return {}
        rows = self.height
        ticks = generate_ticks(range_, self.config.y_ticks)
        order = [len(ticks) - 1, 0] + list(range(1, len(ticks) - 1))
        labels: dict[int, str] = {}
        for idx in order:
            value = float(ticks[idx])
            row = int(np.rint((range_.hi - value) / range_.span * (rows - 1)))
            if row in labels:
                continue
            labels[row] = self._format_label(self._y_label_format, value)
        return labels

    def _x_label_line(self, domain: Interval) -> str:
        columns = self.width
        buf = [" "] * columns
        if self._x_label_format is None:
            return "".join(buf)
        taken = [False] * columns
        ticks = generate_ticks(domain, self.config.x_ticks)
        last = len(ticks) - 1
        for idx in [0, last] + list(range(1, last)):
            value = float(ticks[idx])
            label = self._format_label(self._x_label_format, value)[:columns]
            if not label:
                continue
            if idx == 0:
                start = 0
            elif idx == last:
                start = columns - len(label)
            else:
                col = int(np.rint((value - domain.lo) / domain.span * (columns - 1)))
                start = min(max(0, col - len(label) // 2), columns - len(label))
            lo = max(0, start - 1)
            hi = min(columns, start + len(label) + 1)
            if any(taken[lo:hi]):
                continue
            for offset, ch in enumerate(label):
                buf[start + offset] = ch
                taken[start + offset] = True
        return "".join(buf)

    def render_text(self) -> TextBlock:
        """Assemble the chart body, y-axis gutter and x-axis label row."""
        canvas = self._current_canvas()
        body = list(self._decorated_grid(canvas).to_text())
        y_labels = self._y_labels(canvas.range)
        gutter = max((len(lbl) for lbl in y_labels.values()), default=0)
        if y_labels:
            gutter += 1
        rows: list[TextRow] = []
        for r, line in enumerate(body):
            label = y_labels.get(r, "")
            prefix = (label.rjust(gutter - 1) + " ") if gutter else ""
            rows.append(TextRow.plain(prefix) + line)
        rows.append(TextRow.plain(" " * gutter + self._x_label_line(canvas.domain)))
        return TextBlock.from_rows(rows)

    def frame(self) -> str:
        canvas = self._current_canvas()
        return "\n".join(self._decorated_grid(canvas).to_text().lines())

    def display(self, stream: TextIO | None = None, *, color: bool | None = None) -> "Chart":
        out = stream if stream is not None else sys.stdout
        block = self.render_text()
        if color is None:
            isatty = getattr(out, "isatty", None)
            color = bool(isatty()) if callable(isatty) else False
        out.write((block.to_ansi() if color else str(block)) + "\n")
        return self

    def nice(self, stream: TextIO | None = None, *, color: bool | None = None) -> "Chart":
        return self.set_borders(True).display(stream, color=color)
