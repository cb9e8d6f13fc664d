from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, ClassVar

import numpy as np

from textplot.adapters import PointData, normalize_points, normalize_xy
from textplot.errors import ConfigurationError, PlotDataError
from textplot.scales import Interval, Scale


LOGGER = logging.getLogger(__name__)

Point = tuple[float, float]
Segment = tuple[Point, Point]


@dataclass(frozen=True)
class Geometry:
    """Data-space drawing instructions produced by a shape."""

    segments: tuple[Segment, ...] = ()
    markers: tuple[Point, ...] = ()


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def _chain(xs: np.ndarray, ys: np.ndarray, mask: np.ndarray, *, corners: bool = False) -> tuple[Segment, ...]:
    segments: list[Segment] = []
    for start, stop in _contiguous_true_runs(mask):
        if stop - start == 1:
            p = (float(xs[start]), float(ys[start]))
            segments.append((p, p))
            continue
        for i in range(start, stop - 1):
            p0 = (float(xs[i]), float(ys[i]))
            p1 = (float(xs[i + 1]), float(ys[i + 1]))
            if corners:
                corner = (p1[0], p0[1])
                segments.append((p0, corner))
                segments.append((corner, p1))
            else:
                segments.append((p0, p1))
    return tuple(segments)


class Shape:
    """Base of the fixed set of plottable shapes.

    Subclasses: :class:`Continuous`, :class:`Lines`, :class:`Points`,
    :class:`Bars` and :class:`Steps`.
    """

    __slots__ = ()

    kind: ClassVar[str] = ""

    def x_extent(self) -> tuple[float, float] | None:
        raise NotImplementedError

    def y_values(self, domain: Interval | None, samples: int) -> np.ndarray:
        raise NotImplementedError

    def geometry(self, domain: Interval, samples: int) -> Geometry:
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class Continuous(Shape):
    """A real function sampled once per dot column of the domain."""

    func: Callable[[float], float]

    kind: ClassVar[str] = "continuous"

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise PlotDataError(f"continuous shape needs a callable, got {type(self.func)!r}")

    def x_extent(self) -> tuple[float, float] | None:
        return None

    def sample(self, domain: Interval, samples: int) -> tuple[np.ndarray, np.ndarray]:
        if samples < 2:
            raise ConfigurationError("continuous sampling needs at least 2 samples")
        xs = Scale(domain, samples - 1).samples()
        ys = np.fromiter((_evaluate(self.func, float(x)) for x in xs), dtype=np.float64, count=xs.size)
        skipped = int(np.count_nonzero(~np.isfinite(ys)))
        if skipped:
            LOGGER.debug("skipped %d non-finite samples of %d over [%g, %g]", skipped, xs.size, domain.lo, domain.hi)
        return xs, ys

    def y_values(self, domain: Interval | None, samples: int) -> np.ndarray:
        if domain is None:
            raise ConfigurationError("continuous shape requires a domain")
        _, ys = self.sample(domain, samples)
        return ys[np.isfinite(ys)]

    def geometry(self, domain: Interval, samples: int) -> Geometry:
        xs, ys = self.sample(domain, samples)
        return Geometry(segments=_chain(xs, ys, np.isfinite(ys)))


def _evaluate(func: Callable[[float], float], x: float) -> float:
    # Math errors at a sample leave a gap, like a NaN result.
    try:
        value = func(x)
        if value is None:
            return math.nan
        return float(value)
    except (ArithmeticError, ValueError, TypeError):
        return math.nan


class _PointShape(Shape):
    __slots__ = ("_data",)

    min_points: ClassVar[int] = 1

    def __init__(self, points: Any) -> None:
        object.__setattr__(self, "_data", self._validate(normalize_points(points)))

    @classmethod
    def from_xy(cls, y: Any, x: Any = None) -> "_PointShape":
        shape = cls.__new__(cls)
        object.__setattr__(shape, "_data", cls._validate(normalize_xy(y, x=x)))
        return shape

    @classmethod
    def _validate(cls, data: PointData) -> PointData:
        if data.size < cls.min_points:
            raise PlotDataError(f"{cls.kind} shape needs at least {cls.min_points} points, got {data.size}")
        return data

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def data(self) -> PointData:
        return self._data

    @property
    def points(self) -> list[Point]:
        return [(float(x), float(y)) for x, y in zip(self._data.x, self._data.y)]

    def __len__(self) -> int:
        return self._data.size

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data.size} points)"

    def _finite_xy(self) -> tuple[np.ndarray, np.ndarray]:
        return self._data.x[self._data.mask], self._data.y[self._data.mask]

    def x_extent(self) -> tuple[float, float] | None:
        xs, _ = self._finite_xy()
        if xs.size == 0:
            return None
        return float(np.min(xs)), float(np.max(xs))

    def y_values(self, domain: Interval | None, samples: int) -> np.ndarray:
        xs, ys = self._finite_xy()
        if domain is not None:
            ys = ys[(xs >= domain.lo) & (xs <= domain.hi)]
        return ys


class Lines(_PointShape):
    """Points joined by straight segments in the given order."""

    __slots__ = ()
    kind: ClassVar[str] = "lines"
    min_points: ClassVar[int] = 2

    def geometry(self, domain: Interval, samples: int) -> Geometry:
        return Geometry(segments=_chain(self._data.x, self._data.y, self._data.mask))


class Steps(_PointShape):
    """Points joined as a staircase: horizontal run first, then the riser."""

    __slots__ = ()
    kind: ClassVar[str] = "steps"

    def geometry(self, domain: Interval, samples: int) -> Geometry:
        return Geometry(segments=_chain(self._data.x, self._data.y, self._data.mask, corners=True))


class Points(_PointShape):
    """Unconnected markers."""

    __slots__ = ()
    kind: ClassVar[str] = "points"

    def geometry(self, domain: Interval, samples: int) -> Geometry:
        xs, ys = self._finite_xy()
        return Geometry(markers=tuple((float(x), float(y)) for x, y in zip(xs, ys)))


class Bars(_PointShape):
    """``(position, value)`` pairs drawn as vertical bars rising from zero."""

    __slots__ = ()
    kind: ClassVar[str] = "bars"

    def y_values(self, domain: Interval | None, samples: int) -> np.ndarray:
        ys = super().y_values(domain, samples)
        if ys.size == 0:
            return ys
        return np.append(ys, 0.0)

    def geometry(self, domain: Interval, samples: int) -> Geometry:
        xs, ys = self._finite_xy()
        return Geometry(segments=tuple(((float(x), 0.0), (float(x), float(y))) for x, y in zip(xs, ys)))
