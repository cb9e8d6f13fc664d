from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Sequence

import numpy as np

from textplot.errors import ConfigurationError


@dataclass(frozen=True)
class Interval:
    """Closed interval ``[lo, hi]`` with ``lo < hi``."""

    lo: float
    hi: float

    def __post_init__(self) -> None:
        lo = float(self.lo)
        hi = float(self.hi)
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise ConfigurationError(f"interval bounds must be finite, got [{lo}, {hi}]")
        if not lo < hi:
            raise ConfigurationError(f"interval must satisfy min < max, got [{lo}, {hi}]")
        if not math.isfinite(hi - lo):
            raise ConfigurationError(f"interval span overflows, got [{lo}, {hi}]")
        object.__setattr__(self, "lo", lo)
        object.__setattr__(self, "hi", hi)

    @property
    def span(self) -> float:
        return self.hi - self.lo

    def contains(self, value: float) -> bool:
        return self.lo <= value <= self.hi

    def union(self, other: "Interval") -> "Interval":
        return Interval(min(self.lo, other.lo), max(self.hi, other.hi))

    def as_tuple(self) -> tuple[float, float]:
        return (self.lo, self.hi)


def coerce_interval(value: Interval | Sequence[float], *, label: str = "interval") -> Interval:
    if isinstance(value, Interval):
        return value
    try:
        lo, hi = value
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{label} must be a (min, max) pair, got {value!r}") from exc
    return Interval(lo, hi)


@dataclass(frozen=True)
class Scale:
    """Linear mapping from a data interval onto ``[0, steps]`` dot positions."""

    interval: Interval
    steps: int

    def __post_init__(self) -> None:
        if self.steps < 1:
            raise ConfigurationError("scale needs at least 2 dot positions")

    def linear(self, value: float) -> float:
        p = (value - self.interval.lo) / self.interval.span
        return p * self.steps

    def inv_linear(self, position: float) -> float:
        p = position / self.steps
        return self.interval.lo + p * self.interval.span

    def to_dot(self, value: float) -> int:
        return int(np.rint(self.linear(value)))

    def samples(self) -> np.ndarray:
        """One data value per dot position, endpoints exact."""
        xs = self.interval.lo + np.arange(self.steps + 1, dtype=np.float64) * (self.interval.span / self.steps)
        xs[-1] = self.interval.hi
        return xs


def extent_limits(lo: float, hi: float) -> tuple[float, float]:
    """Widen a degenerate data extent so it can back an :class:`Interval`."""
    if lo == hi:
        return lo - 1.0, hi + 1.0
    return lo, hi


def generate_ticks(interval: Interval, count: int) -> np.ndarray:
    if count < 2:
        raise ConfigurationError("at least 2 ticks are required")
    ticks = np.linspace(interval.lo, interval.hi, count, dtype=np.float64)
    ticks[0] = interval.lo
    ticks[-1] = interval.hi
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    step = interval.span / (count - 1)
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def format_tick(value: float, significant_digits: int = 3) -> str:
    if not np.isfinite(value):
        return str(value)
    if value == 0:
        return "0"
    abs_v = abs(value)
    if abs_v >= 1e6 or abs_v < 1e-4:
        return f"{value:.{max(0, significant_digits - 1)}e}"

    d = Decimal(repr(float(value)))
    exponent = d.adjusted()
    quant = Decimal("1").scaleb(exponent - significant_digits + 1)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out
