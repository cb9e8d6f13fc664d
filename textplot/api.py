from __future__ import annotations

from typing import Any

from textplot.chart import Chart
from textplot.config import ChartConfig


def chart(
    width: int | None = None,
    height: int | None = None,
    *,
    config: ChartConfig | None = None,
    **limits: Any,
) -> Chart:
    """Build a :class:`Chart`; ``limits`` accepts ``xmin``, ``xmax``, ``ymin`` and ``ymax``."""
    unknown = set(limits) - {"xmin", "xmax", "ymin", "ymax"}
    if unknown:
        raise TypeError(f"unexpected chart arguments: {sorted(unknown)}")
    return Chart(width, height, config=config, **limits)
