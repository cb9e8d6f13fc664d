"""Helpers for preparing data before it is plotted."""

from __future__ import annotations

from typing import Any

import numpy as np

from textplot.adapters import normalize_points
from textplot.errors import ConfigurationError


def histogram(data: Any, min: float, max: float, bins: int) -> list[tuple[float, float]]:
    """Bucket the ``y`` values of ``(x, y)`` pairs into ``bins`` equal-width bins.

    Values outside ``[min, max]`` are ignored. Bin ``i`` is reported at its
    left edge ``min + i * step``, ready for :class:`textplot.shapes.Bars`.

        >>> histogram([(0.0, 0.0), (9.0, 9.0), (10.0, 10.0)], 0.0, 10.0, 2)
        [(0.0, 1.0), (5.0, 1.0)]
    """
    if bins <= 0:
        raise ConfigurationError("bins must be > 0")
    if not min < max:
        raise ConfigurationError(f"histogram needs min < max, got [{min}, {max}]")
    step = (max - min) / bins
    counts = np.zeros(bins, dtype=np.int64)

    ys = normalize_points(data).y
    ys = ys[np.isfinite(ys) & (ys >= min) & (ys <= max)]
    bucket_ids = ((ys - min) / step).astype(np.int64)
    # The top edge falls into a bucket past the end and is dropped.
    bucket_ids = bucket_ids[bucket_ids < bins]
    np.add.at(counts, bucket_ids, 1)

    return [(min + i * step, float(c)) for i, c in enumerate(counts.tolist())]
