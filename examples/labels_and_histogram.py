from __future__ import annotations

import datetime as dt
import math

import numpy as np

from textplot import Bars, Chart, Continuous, histogram


def main() -> None:
    start = dt.date(2023, 6, 1)
    days = (dt.date(2023, 9, 1) - start).days

    print("My step count over 3 months:")
    (
        Chart(100, 12, xmin=0.0, xmax=float(days), ymin=0.0, ymax=25_000.0)
        .plot(Continuous(lambda x: 1000.0 * (5.0 * math.sin(0.5 * x) + 0.05 * x) + 9000.0), (10, 100, 200))
        .set_x_label_format(lambda v: (start + dt.timedelta(days=int(v))).isoformat())
        .display()
    )

    print("\nHistogram of normal samples")
    samples = np.random.default_rng(0).normal(0.0, 1.0, 2000)
    bins = histogram(np.column_stack([np.arange(samples.size), samples]), -3.0, 3.0, 30)
    Chart(60, 12).plot(Bars(bins)).nice()


if __name__ == "__main__":
    main()
