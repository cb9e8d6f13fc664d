from __future__ import annotations

import math

import numpy as np

from textplot import Chart, Continuous, Lines, Steps


POINTS = [
    (-10.0, -1.0),
    (0.0, 0.0),
    (1.0, 1.0),
    (2.0, 0.0),
    (3.0, 3.0),
    (4.0, 4.0),
    (5.0, 3.0),
    (9.0, 1.0),
    (10.0, 0.0),
]


def main() -> None:
    print("y = atan(x)")
    Chart.default().plot(Continuous(math.atan)).display()

    # NaN at x == 0 leaves a gap instead of failing.
    print("\ny = sin(x) / x")
    Chart.default().plot(Continuous(lambda x: math.sin(x) / x if x else math.nan)).display()

    print("\ny = ln(x)")
    Chart.default().plot(Continuous(lambda x: float(np.log(x)) if x > 0 else math.nan)).display()

    print("\ny = cos(x), y = sin(x) / 2")
    Chart(90, 15, xmin=-5.0, xmax=5.0).plot(Continuous(math.cos)).plot(Continuous(lambda x: math.sin(x) / 2)).display()

    print("\ny = interpolated points")
    Chart.default().plot(Lines(POINTS)).display()

    print("\ny = staircase points")
    Chart.default().plot(Steps(POINTS)).display()


if __name__ == "__main__":
    main()
