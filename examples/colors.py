from __future__ import annotations

import math

import numpy as np

from textplot import Chart, ChartConfig, Continuous, Lines, Points


RAINBOW = [(255, 0, 0), (255, 127, 0), (255, 255, 0), (0, 255, 0), (0, 0, 255), (148, 0, 211)]


def _ring(radius: float, segments: int = 20) -> list[tuple[float, float]]:
    angles = np.linspace(0.0, math.pi, 2 * segments)
    return list(zip((radius * np.cos(angles)).tolist(), (radius * np.sin(angles)).tolist()))


def main() -> None:
    print("y = cos(x), y = sin(x) / 2")
    (
        Chart(90, 15, xmin=-5.0, xmax=5.0)
        .plot(Continuous(math.cos), (255, 0, 0))
        .plot(Continuous(lambda x: math.sin(x) / 2), (0, 0, 255))
        .display(color=True)
    )

    print("\nRainbow")
    ch = Chart(90, 15, xmin=-8.5, xmax=8.5)
    for i, color in enumerate(reversed(RAINBOW)):
        ch.plot(Lines(_ring(5.0 + 0.5 * (len(RAINBOW) - 1 - i))), color)
    ch.display(color=True)

    print("\nSparse points")
    rng = np.random.default_rng(7)
    pts = np.column_stack([rng.uniform(0.0, 4.0, 30), rng.uniform(0.0, 4.0, 30)])
    Chart(30, 10, xmin=0.0, xmax=3.0, config=ChartConfig(marker_radius=1)).plot(Points(pts), "#ff3030").display(color=True)


if __name__ == "__main__":
    main()
