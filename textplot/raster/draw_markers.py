from __future__ import annotations

from typing import Iterator


def marker_dots(x: int, y: int, radius: int = 0) -> Iterator[tuple[int, int]]:
    radius = max(0, radius)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            yield xx, yy
