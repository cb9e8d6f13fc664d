from __future__ import annotations

from typing import Iterator


def line_dots(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield every dot on the integer path from ``(x0, y0)`` to ``(x1, y1)``, both inclusive."""
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    *,
    xmax: float,
    ymax: float,
) -> tuple[float, float, float, float] | None:
    """Clip a segment to the box ``[0, xmax] x [0, ymax]`` (Liang-Barsky).

    Returns ``None`` when no part of the segment lies inside the box.
    """
    dx = x1 - x0
    dy = y1 - y0
    t0 = 0.0
    t1 = 1.0
    for p, q in ((-dx, x0), (dx, xmax - x0), (-dy, y0), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)
