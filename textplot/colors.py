from __future__ import annotations

from typing import Sequence, Union

from textplot.errors import ConfigurationError


Color = tuple[int, int, int]
ColorLike = Union[Color, tuple[int, int, int, int], Sequence[int], str]

NO_COLOR = -1
ANSI_RESET = "\x1b[0m"


def coerce_color(color: ColorLike | None) -> Color | None:
    """Normalize a caller color to an RGB triple.

    Accepts ``(r, g, b)``, ``(r, g, b, a)`` (alpha is dropped, glyphs are not
    blended) and ``"#rrggbb"`` strings. ``None`` stays ``None``.
    """
    if color is None:
        return None
    if isinstance(color, str):
        text = color.strip().lstrip("#")
        if len(text) != 6:
            raise ConfigurationError(f"unsupported color string: {color!r}")
        try:
            value = int(text, 16)
        except ValueError as exc:
            raise ConfigurationError(f"unsupported color string: {color!r}") from exc
        return unpack_color(value)
    channels = tuple(color)
    if len(channels) not in (3, 4):
        raise ConfigurationError(f"color must have 3 or 4 channels, got {len(channels)}")
    r, g, b = (int(c) for c in channels[:3])
    for c in (r, g, b):
        if c < 0 or c > 255:
            raise ConfigurationError(f"color channel out of range: {c}")
    return (r, g, b)


def pack_color(color: Color | None) -> int:
    if color is None:
        return NO_COLOR
    r, g, b = color
    return (r << 16) | (g << 8) | b


def unpack_color(value: int) -> Color | None:
    if value < 0:
        return None
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def ansi_foreground(color: Color) -> str:
    r, g, b = color
    return f"\x1b[38;2;{r};{g};{b}m"
