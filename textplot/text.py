from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from textplot.colors import ANSI_RESET, Color, ansi_foreground


@dataclass(frozen=True)
class TextRow:
    """One output line with an out-of-band foreground color per character."""

    text: str
    colors: tuple[Color | None, ...]

    def __post_init__(self) -> None:
        if len(self.colors) != len(self.text):
            raise ValueError(f"colors length {len(self.colors)} != text length {len(self.text)}")

    @classmethod
    def plain(cls, text: str) -> "TextRow":
        return cls(text=text, colors=(None,) * len(text))

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def __add__(self, other: "TextRow") -> "TextRow":
        return TextRow(text=self.text + other.text, colors=self.colors + other.colors)

    def to_ansi(self) -> str:
        parts: list[str] = []
        current: Color | None = None
        for ch, color in zip(self.text, self.colors):
            if color != current:
                parts.append(ANSI_RESET if color is None else ansi_foreground(color))
                current = color
            parts.append(ch)
        if current is not None:
            parts.append(ANSI_RESET)
        return "".join(parts)


@dataclass(frozen=True)
class TextBlock:
    rows: tuple[TextRow, ...]

    @classmethod
    def from_rows(cls, rows: Sequence[TextRow]) -> "TextBlock":
        return cls(rows=tuple(rows))

    def __iter__(self) -> Iterator[TextRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __str__(self) -> str:
        return "\n".join(self.lines())

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def lines(self) -> list[str]:
        return [row.text for row in self.rows]

    def to_ansi(self) -> str:
        return "\n".join(row.to_ansi() for row in self.rows)
