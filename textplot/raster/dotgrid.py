from __future__ import annotations

from typing import Iterator

import numpy as np

from textplot.colors import NO_COLOR, Color, pack_color, unpack_color
from textplot.errors import ConfigurationError
from textplot.text import TextRow


CELL_WIDTH = 2
CELL_HEIGHT = 4
BRAILLE_BASE = 0x2800

# Unicode Braille bit for each dot of a cell, indexed [row][col].
BRAILLE_BITS = np.asarray(
    [
        [0x01, 0x08],
        [0x02, 0x10],
        [0x04, 0x20],
        [0x40, 0x80],
    ],
    dtype=np.int32,
)


class DotGrid:
    """Boolean dot matrix with an optional color per dot.

    Dots are addressed ``(x, y)`` with ``y`` growing downward. Every
    ``2 x 4`` block of dots serializes to one Braille glyph.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"dot grid size must be > 0, got {width}x{height}")
        if width % CELL_WIDTH != 0:
            raise ConfigurationError(f"dot grid width must be divisible by {CELL_WIDTH}, got {width}")
        if height % CELL_HEIGHT != 0:
            raise ConfigurationError(f"dot grid height must be divisible by {CELL_HEIGHT}, got {height}")
        self._width = int(width)
        self._height = int(height)
        self._dots = np.zeros((self._height, self._width), dtype=bool)
        self._colors = np.full((self._height, self._width), NO_COLOR, dtype=np.int32)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def columns(self) -> int:
        return self._width // CELL_WIDTH

    @property
    def rows(self) -> int:
        return self._height // CELL_HEIGHT

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def set(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            return
        self._dots[y, x] = True

    def unset(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            return
        self._dots[y, x] = False
        self._colors[y, x] = NO_COLOR

    def set_colored(self, x: int, y: int, color: Color | None) -> None:
        if not self.in_bounds(x, y):
            return
        self._dots[y, x] = True
        if color is not None:
            self._colors[y, x] = pack_color(color)

    def get(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return bool(self._dots[y, x])

    def color_at(self, x: int, y: int) -> Color | None:
        if not self.in_bounds(x, y):
            return None
        return unpack_color(int(self._colors[y, x]))

    def count(self) -> int:
        return int(np.count_nonzero(self._dots))

    def clear(self) -> None:
        self._dots[:, :] = False
        self._colors[:, :] = NO_COLOR

    def copy(self) -> "DotGrid":
        out = DotGrid(self._width, self._height)
        out._dots[:, :] = self._dots
        out._colors[:, :] = self._colors
        return out

    def dots(self) -> np.ndarray:
        view = self._dots.view()
        view.setflags(write=False)
        return view

    def cell_masks(self) -> np.ndarray:
        blocks = self._blocks(self._dots.astype(np.int32))
        return (blocks * BRAILLE_BITS).sum(axis=(2, 3))

    def cell_colors(self) -> np.ndarray:
        """Packed color per cell: first colored dot scanning rows, then columns."""
        blocks = self._blocks(self._colors).reshape(self.rows, self.columns, CELL_WIDTH * CELL_HEIGHT)
        has_color = blocks != NO_COLOR
        first = np.argmax(has_color, axis=2)
        picked = np.take_along_axis(blocks, first[:, :, None], axis=2)[:, :, 0]
        return np.where(has_color.any(axis=2), picked, NO_COLOR)

    def to_text(self) -> "GlyphRows":
        return GlyphRows(self)

    def _blocks(self, values: np.ndarray) -> np.ndarray:
        # (rows, 4, columns, 2) -> (rows, columns, 4, 2)
        return values.reshape(self.rows, CELL_HEIGHT, self.columns, CELL_WIDTH).transpose(0, 2, 1, 3)


class GlyphRows:
    """Restartable view of a grid's glyph rows; each pass re-reads the grid."""

    def __init__(self, grid: DotGrid) -> None:
        self._grid = grid

    def __len__(self) -> int:
        return self._grid.rows

    def __iter__(self) -> Iterator[TextRow]:
        masks = self._grid.cell_masks()
        colors = self._grid.cell_colors()
        for r in range(self._grid.rows):
            text = "".join(chr(BRAILLE_BASE + int(m)) for m in masks[r])
            yield TextRow(text=text, colors=tuple(unpack_color(int(c)) for c in colors[r]))

    def lines(self) -> list[str]:
        return [row.text for row in self]
