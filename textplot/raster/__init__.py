from .canvas import Canvas
from .dotgrid import BRAILLE_BASE, CELL_HEIGHT, CELL_WIDTH, DotGrid, GlyphRows
from .draw_lines import clip_segment, line_dots
from .draw_markers import marker_dots

__all__ = [
    "BRAILLE_BASE",
    "CELL_HEIGHT",
    "CELL_WIDTH",
    "Canvas",
    "DotGrid",
    "GlyphRows",
    "clip_segment",
    "line_dots",
    "marker_dots",
]
