# charrain/engine/render.py
"""
Read-only views of a grid.

`render` yields one (glyph, color_class) pair per cell in row-major order.
The color class is the palette slot to draw the glyph with: 0 for the drop
head, the cell's color index for tail cells and None for unlit cells.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .cell import CellState, decode_aux, decode_character, decode_state
from .grid import Grid

HEAD = 0

Glyph = Tuple[str, Optional[int]]

LAYERS = ("ascii", "state", "aux")


def render_cell(cell: int) -> Glyph:
    state = decode_state(cell)
    if state == CellState.NONE:
        return " ", None
    if state == CellState.DROP:
        return chr(decode_character(cell)), HEAD
    return chr(decode_character(cell)), decode_aux(cell)


def render(grid: Grid) -> Iterator[Glyph]:
    for cell in grid.data:
        yield render_cell(cell)


def render_rows(grid: Grid) -> Iterator[List[Glyph]]:
    """Same stream as `render`, one list per row."""
    columns = grid.columns
    data = grid.data
    for row in range(grid.rows):
        start = row * columns
        yield [render_cell(cell) for cell in data[start:start + columns]]


def render_layer(grid: Grid, layer: str) -> Iterator[str]:
    """
    Yield one line per row showing a single field of every cell.

    `ascii` shows the stored character (lit or not), `state` the state number
    and `aux` the tail length / color index. Aux is written as one base 36
    digit so every cell stays one column wide; values above 35 show as "+".
    """
    if layer not in LAYERS:
        raise ValueError(f"Unknown layer {layer!r}; expected one of {', '.join(LAYERS)}.")

    for row in range(grid.rows):
        out = []
        for column in range(grid.columns):
            cell = grid.get(row, column)
            if layer == "ascii":
                out.append(chr(decode_character(cell)))
            elif layer == "state":
                out.append(str(int(decode_state(cell))))
            else:
                out.append(_base36(decode_aux(cell)))
        yield "".join(out)


def _base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value < len(digits):
        return digits[value]
    return "+"
