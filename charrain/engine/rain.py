# charrain/engine/rain.py
"""
The rain state machine.

Each tick new drops are spawned at the top to approach the target density,
then every column moves down by one row. A drop's tail is never stored as a
link: it is rebuilt from cell positions while scanning each column from the
bottom row upwards.
"""

from __future__ import annotations

import logging
import random

from .cell import TSIZE_MAX, TSIZE_MIN, CellState, decode_aux, decode_state
from .grid import Grid

logger = logging.getLogger(__name__)

# One drop-head color followed by five tail shades.
DEFAULT_PALETTE_SIZE = 6


def tail_color(step: int, length: int, palette_size: int = DEFAULT_PALETTE_SIZE) -> int:
    """
    Color index for the tail cell `step` rows above a drop with tail `length`.

    Step 1 (next to the drop) gets the lowest index, step == length the
    highest, i.e. the dimmest shade of the palette.
    """
    # ceil((palette_size - 1) * step / length), in integers
    color = -(-(palette_size - 1) * step // length)
    return max(0, min(color, palette_size - 1))


def place_drop(
    grid: Grid,
    row: int,
    column: int,
    length: int,
    palette_size: int = DEFAULT_PALETTE_SIZE,
) -> None:
    """Write a DROP at (row, column) and up to `length` TAIL cells above it."""
    for i in range(length + 1):
        r = row - i
        if r < 0:
            break
        if r >= grid.rows:
            continue
        if i == 0:
            grid.set_state(r, column, CellState.DROP, length)
        else:
            grid.set_state(r, column, CellState.TAIL, tail_color(i, length, palette_size))


def random_length(rng: random.Random) -> int:
    return rng.randint(TSIZE_MIN, TSIZE_MAX)


def drop_target(grid: Grid) -> int:
    """Number of drops the grid should hold: size * ratio, truncated."""
    return int(grid.size * grid.drop_ratio)


def spawn(grid: Grid, rng: random.Random, palette_size: int = DEFAULT_PALETTE_SIZE) -> int:
    """
    Add drops on the top row, closing the gap to the target drop count.

    Drops advance one row per tick, so only missing/rows (+1) drops are added
    per tick; the deficit is closed gradually. Returns the number of drops
    attempted.
    """
    missing = drop_target(grid) - grid.drop_count
    if missing <= 0:
        return 0

    attempts = missing // grid.rows + 1
    for _ in range(attempts):
        column = rng.randrange(grid.columns)
        place_drop(grid, 0, column, random_length(rng), palette_size)
    return attempts


def rain(grid: Grid, rng: random.Random, palette_size: int = DEFAULT_PALETTE_SIZE) -> int:
    """
    Scatter drops over the whole grid at once.

    Used after a resize so the effect does not restart from an empty screen.
    """
    num = drop_target(grid)
    for _ in range(num):
        column = rng.randrange(grid.columns)
        row = rng.randrange(grid.rows)
        place_drop(grid, row, column, random_length(rng), palette_size)
    logger.debug("Rained %d drops, %d visible", num, grid.drop_count)
    return num


def advance_column(grid: Grid, column: int, palette_size: int = DEFAULT_PALETTE_SIZE) -> bool:
    """
    Move every cell of `column` down one row.

    Returns True if a DROP fell off the bottom row. At most one new TAIL cell
    is grown at the top per call, so tails of drops spawned on row 0 come into
    view one row per tick.
    """
    last = grid.rows - 1
    dropped = decode_state(grid.get(last, column)) == CellState.DROP

    tail_size = 0
    tail_seen = 0
    top = CellState.NONE

    for row in range(last, -1, -1):
        cell = grid.get(row, column)
        state = decode_state(cell)
        if row == 0:
            top = state
        if state == CellState.NONE:
            continue

        aux = decode_aux(cell)
        # Writes past the last row are discarded by the grid.
        grid.set_state(row + 1, column, state, aux)
        grid.set_state(row, column, CellState.NONE)

        if state == CellState.DROP:
            tail_size = aux
            tail_seen = 0
        elif tail_size > 0:
            tail_seen += 1

    if top != CellState.NONE and tail_seen < tail_size:
        grid.set_state(
            0, column, CellState.TAIL, tail_color(tail_seen + 1, tail_size, palette_size)
        )

    return dropped


def advance(grid: Grid, palette_size: int = DEFAULT_PALETTE_SIZE) -> int:
    """Advance all columns. Returns the number of drops that left the grid."""
    exited = 0
    for column in range(grid.columns):
        if advance_column(grid, column, palette_size):
            exited += 1
    return exited


def update(grid: Grid, rng: random.Random, palette_size: int = DEFAULT_PALETTE_SIZE) -> int:
    """One state machine step: spawn, then advance. Returns drops exited."""
    spawn(grid, rng, palette_size)
    return advance(grid, palette_size)
