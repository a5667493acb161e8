# charrain/engine/glitch.py
from __future__ import annotations

import random

from .cell import ASCII_MAX, ASCII_MIN
from .grid import Grid


def glitch(grid: Grid, fraction: float, rng: random.Random) -> int:
    """
    Swap the character of randomly picked cells for a new random one.

    About `fraction` of the grid is hit per call. Cells are drawn
    independently, so some may be hit twice and others not at all. State and
    aux of a hit cell are left alone. Returns the number of draws.
    """
    count = int(fraction * grid.size)
    for _ in range(count):
        row = rng.randrange(grid.rows)
        column = rng.randrange(grid.columns)
        grid.set_character(row, column, rng.randint(ASCII_MIN, ASCII_MAX))
    return count
