# charrain/engine/grid.py
from __future__ import annotations

import logging
import random
from array import array
from typing import Iterator

from ..errors import ConfigError, GridAllocationError
from .cell import (
    ASCII_MAX,
    ASCII_MIN,
    BLANK,
    CellState,
    decode_state,
    encode,
    with_character,
    with_state,
)

logger = logging.getLogger(__name__)


def check_dimensions(rows: int, columns: int, drop_ratio: float) -> None:
    if rows <= 0 or columns <= 0:
        raise ConfigError(f"Grid dimensions must be positive, got {rows}x{columns}.")
    if not 0.0 < drop_ratio < 1.0:
        raise ConfigError(f"Drop ratio must be within (0, 1), got {drop_ratio}.")


class Grid:
    """
    Row-major matrix of packed cells plus the drop bookkeeping.

    `drop_count` is maintained by `set`: any write that turns a cell into a
    DROP increments it and any write that turns a DROP into something else
    decrements it, so it always equals the number of DROP cells.
    """

    __slots__ = ("rows", "columns", "drop_ratio", "drop_count", "data")

    def __init__(self, rows: int, columns: int, drop_ratio: float) -> None:
        check_dimensions(rows, columns, drop_ratio)
        try:
            data = array("H", [0]) * (rows * columns)
        except MemoryError as exc:
            raise GridAllocationError(
                f"Unable to allocate a {rows}x{columns} grid."
            ) from exc

        self.rows = rows
        self.columns = columns
        self.drop_ratio = drop_ratio
        self.drop_count = 0
        self.data = data
        logger.debug("Allocated %dx%d grid (%d cells)", rows, columns, len(data))

    @classmethod
    def initialize(cls, rows: int, columns: int, drop_ratio: float) -> "Grid":
        return cls(rows, columns, drop_ratio)

    @property
    def size(self) -> int:
        return self.rows * self.columns

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)

    def __repr__(self) -> str:
        return (
            f"Grid(rows={self.rows}, columns={self.columns}, "
            f"drop_ratio={self.drop_ratio}, drop_count={self.drop_count})"
        )

    def contains(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def get(self, row: int, column: int) -> int:
        if not self.contains(row, column):
            return BLANK
        return self.data[row * self.columns + column]

    def set(self, row: int, column: int, cell: int) -> None:
        if not self.contains(row, column):
            return
        idx = row * self.columns + column
        was_drop = decode_state(self.data[idx]) == CellState.DROP
        is_drop = decode_state(cell) == CellState.DROP
        if is_drop and not was_drop:
            self.drop_count += 1
        elif was_drop and not is_drop:
            self.drop_count -= 1
        self.data[idx] = cell

    def set_character(self, row: int, column: int, character: int) -> None:
        self.set(row, column, with_character(self.get(row, column), character))

    def set_state(self, row: int, column: int, state: int, aux: int = 0) -> None:
        self.set(row, column, with_state(self.get(row, column), state, aux))

    def fill_random(self, rng: random.Random) -> None:
        """Reset every cell to NONE with a random background character."""
        randint = rng.randint
        none = CellState.NONE
        for idx in range(self.size):
            self.data[idx] = encode(randint(ASCII_MIN, ASCII_MAX), none, 0)
        self.drop_count = 0

    def count_drops(self) -> int:
        return sum(1 for cell in self.data if decode_state(cell) == CellState.DROP)

    def row(self, row: int) -> array:
        start = row * self.columns
        return self.data[start:start + self.columns]

    def column(self, column: int) -> list:
        return [self.data[r * self.columns + column] for r in range(self.rows)]

    def snapshot(self) -> bytes:
        return self.data.tobytes()
