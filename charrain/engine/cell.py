# charrain/engine/cell.py
"""
Packed cell values.

Every grid cell is a single 16 bit integer:

    15 14 13 12 11 10  9  8  7  6  5  4  3  2  1  0
    '---------------' '---' '---------------------'
          AUX         STATE        CHARACTER

CHARACTER: printable ASCII code (32 through 126)
STATE:     NONE, DROP or TAIL
AUX:       tail length for a DROP, color index for a TAIL, 0 for NONE
"""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

BITMASK_ASCII = 0x00FF
BITMASK_STATE = 0x0300
BITMASK_AUX = 0xFC00

SHIFT_STATE = 8
SHIFT_AUX = 10

ASCII_MIN = 32
ASCII_MAX = 126

TSIZE_MIN = 8
TSIZE_MAX = 63


class CellState(IntEnum):
    NONE = 0
    DROP = 1
    TAIL = 2


def encode(character: int, state: int, aux: int = 0) -> int:
    """Pack (character, state, aux) into one cell value."""
    return (
        (BITMASK_AUX & (aux << SHIFT_AUX))
        | (BITMASK_STATE & (state << SHIFT_STATE))
        | (BITMASK_ASCII & character)
    )


def decode_character(cell: int) -> int:
    return cell & BITMASK_ASCII


def decode_state(cell: int) -> CellState:
    return CellState((cell & BITMASK_STATE) >> SHIFT_STATE)


def decode_aux(cell: int) -> int:
    return (cell & BITMASK_AUX) >> SHIFT_AUX


def decode(cell: int) -> Tuple[int, CellState, int]:
    return decode_character(cell), decode_state(cell), decode_aux(cell)


def with_character(cell: int, character: int) -> int:
    """Replace the character, keeping state and aux."""
    return (cell & ~BITMASK_ASCII & 0xFFFF) | (BITMASK_ASCII & character)


def with_state(cell: int, state: int, aux: int = 0) -> int:
    """Replace state and aux, keeping the character. NONE always clears aux."""
    if state == CellState.NONE:
        aux = 0
    return encode(decode_character(cell), state, aux)


# Neutral value read back for coordinates outside the grid.
BLANK = encode(ord(" "), CellState.NONE, 0)
