"""
The rain matrix engine: packed cells, the grid, the rain state machine,
glitches and frame rendering. Nothing in here touches the terminal.
"""

from .cell import (
    ASCII_MAX,
    ASCII_MIN,
    TSIZE_MAX,
    TSIZE_MIN,
    CellState,
    decode,
    decode_aux,
    decode_character,
    decode_state,
    encode,
)
from .driver import Event, Frame, FrameSink, RainEngine
from .glitch import glitch
from .grid import Grid
from .rain import (
    DEFAULT_PALETTE_SIZE,
    drop_target,
    advance,
    advance_column,
    place_drop,
    rain,
    spawn,
    tail_color,
    update,
)
from .render import HEAD, render, render_layer, render_rows

__all__ = [
    "ASCII_MAX",
    "ASCII_MIN",
    "TSIZE_MAX",
    "TSIZE_MIN",
    "CellState",
    "decode",
    "decode_aux",
    "decode_character",
    "decode_state",
    "encode",
    "Event",
    "Frame",
    "FrameSink",
    "RainEngine",
    "glitch",
    "Grid",
    "DEFAULT_PALETTE_SIZE",
    "drop_target",
    "advance",
    "advance_column",
    "place_drop",
    "rain",
    "spawn",
    "tail_color",
    "update",
    "HEAD",
    "render",
    "render_layer",
    "render_rows",
]
