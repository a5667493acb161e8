# charrain/engine/driver.py
from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Iterator, NamedTuple, Optional, Tuple

from ..errors import ConfigError
from .glitch import glitch
from .grid import Grid
from .rain import DEFAULT_PALETTE_SIZE, rain, update
from .render import Glyph, render

logger = logging.getLogger(__name__)


class Event(Enum):
    """What happened outside the engine since the previous tick."""

    NONE = "none"
    RESIZED = "resized"
    STOP = "stop"


class Frame(NamedTuple):
    rows: int
    columns: int
    glyphs: Iterator[Glyph]


FrameSink = Callable[[Frame], None]


class RainEngine:
    """
    Owns the grid and runs one tick at a time: render, glitch, advance.

    The engine never sleeps and never looks at signals or the terminal;
    the caller passes in an `Event` and, for resizes, the new size.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        *,
        drop_ratio: float,
        glitch_fraction: float,
        palette_size: int = DEFAULT_PALETTE_SIZE,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        if not 0.0 <= glitch_fraction < 1.0:
            raise ConfigError(f"Glitch fraction must be within [0, 1), got {glitch_fraction}.")
        if palette_size < 2:
            raise ConfigError("A palette needs a drop color and at least one tail color.")

        self.rng = rng if rng is not None else random.Random(seed)
        self.drop_ratio = drop_ratio
        self.glitch_fraction = glitch_fraction
        self.palette_size = palette_size
        self.frames = 0

        self.grid = Grid(rows, columns, drop_ratio)
        self.grid.fill_random(self.rng)

    @property
    def size(self) -> Tuple[int, int]:
        return self.grid.rows, self.grid.columns

    def resize(self, rows: int, columns: int, *, instant_rain: bool = True) -> Grid:
        """Replace the grid with a freshly filled one of the given size."""
        grid = Grid(rows, columns, self.drop_ratio)
        grid.fill_random(self.rng)
        if instant_rain:
            rain(grid, self.rng, self.palette_size)
        self.grid = grid
        logger.debug("Resized to %dx%d with %d drops", rows, columns, grid.drop_count)
        return grid

    def tick(
        self,
        sink: FrameSink,
        event: Event = Event.NONE,
        size: Optional[Tuple[int, int]] = None,
    ) -> bool:
        """
        Run one tick. Returns False (and does nothing else) on `Event.STOP`.
        """
        if event is Event.STOP:
            logger.debug("Stopped after %d frames", self.frames)
            return False

        if event is Event.RESIZED:
            if size is None:
                raise ValueError("A resize event needs the new (rows, columns).")
            self.resize(*size)

        grid = self.grid
        sink(Frame(grid.rows, grid.columns, render(grid)))
        glitch(grid, self.glitch_fraction, self.rng)
        update(grid, self.rng, self.palette_size)
        self.frames += 1
        return True
