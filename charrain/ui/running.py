# charrain/ui/running.py

from __future__ import annotations

import logging
import time
from contextlib import ExitStack
from shutil import get_terminal_size
from typing import Callable, Optional, Tuple

from rich.console import Console

from ..config import RainConfig
from ..engine import Event, FrameSink, RainEngine
from ..util.logs import held_logs
from .screen import RichSink
from .signals import SignalEvents
from .theme import Theme

logger = logging.getLogger(__name__)


def terminal_size() -> Tuple[int, int]:
    """Current terminal size as (rows, columns)."""
    ts = get_terminal_size(fallback=(80, 24))
    return ts.lines, ts.columns


def run_rain(
    config: RainConfig,
    *,
    console: Optional[Console] = None,
    sink: Optional[FrameSink] = None,
    events: Optional[SignalEvents] = None,
    max_frames: int = 0,
    size: Callable[[], Tuple[int, int]] = terminal_size,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """
    Let it rain until a stop signal arrives (or `max_frames` ticks, if set).

    `config` must be resolved. Without an explicit sink or event source the
    terminal's alternate screen and the process signal handlers are used.
    Frames are paced on a monotonic clock; when a frame runs late the loop
    does not try to catch up. Returns the number of frames drawn.
    """
    rows, columns = size()
    engine = RainEngine(
        rows,
        columns,
        drop_ratio=config.drops,
        glitch_fraction=config.error,
        palette_size=len(config.palette),
        seed=config.seed,
    )
    logger.info(
        "Starting rain on %dx%d (drops=%.2f error=%.2f speed=%.2f seed=%d)",
        rows, columns, config.drops, config.error, config.speed, config.seed,
    )

    with ExitStack() as stack:
        if sink is None:
            # entered first, so records are replayed after the screen is gone
            stack.enter_context(held_logs())
            sink = stack.enter_context(RichSink(Theme(config.palette, config.bg_color), console))
        if events is None:
            events = stack.enter_context(SignalEvents())

        delay = config.frame_delay
        next_tick = clock()
        while True:
            event = events.poll()
            new_size = size() if event is Event.RESIZED else None
            if not engine.tick(sink, event, new_size):
                break
            if max_frames and engine.frames >= max_frames:
                break

            next_tick += delay
            now = clock()
            sleep_for = next_tick - now
            if sleep_for > 0:
                sleep(sleep_for)
            else:
                next_tick = now

    logger.info("Rain stopped after %d frames", engine.frames)
    return engine.frames
