# charrain/util/logs.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from logging.handlers import MemoryHandler
from typing import Iterator

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"
LOGGER_NAME = "charrain"


def setup_logging(verbose: bool = False) -> None:
    """
    Route the package's log records through Rich, on stderr.

    Frames own stdout while the rain runs, so nothing is logged there.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger(LOGGER_NAME)
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


@contextmanager
def held_logs(name: str = LOGGER_NAME) -> Iterator[None]:
    """
    Keep log records of `name` back until the block exits, then emit them.

    The alternate screen repaints the whole terminal; a line written to
    stderr while it is up would land on top of the rain.
    """
    log = logging.getLogger(name)
    handlers = log.handlers[:]
    if not handlers:
        yield
        return

    # no target: nothing is flushed before the records are replayed below
    buffer = MemoryHandler(capacity=1024, flushLevel=logging.CRITICAL + 1)
    for handler in handlers:
        log.removeHandler(handler)
    log.addHandler(buffer)
    try:
        yield
    finally:
        log.removeHandler(buffer)
        for handler in handlers:
            log.addHandler(handler)
        for record in buffer.buffer:
            log.handle(record)
        buffer.close()
