# charrain/ui/signals.py

from __future__ import annotations

import logging
import signal
from typing import Any, Dict

from ..engine import Event

logger = logging.getLogger(__name__)

_STOP_SIGNALS = ("SIGINT", "SIGQUIT", "SIGTERM")
_RESIZE_SIGNAL = "SIGWINCH"


class SignalEvents:
    """
    Translate process signals into engine events.

    The handlers only record what happened; the frame loop collects it with
    `poll()` once per tick. A stop request outranks a pending resize.
    Signals the platform lacks (SIGWINCH, SIGQUIT on Windows) are skipped.
    """

    def __init__(self) -> None:
        self._resized = False
        self._stopped = False
        self._previous: Dict[int, Any] = {}

    def _on_signal(self, signum: int, frame: Any) -> None:
        if signum == getattr(signal, _RESIZE_SIGNAL, None):
            self._resized = True
        else:
            self._stopped = True

    def install(self) -> "SignalEvents":
        for name in (_RESIZE_SIGNAL,) + _STOP_SIGNALS:
            signum = getattr(signal, name, None)
            if signum is None:
                continue
            self._previous[signum] = signal.signal(signum, self._on_signal)
        logger.debug("Installed handlers for %d signals", len(self._previous))
        return self

    def restore(self) -> None:
        for signum, handler in self._previous.items():
            # None: the previous handler was not installed from Python
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous.clear()

    def __enter__(self) -> "SignalEvents":
        return self.install()

    def __exit__(self, *exc_info) -> None:
        self.restore()

    def request_stop(self) -> None:
        self._stopped = True

    def request_resize(self) -> None:
        self._resized = True

    def poll(self) -> Event:
        if self._stopped:
            return Event.STOP
        if self._resized:
            self._resized = False
            return Event.RESIZED
        return Event.NONE
