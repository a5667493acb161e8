# charrain/ui/screen.py

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.live import Live
from rich.style import Style
from rich.text import Text

from ..engine import Frame
from .theme import Theme


def build_text(frame: Frame, theme: Theme) -> Text:
    """
    Turn a frame into one Rich Text, one line per grid row.

    Consecutive glyphs sharing a style are appended as a single run to keep
    the markup small.
    """
    text = Text(no_wrap=True, overflow="crop", end="")
    run: List[str] = []
    run_style: Optional[Style] = None
    column = 0
    row = 0

    def flush() -> None:
        if run:
            text.append("".join(run), style=run_style)
            run.clear()

    for glyph, color_class in frame.glyphs:
        style = theme.style_for(color_class)
        if style != run_style:
            flush()
            run_style = style
        run.append(glyph)

        column += 1
        if column == frame.columns:
            column = 0
            row += 1
            if row < frame.rows:
                run.append("\n")

    flush()
    return text


class RichSink:
    """
    Frame sink drawing into the terminal's alternate screen.

    Use as a context manager; the cursor is hidden while it is open and the
    terminal is restored on exit, also when the loop raises.
    """

    def __init__(self, theme: Theme, console: Optional[Console] = None) -> None:
        self.theme = theme
        self.console = console or Console()
        self._live: Optional[Live] = None

    def __enter__(self) -> "RichSink":
        self._live = Live(
            "",
            console=self.console,
            screen=True,
            auto_refresh=False,
            transient=False,
        )
        self._live.start()
        self.console.show_cursor(False)
        return self

    def __exit__(self, *exc_info) -> None:
        try:
            if self._live is not None:
                self._live.stop()
        finally:
            self._live = None
            self.console.show_cursor(True)

    def __call__(self, frame: Frame) -> None:
        if self._live is None:
            raise RuntimeError("RichSink must be opened before drawing frames.")
        self._live.update(build_text(frame, self.theme), refresh=True)
