# charrain/ui/theme.py

from __future__ import annotations

from typing import Dict, Optional, Sequence

from rich.color import Color
from rich.style import Style

from ..config import PALETTE


class Theme:
    """Maps a frame's color classes to Rich styles."""

    def __init__(self, palette: Sequence[int] = PALETTE, bg_color: Optional[int] = None) -> None:
        self.palette = tuple(palette)
        self.bg_color = bg_color
        bgcolor = Color.from_ansi(bg_color) if bg_color is not None else None

        self.blank = Style(bgcolor=bgcolor)
        self._styles: Dict[int, Style] = {
            slot: Style(color=Color.from_ansi(code), bgcolor=bgcolor, bold=True)
            for slot, code in enumerate(self.palette)
        }

    def __len__(self) -> int:
        return len(self.palette)

    def style_for(self, color_class: Optional[int]) -> Style:
        if color_class is None:
            return self.blank
        # clamp, a color index can never point past the palette
        slot = min(max(color_class, 0), len(self.palette) - 1)
        return self._styles[slot]
