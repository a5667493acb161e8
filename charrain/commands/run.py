# charrain/commands/run.py
from __future__ import annotations

from typing import Optional

import typer

from ..config import RainConfig, load_config
from ..errors import ConfigError, GridAllocationError
from ..ui.running import run_rain
from ..util.console import error


def start(cfg: RainConfig, frames: int = 0) -> int:
    """Resolve `cfg` and run the rain, mapping failures to exit codes."""
    try:
        cfg = cfg.resolve()
    except ConfigError as e:
        error(f"Invalid configuration: {e}")
        raise typer.Exit(2)

    try:
        return run_rain(cfg, max_frames=frames)
    except ConfigError as e:
        # e.g. a terminal reporting zero rows or columns
        error(f"Cannot start: {e}")
        raise typer.Exit(2)
    except GridAllocationError as e:
        error(str(e))
        raise typer.Exit(1)


def main(
    ctx: typer.Context,
    bg: Optional[int] = typer.Option(
        None, "--bg", "-b", help="Background color (0 - 255).", show_default=False
    ),
    drops: Optional[float] = typer.Option(
        None, "--drops", "-d", help="Drops ratio (0.01 - 0.10).", show_default=False
    ),
    error_ratio: Optional[float] = typer.Option(
        None, "--error", "-e", help="Error (glitch) ratio (0.01 - 0.10).", show_default=False
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", "-r", help="Seed for the random number generator.", show_default=False
    ),
    speed: Optional[float] = typer.Option(
        None, "--speed", "-s", help="Speed factor (0.01 - 1.00).", show_default=False
    ),
    frames: int = typer.Option(
        0, "--frames", min=0, help="Stop after this many frames (0 runs until interrupted)."
    ),
) -> None:
    """
    Make it rain. Runs until interrupted (Ctrl+C) unless --frames is given.

    Resizing the terminal restarts the rain at the new size.
    """
    base = ctx.obj if isinstance(ctx.obj, RainConfig) else load_config()
    cfg = base.with_overrides(
        bg_color=bg, drops=drops, error=error_ratio, seed=seed, speed=speed
    )
    start(cfg, frames=frames)
