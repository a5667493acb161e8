# charrain/commands/debug.py
from __future__ import annotations

from enum import Enum
from typing import Optional

import typer

from ..config import RainConfig, load_config
from ..engine import Frame, RainEngine, drop_target, render_layer
from ..errors import ConfigError
from ..util.console import error, success


class Layer(str, Enum):
    ascii = "ascii"
    state = "state"
    aux = "aux"


def _discard(frame: Frame) -> None:
    pass


def main(
    ctx: typer.Context,
    rows: int = typer.Option(24, "--rows", help="Grid rows."),
    cols: int = typer.Option(80, "--cols", help="Grid columns."),
    ticks: int = typer.Option(10, "--ticks", "-t", min=0, help="Ticks to run before dumping."),
    layer: Layer = typer.Option(Layer.state, "--layer", "-l", help="Cell field to print."),
    seed: int = typer.Option(1, "--seed", "-r", help="Seed for the random number generator."),
    drops: Optional[float] = typer.Option(None, "--drops", "-d", show_default=False),
    error_ratio: Optional[float] = typer.Option(None, "--error", "-e", show_default=False),
    instant: bool = typer.Option(
        False, "--instant/--no-instant", help="Start with a full rain, as after a resize."
    ),
    check: bool = typer.Option(
        False, "--check", help="Verify the drop count by a full scan; exit 1 on mismatch."
    ),
) -> None:
    """
    Run the engine headless and print one field of every cell.

    state: 0 none, 1 drop, 2 tail. aux: tail length (drop) or color index
    (tail), as a base 36 digit.
    """
    base = ctx.obj if isinstance(ctx.obj, RainConfig) else load_config()
    try:
        cfg = base.with_overrides(drops=drops, error=error_ratio, seed=seed).resolve()
        engine = RainEngine(
            rows,
            cols,
            drop_ratio=cfg.drops,
            glitch_fraction=cfg.error,
            palette_size=len(cfg.palette),
            seed=cfg.seed,
        )
    except ConfigError as e:
        error(f"Invalid configuration: {e}")
        raise typer.Exit(2)

    if instant:
        engine.resize(rows, cols)
    for _ in range(ticks):
        engine.tick(_discard)

    grid = engine.grid
    for line in render_layer(grid, layer.value):
        typer.echo(line)

    target = drop_target(grid)
    typer.echo(f"frames={engine.frames} drops={grid.drop_count} target={target}")

    if check:
        counted = grid.count_drops()
        if counted != grid.drop_count:
            error(f"drop_count is {grid.drop_count} but the grid holds {counted} drops")
            raise typer.Exit(1)
        success(f"drop_count matches the grid ({counted}).")
