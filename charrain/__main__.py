from __future__ import annotations

import importlib
import sys
from importlib import metadata
from pathlib import Path
from typing import Optional

import typer

from . import PROGRAM_URL, __version__
from .config import RainConfig, load_config
from .errors import ConfigError
from .util.console import error
from .util.logs import setup_logging

# Create the top-level Typer app
app = typer.Typer(
    name="charrain",
    help="Digital rain for your terminal.",
    add_completion=False,
    no_args_is_help=False,
)


def _register_command(module_name: str, name: str) -> None:
    """
    Import a commands module exposing a `main` function and attach it as the
    command `name`.
    """
    mod = importlib.import_module(module_name)
    app.command(name=name)(mod.main)


_register_command("charrain.commands.run", "run")
_register_command("charrain.commands.debug", "debug")


def _version_string() -> str:
    try:
        return metadata.version("charrain")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return __version__


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: $CHARRAIN_CONFIG or ~/.config/charrain/config.toml).",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version information and exit.",
        is_eager=True,
    ),
) -> None:
    """
    Loads configuration once per process and exposes it to commands via
    ctx.obj. Without a command, `run` is started with default options.
    """
    if version:
        typer.echo(f"charrain {_version_string()}\n{PROGRAM_URL}")
        raise typer.Exit(code=0)

    setup_logging(verbose)

    try:
        cfg: RainConfig = load_config(config)
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(code=2)

    ctx.obj = cfg

    if ctx.invoked_subcommand is None:
        from .commands.run import start

        start(cfg)


def main() -> None:
    app()


if __name__ == "__main__":
    # When run as a module: python -m charrain
    sys.exit(main())
