# charrain/util/console.py
from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def success(msg: str) -> None:
    console.print(f"[bold green]✓[/] {escape(msg)}")


def error(msg: str) -> None:
    err_console.print(f"[bold red]✗ {escape(msg)}[/]")
