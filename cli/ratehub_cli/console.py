from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console()


def print_json(data) -> None:
    console.print_json(data=data)


def info(msg: str) -> None:
    console.print(f"[bold cyan]•[/] {escape(msg)}")


def ok(msg: str) -> None:
    console.print(f"[bold green]OK[/] {msg}")


def warn(msg: str) -> None:
    console.print(f"[bold yellow]WARN[/] {msg}")


def err(msg: str) -> None:
    console.print(f"[bold red]ERR[/] {escape(msg)}")


def print(*args, **kwargs):
    """Proxy to underlying rich Console.print()."""
    console.print(*args, **kwargs)


def quota(remaining: int, limit: int | None, reset: str) -> None:
    """Print a rate-limit status line, red when exhausted, yellow under 10%."""
    style = "green"
    if remaining <= 0:
        style = "red"
    elif limit and remaining * 10 < limit:
        style = "yellow"
    total = f"/{limit}" if limit is not None else ""
    console.print(f"[bold {style}]quota[/] {remaining}{total} remaining, reset {escape(reset)}")
