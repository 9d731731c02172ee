"""Shared cli utilities."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.theme import Theme

from parental_gate.config import GateConfig, load_config
from parental_gate.errors import ParentalGateError
from parental_gate.utils.package import get_package_version

cli_theme = Theme(
    {
        "info": "bold cyan",
        "warning": "bold yellow",
        "error": "bold red",
        "success": "bold green",
        "title": "bold magenta",
    }
)
console = Console(theme=cli_theme)


@dataclass
class GlobalOptions:
    """Global options for the CLI."""

    quiet: bool = False
    config: Optional[Path] = None


def echo(ctx: Optional[typer.Context], message: Any, style: str = "info") -> None:
    """Respect global quiet flag; print only if not quiet."""
    quiet = False
    if ctx is not None and isinstance(getattr(ctx, "obj", None), GlobalOptions):
        quiet = ctx.obj.quiet

    if quiet:
        return

    console.print(message, style=style)


def version_callback(value: bool) -> None:
    """Callback to display version and exit."""
    if value:
        console.print(
            f"parental-gate v{get_package_version()}", style="title", highlight=False
        )
        raise typer.Exit()


def resolve_config(ctx: typer.Context) -> GateConfig:
    """Load the gate config named by the global --config option (if any)."""
    path = ctx.obj.config if isinstance(ctx.obj, GlobalOptions) else None
    try:
        return load_config(path)
    except ParentalGateError as e:
        console.print(f"Failed to load config: {e}", style="error")
        raise typer.Exit(code=1)


def step(msg: str) -> None:
    """Print a step message."""
    typer.secho("• ", fg=typer.colors.BLUE, nl=False)
    typer.secho(msg, fg=typer.colors.BLUE, nl=False)


def done() -> None:
    """Print 'done' message."""
    typer.secho(" done.", fg=typer.colors.BLUE)
