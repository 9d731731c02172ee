"""Root cli app wiring."""

from pathlib import Path
from typing import Optional

import typer

from parental_gate.cli.commands.challenges import challenges
from parental_gate.cli.commands.play import play
from parental_gate.cli.commands.widget import widget
from parental_gate.cli.common import GlobalOptions, version_callback
from parental_gate.helpers.logging_helpers import configure_logger

app = typer.Typer(
    add_completion=True,
    help="Command line interface for the parental gate.",
)

app.command("challenges")(challenges)
app.command("play")(play)
app.command("widget")(widget)


@app.callback(invoke_without_command=False)
def main(
    ctx: typer.Context,
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-error output."
    ),
    verbose: int = typer.Option(
        0,
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity: -v for INFO, -vv for DEBUG.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Optional gate config YAML file.",
        exists=False,
        dir_okay=False,
        file_okay=True,
    ),
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Also write daily-rotated DEBUG logs to this directory.",
        file_okay=False,
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Initialize global CLI options and context."""
    ctx.obj = GlobalOptions(quiet=quiet, config=config)
    configure_logger(source="parental-gate", quiet=quiet, verbose=verbose, log_dir=log_dir)


if __name__ == "__main__":
    app()
