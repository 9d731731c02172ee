"""CLI command for listing the challenge pool."""

import typer
from rich.table import Table

from parental_gate.cli.common import echo, resolve_config
from parental_gate.config import build_pool
from parental_gate.errors import ChallengePoolError


def challenges(ctx: typer.Context) -> None:
    """List the challenges gates are drawn from."""
    config = resolve_config(ctx)
    try:
        pool = build_pool(config)
    except ChallengePoolError as e:
        echo(ctx, f"Failed to load challenges: {e}", style="error")
        raise typer.Exit(code=1)

    source = str(config.challenges_file) if config.challenges_file else "built-in"
    table = Table(
        title=f"Challenges ({source})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("#", justify="right")
    table.add_column("Prompt")
    table.add_column("Options")
    table.add_column("Answer", justify="right")

    for idx, c in enumerate(pool, start=1):
        table.add_row(
            str(idx),
            c.prompt,
            ", ".join(str(o) for o in c.options),
            str(c.correct_answer),
        )

    echo(ctx, table)
