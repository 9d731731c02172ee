"""CLI play command: drive queued parental gates from the terminal."""

import time
from functools import partial
from typing import List, Optional, Tuple

import typer
from loguru import logger
from rich.panel import Panel
from rich.table import Table

from parental_gate.cli.common import console, echo, resolve_config
from parental_gate.config import build_coordinator
from parental_gate.core.coordinator import GateCoordinator
from parental_gate.core.models import GateKind, GateSnapshot, parse_kind
from parental_gate.core.scheduler import ManualScheduler
from parental_gate.errors import ChallengePoolError

DEFAULT_KINDS = [k.value for k in GateKind]
CANCEL_WORDS = {"c", "cancel"}

Outcome = Tuple[int, str, str]


def _record(outcomes: List[Outcome], number: int, name: str, result: str) -> None:
    outcomes.append((number, name, result))


def _show_gate(snap: GateSnapshot) -> None:
    body = (
        f"{snap.message}\n\n"
        f"[bold]{snap.prompt}[/bold]\n\n"
        + "   ".join(f"[cyan]{o}[/cyan]" for o in snap.options)
    )
    subtitle = f"{snap.queue_size - 1} waiting" if snap.queue_size > 1 else None
    console.print(Panel(body, title=snap.title, subtitle=subtitle, expand=False))


def _drive(
    ctx: typer.Context,
    coordinator: GateCoordinator,
    scheduler: ManualScheduler,
    fast: bool,
) -> None:
    """Act as the presentation surface until nothing is queued or scheduled."""
    while True:
        snap = coordinator.snapshot()
        if not snap.visible:
            delay = scheduler.next_delay()
            if delay is None:
                return
            if not fast:
                time.sleep(delay)
            scheduler.advance(delay)
            continue

        _show_gate(snap)
        raw = typer.prompt("Answer (or 'c' to cancel)").strip()
        if raw.lower() in CANCEL_WORDS:
            coordinator.cancel_active()
            continue
        try:
            selected = int(raw)
        except ValueError:
            echo(ctx, f"'{raw}' is not a number, try again.", style="warning")
            continue
        coordinator.submit_answer(selected)


def play(
    ctx: typer.Context,
    kinds: Optional[List[str]] = typer.Argument(
        None,
        help="Kinds of approval to request, in order (default: purchase link settings).",
    ),
    fast: bool = typer.Option(
        False, "--fast", help="Skip the real-time pause between gates."
    ),
) -> None:
    """Queue several approvals at once and answer their gates one by one."""
    config = resolve_config(ctx)
    scheduler = ManualScheduler()
    try:
        coordinator = build_coordinator(config, scheduler=scheduler)
    except ChallengePoolError as e:
        echo(ctx, f"Failed to load challenges: {e}", style="error")
        raise typer.Exit(code=1)

    outcomes: List[Outcome] = []
    for number, raw_kind in enumerate(kinds or DEFAULT_KINDS, start=1):
        kind = parse_kind(raw_kind)
        name = getattr(kind, "value", kind)
        coordinator.request_approval(
            kind,
            on_approve=partial(_record, outcomes, number, name, "approved"),
            on_cancel=partial(_record, outcomes, number, name, "cancelled"),
        )
    logger.debug(f"Queued {coordinator.queue_size} parental gate request(s).")

    try:
        _drive(ctx, coordinator, scheduler, fast=fast)
    except typer.Abort:
        coordinator.close()
        raise

    table = Table(title="Outcomes", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Outcome")
    for number, name, result in outcomes:
        style = "green" if result == "approved" else "red"
        table.add_row(str(number), name, f"[{style}]{result}[/{style}]")
    echo(ctx, table)
