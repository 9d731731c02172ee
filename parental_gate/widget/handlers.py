"""Web handlers for the Gradio parental gate demo.

Click → service.request → coordinator queues → timer polls snapshot → gate appears.

Every handler returns the same tuple of updates (see `render`), so they can
all share one output list in the wiring.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import gradio as gr
from loguru import logger

from parental_gate.core.models import GateKind, GateSnapshot
from parental_gate.widget.services import GateService

Updates = Tuple[Any, ...]


def _format_activity(lines: List[str]) -> str:
    """Format the activity log for markdown display, newest first."""
    if not lines:
        return "*No activity yet.*"
    return "\n".join(f"- {line}" for line in reversed(lines))


def _format_queue(snap: GateSnapshot) -> str:
    waiting = snap.queue_size - (1 if snap.visible else 0)
    if waiting <= 0:
        return ""
    return f"⏳ {waiting} more approval(s) waiting."


def render(service: GateService, answer_slots: int) -> Updates:
    """Build updates for the gate panel and activity log from the current snapshot.

    Returns:
        (container, title, message, prompt, *answer buttons, queue info,
        activity, shown gate id)
    """
    snap = service.snapshot()
    activity = gr.update(value=_format_activity(service.activity()))
    queue_info = gr.update(value=_format_queue(snap))

    if not snap.visible:
        hidden_btns = [gr.update(visible=False) for _ in range(answer_slots)]
        return (
            gr.update(visible=False),
            gr.update(value=""),
            gr.update(value=""),
            gr.update(value=""),
            *hidden_btns,
            queue_info,
            activity,
            None,
        )

    if len(snap.options) > answer_slots:
        logger.warning(
            f"Challenge {snap.prompt!r} has {len(snap.options)} options but only "
            f"{answer_slots} answer buttons."
        )
    btns = []
    for idx in range(answer_slots):
        if idx < len(snap.options):
            btns.append(gr.update(value=str(snap.options[idx]), visible=True))
        else:
            btns.append(gr.update(visible=False))

    return (
        gr.update(visible=True),
        gr.update(value=f"## {snap.title}"),
        gr.update(value=snap.message),
        gr.update(value=f"### {snap.prompt}"),
        *btns,
        queue_info,
        activity,
        snap.request_id,
    )


def on_request(service: GateService, kind: GateKind, answer_slots: int) -> Updates:
    """Handle clicking one of the demo action buttons."""
    logger.debug(f"on_request called for {kind.value}")
    service.request(kind)
    return render(service, answer_slots)


def on_answer(
    service: GateService,
    answer_slots: int,
    label: str,
    shown_id: Optional[str] = None,
) -> Updates:
    """Handle clicking an answer button; the button label is the answer.

    The answer only counts for the gate this session was showing, so a tab
    that has not polled since the gate changed cannot resolve the next one.
    """
    logger.debug(f"on_answer called with {label!r} for {shown_id}")
    try:
        selected = int(str(label).strip())
    except ValueError:
        logger.warning(f"Ignoring non-numeric answer {label!r}")
        return render(service, answer_slots)
    service.answer(selected, request_id=shown_id)
    return render(service, answer_slots)


def on_cancel(
    service: GateService, answer_slots: int, shown_id: Optional[str] = None
) -> Updates:
    """Handle clicking Cancel on the gate panel."""
    logger.debug(f"on_cancel called for {shown_id}")
    service.cancel(request_id=shown_id)
    return render(service, answer_slots)


def poll_fn(service: GateService, answer_slots: int) -> Updates:
    """Poll the coordinator so gates shown after a cooldown appear on their own."""
    return render(service, answer_slots)
