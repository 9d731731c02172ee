"""Parental gate panel UI components."""

from typing import List, NamedTuple

import gradio as gr

from parental_gate.widget.helpers import spacer


class GateUI(NamedTuple):
    """Parental gate panel UI components."""

    container: gr.Group
    title: gr.Markdown
    message: gr.Markdown
    prompt: gr.Markdown
    answer_btns: List[gr.Button]
    cancel_btn: gr.Button
    queue_info: gr.Markdown
    timer: gr.Timer
    shown_id: gr.State


def build_gate(answer_slots: int = 4, poll_seconds: float = 0.5) -> GateUI:
    """Build the (initially hidden) gate panel.

    Args:
        answer_slots: Number of answer buttons; unused ones are hidden.
        poll_seconds: How often the panel re-reads the coordinator.
    """
    with gr.Group(visible=False) as group:
        title = gr.Markdown()
        message = gr.Markdown()
        spacer(8)
        prompt = gr.Markdown()
        answer_btns = []
        # 2 x N grid of answer buttons
        for row_start in range(0, answer_slots, 2):
            with gr.Row(equal_height=True):
                for _ in range(row_start, min(row_start + 2, answer_slots)):
                    answer_btns.append(gr.Button("", variant="secondary"))
        spacer(8)
        cancel_btn = gr.Button("Cancel", variant="stop")

    queue_info = gr.Markdown()

    # Polling timer so gates queued from elsewhere show up on their own
    timer = gr.Timer(poll_seconds, active=True)

    # id of the gate this browser session is showing
    shown_id = gr.State(None)

    return GateUI(
        container=group,
        title=title,
        message=message,
        prompt=prompt,
        answer_btns=answer_btns,
        cancel_btn=cancel_btn,
        queue_info=queue_info,
        timer=timer,
        shown_id=shown_id,
    )
