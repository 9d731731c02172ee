"""Gradio demo widget for the parental gate."""

from __future__ import annotations

import gradio as gr
from loguru import logger

from parental_gate.widget.services import GateService
from parental_gate.widget.ui.demo import build_demo
from parental_gate.widget.ui.gate import build_gate
from parental_gate.widget.wiring import wire_handlers

DEFAULT_BANNER = "<b>DEMO</b> Parental gate playground."


def build_widget(service: GateService, banner: str = DEFAULT_BANNER) -> gr.Blocks:
    """Build the Gradio app around a running gate service."""
    slots = max(len(c.options) for c in service.coordinator.pool)
    logger.debug(f"Building parental gate widget with {slots} answer slots.")

    with gr.Blocks(title="Parental Gate") as app:
        demo = build_demo(banner=banner)
        gate = build_gate(answer_slots=slots)
        wire_handlers(service, gate, demo)

    return app
