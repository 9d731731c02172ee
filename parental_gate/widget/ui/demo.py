"""Demo action UI components."""
from typing import NamedTuple

import gradio as gr


class DemoUI(NamedTuple):
    container: gr.Group
    purchase_btn: gr.Button
    link_btn: gr.Button
    settings_btn: gr.Button
    activity: gr.Markdown


def build_demo(banner: str = "") -> DemoUI:
    with gr.Group() as group:
        if banner:
            gr.Markdown(banner)
        gr.Markdown(
            """
            ## Sensitive actions

            Each button asks for parental approval. Click several in a row:
            the gates are shown one at a time, in the order you clicked.
            """
        )
        with gr.Row():
            purchase_btn = gr.Button("Buy Premium", variant="primary")
            link_btn = gr.Button("Open Website")
            settings_btn = gr.Button("Change Settings")
        activity = gr.Markdown("*No activity yet.*")
    return DemoUI(
        container=group,
        purchase_btn=purchase_btn,
        link_btn=link_btn,
        settings_btn=settings_btn,
        activity=activity,
    )
