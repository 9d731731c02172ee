"""Wiring of event handlers to widget components."""

from functools import partial

from parental_gate.core.models import GateKind
from parental_gate.widget.handlers import on_answer, on_cancel, on_request, poll_fn
from parental_gate.widget.services import GateService
from parental_gate.widget.ui.demo import DemoUI
from parental_gate.widget.ui.gate import GateUI


def wire_handlers(service: GateService, gate: GateUI, demo: DemoUI) -> None:
    """Wire event handlers to widget components."""
    slots = len(gate.answer_btns)
    outputs = [
        gate.container,
        gate.title,
        gate.message,
        gate.prompt,
        *gate.answer_btns,
        gate.queue_info,
        demo.activity,
        gate.shown_id,
    ]

    # Wire demo action buttons
    for btn, kind in (
        (demo.purchase_btn, GateKind.PURCHASE),
        (demo.link_btn, GateKind.LINK),
        (demo.settings_btn, GateKind.SETTINGS),
    ):
        btn.click(
            fn=partial(on_request, service, kind, slots),
            inputs=None,
            outputs=outputs,
        )

    # Wire answer buttons; each passes its own label and the shown gate id
    for btn in gate.answer_btns:
        btn.click(
            fn=partial(on_answer, service, slots),
            inputs=[btn, gate.shown_id],
            outputs=outputs,
        )

    gate.cancel_btn.click(
        fn=partial(on_cancel, service, slots),
        inputs=[gate.shown_id],
        outputs=outputs,
    )

    gate.timer.tick(
        # wire polling timer for gates shown after a cooldown
        fn=partial(poll_fn, service, slots),
        inputs=None,
        outputs=outputs,
    )
