"""Tests for the Gradio widget handlers."""

import time

import pytest

from parental_gate.core.challenges import ChallengePool
from parental_gate.core.models import Challenge, GateKind
from parental_gate.widget import handlers
from parental_gate.widget.services import create_service

CHALLENGE = Challenge("What is 1 + 1?", (1, 2, 3, 4), 2)
SLOTS = 4

# render() output layout
CONTAINER, TITLE, MESSAGE, PROMPT = 0, 1, 2, 3
BTNS = slice(4, 4 + SLOTS)
QUEUE_INFO = 4 + SLOTS
ACTIVITY = 5 + SLOTS
SHOWN_ID = 6 + SLOTS


@pytest.fixture
def service():
    svc = create_service(pool=ChallengePool([CHALLENGE]), cooldown=0.05)
    yield svc
    svc.close()


def wait_until_visible(service, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if service.snapshot().visible:
            return True
        time.sleep(0.01)
    return False


@pytest.mark.unit
def test_render_hidden_when_idle(service):
    updates = handlers.poll_fn(service, SLOTS)

    assert len(updates) == SLOTS + 7
    assert updates[CONTAINER]["visible"] is False
    assert all(u["visible"] is False for u in updates[BTNS])
    assert updates[QUEUE_INFO]["value"] == ""
    assert updates[ACTIVITY]["value"] == "*No activity yet.*"
    assert updates[SHOWN_ID] is None


@pytest.mark.unit
def test_on_request_shows_gate(service):
    updates = handlers.on_request(service, GateKind.PURCHASE, SLOTS)

    assert updates[CONTAINER]["visible"] is True
    assert updates[TITLE]["value"] == "## Confirm Purchase"
    assert "purchase requires parental approval" in updates[MESSAGE]["value"]
    assert updates[PROMPT]["value"] == "### What is 1 + 1?"
    assert [u["value"] for u in updates[BTNS]] == ["1", "2", "3", "4"]
    assert "purchase: requested" in updates[ACTIVITY]["value"]
    assert updates[SHOWN_ID] == service.snapshot().request_id


@pytest.mark.unit
def test_queue_info_counts_waiting(service):
    handlers.on_request(service, GateKind.PURCHASE, SLOTS)
    updates = handlers.on_request(service, GateKind.LINK, SLOTS)

    # still the first gate
    assert updates[TITLE]["value"] == "## Confirm Purchase"
    assert "1 more approval(s) waiting" in updates[QUEUE_INFO]["value"]


@pytest.mark.unit
def test_correct_answer_approves(service):
    handlers.on_request(service, GateKind.SETTINGS, SLOTS)

    updates = handlers.on_answer(service, SLOTS, "2")

    assert updates[CONTAINER]["visible"] is False
    assert "settings: approved" in updates[ACTIVITY]["value"]


@pytest.mark.unit
def test_wrong_answer_cancels(service):
    handlers.on_request(service, GateKind.SETTINGS, SLOTS)

    updates = handlers.on_answer(service, SLOTS, "3")

    assert updates[CONTAINER]["visible"] is False
    assert "settings: cancelled" in updates[ACTIVITY]["value"]


@pytest.mark.unit
def test_non_numeric_answer_is_ignored(service):
    handlers.on_request(service, GateKind.SETTINGS, SLOTS)

    updates = handlers.on_answer(service, SLOTS, "")

    assert updates[CONTAINER]["visible"] is True


@pytest.mark.unit
def test_on_cancel(service):
    handlers.on_request(service, GateKind.LINK, SLOTS)

    updates = handlers.on_cancel(service, SLOTS)

    assert updates[CONTAINER]["visible"] is False
    assert "link: cancelled" in updates[ACTIVITY]["value"]


@pytest.mark.functional
def test_poll_shows_next_gate_after_cooldown(service):
    handlers.on_request(service, GateKind.PURCHASE, SLOTS)
    handlers.on_request(service, GateKind.LINK, SLOTS)

    updates = handlers.on_answer(service, SLOTS, "2")
    assert updates[CONTAINER]["visible"] is False

    assert wait_until_visible(service)
    updates = handlers.poll_fn(service, SLOTS)
    assert updates[CONTAINER]["visible"] is True
    assert updates[TITLE]["value"] == "## Open Link"


@pytest.mark.unit
def test_extra_slots_are_hidden(service):
    updates = handlers.on_request(service, GateKind.LINK, 6)

    btns = updates[4:10]
    assert [u["visible"] for u in btns] == [True] * 4 + [False] * 2


@pytest.mark.functional
def test_answer_for_a_gate_no_longer_shown_is_ignored(service):
    first = handlers.on_request(service, GateKind.PURCHASE, SLOTS)[SHOWN_ID]
    handlers.on_request(service, GateKind.LINK, SLOTS)
    # another session resolves the purchase gate
    handlers.on_answer(service, SLOTS, "2", service.snapshot().request_id)
    assert wait_until_visible(service)

    updates = handlers.on_answer(service, SLOTS, "2", first)

    assert updates[CONTAINER]["visible"] is True
    assert updates[TITLE]["value"] == "## Open Link"
    assert updates[SHOWN_ID] != first
    assert "link: approved" not in updates[ACTIVITY]["value"]


@pytest.mark.functional
def test_cancel_for_a_gate_no_longer_shown_is_ignored(service):
    first = handlers.on_request(service, GateKind.PURCHASE, SLOTS)[SHOWN_ID]
    handlers.on_request(service, GateKind.SETTINGS, SLOTS)
    handlers.on_cancel(service, SLOTS, first)
    assert wait_until_visible(service)

    updates = handlers.on_cancel(service, SLOTS, first)

    assert updates[CONTAINER]["visible"] is True
    assert updates[TITLE]["value"] == "## Parental Check"
    assert "settings: cancelled" not in updates[ACTIVITY]["value"]
