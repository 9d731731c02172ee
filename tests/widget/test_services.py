"""Tests for the widget's gate service."""

import pytest

from parental_gate.core.challenges import ChallengePool
from parental_gate.core.coordinator import GateCoordinator
from parental_gate.core.models import Challenge, GateKind, GateState
from parental_gate.core.scheduler import ManualScheduler, ThreadScheduler
from parental_gate.widget.services import GateService, create_service

CHALLENGE = Challenge("What is 1 + 1?", (1, 2, 3, 4), 2)


@pytest.fixture
def service():
    svc = create_service(pool=ChallengePool([CHALLENGE]), cooldown=0.05)
    yield svc
    svc.close()


@pytest.mark.unit
def test_coordinator_must_share_scheduler():
    sched = ThreadScheduler()
    try:
        with pytest.raises(ValueError):
            GateService(GateCoordinator(scheduler=ManualScheduler()), sched)
    finally:
        sched.stop()


@pytest.mark.unit
def test_request_shows_gate_and_logs(service):
    number = service.request("purchase")

    snap = service.snapshot()
    assert number == 1
    assert snap.visible is True
    assert snap.kind is GateKind.PURCHASE
    assert service.activity()[-1].endswith("#1 purchase: requested")


@pytest.mark.unit
def test_answer_and_cancel_are_logged(service):
    service.request(GateKind.LINK)
    service.answer(2)
    service.request(GateKind.SETTINGS)
    service.cancel()

    lines = service.activity()
    assert [line.split(" ", 1)[1] for line in lines] == [
        "#1 link: requested",
        "#1 link: approved",
        "#2 settings: requested",
        "#2 settings: cancelled",
    ]
    assert service.snapshot().state is GateState.IDLE


@pytest.mark.unit
def test_close_stops_scheduler():
    svc = create_service(pool=ChallengePool([CHALLENGE]))
    svc.request("purchase")

    svc.close()

    assert not svc.scheduler.thread.is_alive()


@pytest.mark.unit
def test_answer_for_stale_gate_is_dropped(service):
    service.request(GateKind.PURCHASE)
    shown = service.snapshot().request_id

    assert service.answer(2, request_id="not-" + shown) is False
    assert service.cancel(request_id="not-" + shown) is False
    assert service.snapshot().request_id == shown

    assert service.answer(2, request_id=shown) is True
    assert service.activity()[-1].endswith("#1 purchase: approved")


@pytest.mark.unit
def test_answer_without_active_gate(service):
    assert service.answer(2) is False
    assert service.cancel() is False
