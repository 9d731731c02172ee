"""Shared fixtures for parental gate tests."""

from typing import Callable, List

import pytest

from parental_gate.core.challenges import ChallengePool
from parental_gate.core.coordinator import GateCoordinator
from parental_gate.core.models import Challenge
from parental_gate.core.scheduler import ManualScheduler

COOLDOWN = 0.5

# Single-challenge pool so every gate has a known answer.
ONLY_CHALLENGE = Challenge("What is 1 + 1?", (1, 2, 3, 4), 2)


class CallLog:
    """Records callback invocations in the order they happen."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def make(self, name: str) -> Callable[[], None]:
        return lambda: self.calls.append(name)

    def count(self, name: str) -> int:
        return self.calls.count(name)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def pool() -> ChallengePool:
    return ChallengePool([ONLY_CHALLENGE])


@pytest.fixture
def coordinator(pool, scheduler) -> GateCoordinator:
    """A coordinator with a known challenge and a manually driven clock."""
    return GateCoordinator(pool=pool, scheduler=scheduler, cooldown=COOLDOWN)


@pytest.fixture
def log() -> CallLog:
    return CallLog()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep host environment settings out of config resolution."""
    for var in ("PARENTAL_GATE_COOLDOWN", "PARENTAL_GATE_CHALLENGES", "PARENTAL_GATE_SEED"):
        monkeypatch.delenv(var, raising=False)
