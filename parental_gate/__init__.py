"""Parental gate: serialized math-challenge confirmations for sensitive actions."""

from parental_gate.core.challenges import DEFAULT_CHALLENGES, ChallengePool
from parental_gate.core.coordinator import GateCoordinator
from parental_gate.core.links import GatedLink
from parental_gate.core.models import (
    Challenge,
    GateKind,
    GateRequest,
    GateSnapshot,
    GateState,
)
from parental_gate.core.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    ThreadScheduler,
)

__all__ = [
    "AsyncioScheduler",
    "Challenge",
    "ChallengePool",
    "DEFAULT_CHALLENGES",
    "GateCoordinator",
    "GateKind",
    "GateRequest",
    "GateSnapshot",
    "GateState",
    "GatedLink",
    "ManualScheduler",
    "Scheduler",
    "ThreadScheduler",
]
