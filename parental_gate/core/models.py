"""Data types shared by the gate coordinator and its presentation surfaces."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from parental_gate.errors import ChallengeError

Callback = Callable[[], None]

GENERIC_TITLE = "Parental Check"
GENERIC_MESSAGE = "Please solve this simple math problem to continue:"


class GateKind(str, Enum):
    """Why a gate is being shown. Only selects the display text."""

    PURCHASE = "purchase"
    LINK = "link"
    SETTINGS = "settings"

    @property
    def title(self) -> str:
        return _TITLES[self]

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_TITLES = {
    GateKind.PURCHASE: "Confirm Purchase",
    GateKind.LINK: "Open Link",
    GateKind.SETTINGS: "Parental Check",
}

_MESSAGES = {
    GateKind.PURCHASE: (
        "This purchase requires parental approval. "
        "Please solve this simple math problem to confirm:"
    ),
    GateKind.LINK: (
        "This will open a link outside the app. "
        "Please solve this simple math problem to continue:"
    ),
    GateKind.SETTINGS: (
        "This section requires parental approval. "
        "Please solve this simple math problem to continue:"
    ),
}

# Callers may pass their own category as a plain string.
Kind = Union[GateKind, str]


def kind_title(kind: Kind) -> str:
    """Return the display title for a kind, falling back to a generic one."""
    return kind.title if isinstance(kind, GateKind) else GENERIC_TITLE


def kind_message(kind: Kind) -> str:
    """Return the display message for a kind, falling back to a generic one."""
    return kind.message if isinstance(kind, GateKind) else GENERIC_MESSAGE


def parse_kind(value: str) -> Kind:
    """Map a string onto a GateKind when it names one, else keep the string."""
    try:
        return GateKind(value.strip().lower())
    except ValueError:
        return value


@dataclass(frozen=True)
class Challenge:
    """A single verification puzzle."""

    prompt: str
    options: Tuple[int, ...]
    correct_answer: int

    def __post_init__(self) -> None:
        # accept any sequence but store an immutable tuple
        object.__setattr__(self, "options", tuple(self.options))
        if not self.options:
            raise ChallengeError(f"Challenge {self.prompt!r} has no options.")
        if len(set(self.options)) != len(self.options):
            raise ChallengeError(f"Challenge {self.prompt!r} has duplicate options.")
        if self.correct_answer not in self.options:
            raise ChallengeError(
                f"Correct answer {self.correct_answer} is not an option of "
                f"{self.prompt!r}: {list(self.options)}"
            )

    def is_correct(self, selected: int) -> bool:
        return selected == self.correct_answer


@dataclass(frozen=True)
class GateRequest:
    """One pending confirmation need.

    Owned by the coordinator's queue from enqueue until its terminal callback
    has fired.
    """

    kind: Kind
    on_approve: Callback
    on_cancel: Optional[Callback] = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def label(self) -> str:
        """Short human label used in log lines."""
        name = self.kind.value if isinstance(self.kind, GateKind) else self.kind
        return f"{name}:{self.request_id[:8]}"


class GateState(str, Enum):
    """Coarse coordinator state."""

    IDLE = "idle"
    WAITING = "waiting"
    SHOWING = "showing"
    COOLDOWN = "cooldown"


@dataclass(frozen=True)
class GateSnapshot:
    """Read-only view of the coordinator for presentation surfaces."""

    state: GateState
    visible: bool
    queue_size: int
    kind: Optional[Kind] = None
    title: str = ""
    message: str = ""
    prompt: str = ""
    options: Tuple[int, ...] = ()
    request_id: Optional[str] = None
