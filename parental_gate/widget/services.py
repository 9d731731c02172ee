"""Shared services for the Gradio widget.

Gradio runs handlers on its own worker threads, while the coordinator must
only be touched from one thread. `GateService` owns a `ThreadScheduler` and
routes every coordinator call through it.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime
from typing import Deque, List, Optional

from loguru import logger

from parental_gate.core.coordinator import GateCoordinator
from parental_gate.core.models import GateSnapshot, Kind, parse_kind
from parental_gate.core.scheduler import ThreadScheduler


class GateService:
    """A coordinator hosted on its own scheduler thread, plus an activity log.

    Notes:
        - Not persistent. A process restart drops queued requests.
        - One coordinator per service; every browser session shares it.
    """

    def __init__(
        self,
        coordinator: GateCoordinator,
        scheduler: ThreadScheduler,
        max_activity: int = 50,
    ) -> None:
        """Initialize the service.

        Args:
            coordinator: Coordinator built on `scheduler`.
            scheduler: The thread owning the coordinator's state.
            max_activity: Number of activity lines kept.
        """
        if coordinator.scheduler is not scheduler:
            raise ValueError("Coordinator must be built on the service's scheduler.")
        self.coordinator = coordinator
        self.scheduler = scheduler
        self._activity: Deque[str] = deque(maxlen=max_activity)
        self._counter = 0

    def request(self, kind: str | Kind) -> int:
        """Queue a gate for a demo action.

        Returns:
            The demo action's sequence number used in the activity log.
        """
        kind = parse_kind(kind) if isinstance(kind, str) else kind

        def _enqueue() -> int:
            self._counter += 1
            number = self._counter
            name = getattr(kind, "value", kind)
            self._record(f"#{number} {name}: requested")
            self.coordinator.request_approval(
                kind,
                on_approve=lambda: self._record(f"#{number} {name}: approved"),
                on_cancel=lambda: self._record(f"#{number} {name}: cancelled"),
            )
            return number

        return self.scheduler.run_sync(_enqueue)

    def answer(self, selected: int, request_id: Optional[str] = None) -> bool:
        """Answer the active gate.

        Args:
            selected: The chosen option.
            request_id: The gate the answer was given for. When set, the
                answer is dropped unless that gate is still the active one.

        Returns:
            Whether a gate was resolved.
        """

        def _answer() -> bool:
            if not self._is_active(request_id):
                return False
            self.coordinator.submit_answer(selected)
            return True

        return self.scheduler.run_sync(_answer)

    def cancel(self, request_id: Optional[str] = None) -> bool:
        """Cancel the active gate; `request_id` works as in `answer`."""

        def _cancel() -> bool:
            if not self._is_active(request_id):
                return False
            self.coordinator.cancel_active()
            return True

        return self.scheduler.run_sync(_cancel)

    def snapshot(self) -> GateSnapshot:
        return self.scheduler.run_sync(self.coordinator.snapshot)

    def activity(self) -> List[str]:
        """Most recent activity lines, newest last."""
        return self.scheduler.run_sync(lambda: list(self._activity))

    def close(self) -> None:
        """Drop unresolved requests and stop the scheduler thread."""
        try:
            self.scheduler.run_sync(self.coordinator.close)
        finally:
            self.scheduler.stop()

    def _is_active(self, request_id: Optional[str]) -> bool:
        active = self.coordinator.active
        if active is None:
            return False
        if request_id is not None and active.request_id != request_id:
            logger.info(
                f"Ignoring stale input for gate {request_id}; "
                f"{active.label} is showing now."
            )
            return False
        return True

    def _record(self, line: str) -> None:
        stamped = f"{datetime.now():%H:%M:%S} {line}"
        logger.debug(f"Widget activity: {stamped}")
        self._activity.append(stamped)


def create_service(
    coordinator_factory=GateCoordinator,
    scheduler: Optional[ThreadScheduler] = None,
    **coordinator_kwargs,
) -> GateService:
    """Start a scheduler thread and build a coordinator on it."""
    scheduler = scheduler or ThreadScheduler(name="parental-gate-widget")
    coordinator = coordinator_factory(scheduler=scheduler, **coordinator_kwargs)
    return GateService(coordinator, scheduler)
