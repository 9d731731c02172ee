"""Gate coordinator: one visible parental gate at a time, resolved in FIFO order.

Callers ask for approval with `request_approval`. Requests are queued and
shown one by one; the presentation surface reports the user's choice back
through `submit_answer` or `cancel_active`. Exactly one of a request's
`on_approve` / `on_cancel` callbacks fires when it resolves.

A request stays at the front of the queue while it is shown and is only
removed once its callback has run, so nothing enqueued in between can
overtake or displace it.

    Idle --enqueue--> Showing --answer/cancel--> Cooldown --delay--> Showing
                                   |                 |
                                   +--queue empty----+--> Idle

All methods must be called from the coordinator's owning thread. Use
`request_approval_threadsafe` from anywhere else.
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

from loguru import logger

from parental_gate.core.challenges import ChallengePool
from parental_gate.core.models import (
    Callback,
    Challenge,
    GateKind,
    GateRequest,
    GateSnapshot,
    GateState,
    Kind,
    kind_message,
    kind_title,
)
from parental_gate.core.scheduler import ManualScheduler, Scheduler, TimerHandle

DEFAULT_COOLDOWN_SECONDS = 0.5

Listener = Callable[[GateSnapshot], None]


class GateCoordinator:
    """Serializes parental gate requests.

    Args:
        pool: Challenges to draw from. Defaults to the built-in arithmetic pool.
        scheduler: Timer facility for the cooldown between gates and for
            marshalling calls onto the owning thread. Defaults to a
            `ManualScheduler`, which only fires when advanced.
        cooldown: Seconds between resolving one gate and showing the next.
    """

    def __init__(
        self,
        pool: Optional[ChallengePool] = None,
        scheduler: Optional[Scheduler] = None,
        cooldown: float = DEFAULT_COOLDOWN_SECONDS,
    ) -> None:
        if cooldown <= 0:
            raise ValueError(f"cooldown must be positive, got {cooldown}")
        self._pool = pool if pool is not None else ChallengePool()
        self._scheduler: Scheduler = scheduler or ManualScheduler()
        self._cooldown = cooldown

        self._queue: Deque[GateRequest] = deque()
        self._active: Optional[GateRequest] = None
        self._challenge: Optional[Challenge] = None
        self._processing = False
        self._visible = False
        self._cooldown_timer: Optional[TimerHandle] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def pool(self) -> ChallengePool:
        return self._pool

    @property
    def cooldown(self) -> float:
        return self._cooldown

    @property
    def active(self) -> Optional[GateRequest]:
        return self._active

    @property
    def current_challenge(self) -> Optional[Challenge]:
        return self._challenge

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def pending(self) -> Tuple[GateRequest, ...]:
        """Queued requests in processing order, the active one first."""
        return tuple(self._queue)

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    @property
    def state(self) -> GateState:
        if self._active is not None:
            return GateState.SHOWING
        if self._cooldown_timer is not None:
            return GateState.COOLDOWN
        if self._processing and self._queue:
            return GateState.WAITING
        return GateState.IDLE

    def snapshot(self) -> GateSnapshot:
        """Capture what a presentation surface needs to render the gate."""
        if self._active is None or self._challenge is None:
            return GateSnapshot(
                state=self.state, visible=False, queue_size=len(self._queue)
            )
        kind = self._active.kind
        return GateSnapshot(
            state=self.state,
            visible=self._visible,
            queue_size=len(self._queue),
            kind=kind,
            title=kind_title(kind),
            message=kind_message(kind),
            prompt=self._challenge.prompt,
            options=self._challenge.options,
            request_id=self._active.request_id,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a snapshot whenever the gate shows or hides.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Caller entry points
    # ------------------------------------------------------------------

    def request_approval(
        self,
        kind: Kind,
        on_approve: Callback,
        on_cancel: Optional[Callback] = None,
    ) -> None:
        """Queue a gate; `on_approve` or `on_cancel` fires once it resolves."""
        request = GateRequest(kind=kind, on_approve=on_approve, on_cancel=on_cancel)
        self._queue.append(request)

        if not self._processing:
            self._process_next()
        else:
            logger.debug(
                f"Parental gate request {request.label} added to queue. "
                f"Queue size: {len(self._queue)}"
            )

    def request_approval_threadsafe(
        self,
        kind: Kind,
        on_approve: Callback,
        on_cancel: Optional[Callback] = None,
    ) -> None:
        """Like `request_approval`, callable from any thread."""
        self._scheduler.call_soon(
            lambda: self.request_approval(kind, on_approve, on_cancel)
        )

    def require_approval_for_purchase(
        self, on_approve: Callback, on_cancel: Optional[Callback] = None
    ) -> None:
        self.request_approval(GateKind.PURCHASE, on_approve, on_cancel)

    def require_approval_for_link(
        self, on_approve: Callback, on_cancel: Optional[Callback] = None
    ) -> None:
        self.request_approval(GateKind.LINK, on_approve, on_cancel)

    def require_approval_for_settings(
        self, on_approve: Callback, on_cancel: Optional[Callback] = None
    ) -> None:
        self.request_approval(GateKind.SETTINGS, on_approve, on_cancel)

    # ------------------------------------------------------------------
    # Presentation surface entry points
    # ------------------------------------------------------------------

    def submit_answer(self, selected: int) -> None:
        """Resolve the active gate with the user's choice. No-op when nothing is shown."""
        request, challenge = self._active, self._challenge
        if request is None or challenge is None:
            logger.debug(f"Ignoring answer {selected!r}: no active parental gate.")
            return

        if challenge.is_correct(selected):
            logger.info(f"Parental gate {request.label}: correct answer provided")
            self._resolve(request, request.on_approve)
        else:
            logger.info(f"Parental gate {request.label}: incorrect answer provided")
            self._resolve(request, request.on_cancel)

    def cancel_active(self) -> None:
        """Dismiss the active gate without an answer. No-op when nothing is shown."""
        request = self._active
        if request is None:
            logger.debug("Ignoring cancel: no active parental gate.")
            return

        logger.info(f"Parental gate {request.label} cancelled by user")
        self._resolve(request, request.on_cancel)

    def close(self) -> None:
        """Drop every unresolved request without running its callbacks."""
        if self._cooldown_timer is not None:
            self._cooldown_timer.cancel()
            self._cooldown_timer = None
        dropped = len(self._queue)
        was_visible = self._visible
        self._queue.clear()
        self._active = None
        self._challenge = None
        self._processing = False
        self._visible = False
        if dropped:
            logger.info(f"Dropped {dropped} unresolved parental gate request(s).")
        if was_visible:
            self._notify()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, request: GateRequest, callback: Optional[Callback]) -> None:
        self._active = None
        self._challenge = None
        self._visible = False
        self._notify()
        try:
            if callback is not None:
                callback()
        finally:
            self._finalize(request)

    def _finalize(self, request: GateRequest) -> None:
        # The request is missing only if a callback called close().
        if self._queue and self._queue[0] is request:
            self._queue.popleft()

        if self._active is not None:
            # close() + request_approval() inside the callback already showed a gate
            return
        if self._queue:
            logger.debug(
                f"Next parental gate in {self._cooldown}s. "
                f"Queue size: {len(self._queue)}"
            )
            self._cooldown_timer = self._scheduler.call_later(
                self._cooldown, self._on_cooldown_elapsed
            )
        else:
            self._processing = False

    def _on_cooldown_elapsed(self) -> None:
        self._cooldown_timer = None
        self._process_next()

    def _process_next(self) -> None:
        if not self._queue:
            self._processing = False
            return

        self._processing = True
        request = self._queue[0]
        self._active = request
        self._challenge = self._pool.draw()
        self._visible = True
        logger.info(
            f"Presenting parental gate for {request.label}. "
            f"Queue size: {len(self._queue)}"
        )
        self._notify()

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception(f"Parental gate listener {listener!r} failed")
