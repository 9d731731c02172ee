"""Schedulers the coordinator uses to pace gates and to marshal calls.

The coordinator owns its state on a single thread. A scheduler gives it two
things: a way to run a callback after a short delay (the cooldown between
consecutive gates) and a thread-safe way to hop onto that owning thread.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import heapq
import itertools
import threading
import time
from queue import Empty, Queue
from typing import Any, Callable, List, Optional, Protocol, Tuple, TypeVar

from loguru import logger

from parental_gate.errors import SchedulerError

T = TypeVar("T")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Timer facility plus thread marshalling for the coordinator."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        """Run `callback` on the owning thread after `delay` seconds."""
        ...

    def call_soon(self, callback: Callable[[], Any]) -> None:
        """Run `callback` on the owning thread as soon as possible. Thread-safe."""
        ...


class _Timer:
    """Cancellable entry in a scheduler's timer heap."""

    __slots__ = ("when", "callback", "cancelled")

    def __init__(self, when: float, callback: Callable[[], Any]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler driven by an explicit virtual clock.

    Nothing runs until the owner calls `advance` or `run_pending`, always on
    the calling thread. Exceptions from callbacks propagate to that caller.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._seq = itertools.count()
        self._timers: List[Tuple[float, int, _Timer]] = []
        self._lock = threading.Lock()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], Any]) -> _Timer:
        timer = _Timer(self._now + max(0.0, delay), callback)
        with self._lock:
            heapq.heappush(self._timers, (timer.when, next(self._seq), timer))
        return timer

    def call_soon(self, callback: Callable[[], Any]) -> None:
        self.call_later(0.0, callback)

    def pending(self) -> int:
        """Number of timers not yet run or cancelled."""
        with self._lock:
            return sum(1 for _, _, t in self._timers if not t.cancelled)

    def next_delay(self) -> Optional[float]:
        """Seconds until the next live timer, or None if there is none."""
        with self._lock:
            live = [when for when, _, t in self._timers if not t.cancelled]
        return max(0.0, min(live) - self._now) if live else None

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every timer that came due.

        Returns:
            Number of callbacks executed.
        """
        deadline = self._now + seconds
        ran = 0
        while True:
            with self._lock:
                if not self._timers or self._timers[0][0] > deadline:
                    break
                when, _, timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self._now = max(self._now, when)
            timer.callback()
            ran += 1
        self._now = deadline
        return ran

    def run_pending(self) -> int:
        """Run timers until none are left, jumping the clock as needed."""
        ran = 0
        while (delay := self.next_delay()) is not None:
            ran += self.advance(delay)
        return ran


class ThreadScheduler:
    """Runs callbacks on one dedicated daemon thread.

    That thread is the coordinator's owning thread: every `call_soon`,
    `call_later` and `run_sync` callback executes there, one at a time.
    """

    def __init__(self, name: str = "parental-gate") -> None:
        self._inbox: Queue[Optional[_Timer]] = Queue()
        self._timers: List[Tuple[float, int, _Timer]] = []
        self._seq = itertools.count()
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def thread(self) -> threading.Thread:
        return self._thread

    def call_later(self, delay: float, callback: Callable[[], Any]) -> _Timer:
        if self._stopped.is_set():
            raise SchedulerError("Scheduler has been stopped.")
        timer = _Timer(time.monotonic() + max(0.0, delay), callback)
        self._inbox.put(timer)
        return timer

    def call_soon(self, callback: Callable[[], Any]) -> None:
        self.call_later(0.0, callback)

    def run_sync(self, fn: Callable[[], T], timeout: Optional[float] = 10.0) -> T:
        """Run `fn` on the scheduler thread and wait for its result.

        Raises:
            SchedulerError: If the result does not arrive within `timeout`.
                `fn` is then skipped unless the worker already started it.
        """
        if threading.current_thread() is self._thread:
            return fn()

        future: concurrent.futures.Future[T] = concurrent.futures.Future()

        def _call() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(fn())
            except BaseException as e:
                future.set_exception(e)

        self.call_soon(_call)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError as e:
            # drop fn if the worker has not started it yet
            future.cancel()
            raise SchedulerError(f"Timed out after {timeout}s waiting for {fn!r}") from e

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        """Stop the worker thread. Pending timers are dropped."""
        if self._stopped.is_set():
            return
        self._stopped.set()
        self._inbox.put(None)
        if threading.current_thread() is not self._thread:
            self._thread.join(timeout=timeout)

    def _run(self) -> None:
        logger.debug(f"Scheduler thread {self._thread.name!r} started.")
        while not self._stopped.is_set():
            wait = None
            if self._timers:
                wait = max(0.0, self._timers[0][0] - time.monotonic())
            try:
                item = self._inbox.get(timeout=wait)
            except Empty:
                item = None
            else:
                if item is None:
                    break
                heapq.heappush(self._timers, (item.when, next(self._seq), item))

            now = time.monotonic()
            while self._timers and self._timers[0][0] <= now:
                _, _, timer = heapq.heappop(self._timers)
                if timer.cancelled:
                    continue
                try:
                    timer.callback()
                except Exception:
                    logger.exception("Scheduled callback failed")
        logger.debug(f"Scheduler thread {self._thread.name!r} stopped.")


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop; the loop thread owns state."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def call_later(
        self, delay: float, callback: Callable[[], Any]
    ) -> asyncio.TimerHandle:
        return self._loop.call_later(delay, callback)

    def call_soon(self, callback: Callable[[], Any]) -> None:
        self._loop.call_soon_threadsafe(callback)
