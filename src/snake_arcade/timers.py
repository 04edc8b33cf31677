"""Single-threaded cancelable timers.

Every game timer runs on one cooperative scheduler: either the running
asyncio event loop (:class:`LoopClock`) or a deterministic virtual clock
(:class:`VirtualClock`) used for headless simulation and tests. Callbacks
run to completion and never overlap, so game state needs no locks.

All times are in milliseconds.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    """Minimal scheduler interface the game depends on."""

    def now(self) -> float: ...

    def call_later(self, delay_ms: float, callback: Callback) -> TimerHandle: ...


class LoopClock:
    """Clock backed by an asyncio event loop.

    Without an explicit *loop* the running loop is looked up on every call,
    so the clock must then be used from inside that loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop if self._loop is not None else asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(max(delay_ms, 0.0) / 1000.0, callback)


class _VirtualHandle:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualClock:
    """Deterministic clock whose time only moves when :meth:`advance` runs.

    Callbacks due at the same instant fire in scheduling order.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, _VirtualHandle]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callback) -> _VirtualHandle:
        handle = _VirtualHandle(self._now + max(delay_ms, 0.0), callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of live (uncancelled) scheduled callbacks."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance(self, delay_ms: float) -> int:
        """Move time forward by *delay_ms*, firing everything that falls due.

        Returns the number of callbacks fired.
        """
        target = self._now + delay_ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            handle.callback()
            fired += 1
        self._now = target
        return fired

    def advance_to(self, when_ms: float) -> int:
        return self.advance(max(when_ms - self._now, 0.0))


class PeriodicTimer:
    """Re-arming timer that fires *callback* every *period_ms*.

    Cancelling from inside the callback stops the re-arm, so a handler
    that leaves the Running mode can stop its own timer synchronously.
    """

    def __init__(
        self, clock: Clock, period_ms: float, callback: Callback,
    ) -> None:
        if period_ms <= 0:
            raise ValueError("period_ms must be positive.")
        self.clock = clock
        self.period_ms = period_ms
        self.callback = callback
        self._handle: TimerHandle | None = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self, period_ms: float | None = None) -> None:
        """(Re)start the timer; the first firing is one period from now."""
        self.cancel()
        if period_ms is not None:
            if period_ms <= 0:
                raise ValueError("period_ms must be positive.")
            self.period_ms = period_ms
        self._active = True
        self._arm()

    def cancel(self) -> None:
        self._active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _arm(self) -> None:
        self._handle = self.clock.call_later(self.period_ms, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self._active:
            return
        self.callback()
        if self._active and self._handle is None:
            self._arm()
