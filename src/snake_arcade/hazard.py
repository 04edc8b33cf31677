"""Transient hazard spawning and expiry, timed independently of ticks."""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from snake_arcade.grid import Grid
from snake_arcade.state import GameState, Hazard, RunMode
from snake_arcade.timers import Clock, PeriodicTimer, TimerHandle

logger = logging.getLogger(__name__)


class HazardScheduler:
    """Spawns one hazard every *period_ms* and clears it after *lifetime_ms*.

    The scheduler never holds a state snapshot: *current_state* is called at
    fire time so callbacks always see the session's live state. Each spawn
    gets a new generation and the expiry callback only clears a hazard of
    the same generation, so a reset between spawn and expiry is safe.
    """

    def __init__(
        self,
        clock: Clock,
        grid: Grid,
        current_state: Callable[[], GameState],
        *,
        period_ms: float,
        lifetime_ms: float,
        rng: np.random.Generator | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        if lifetime_ms <= 0:
            raise ValueError("lifetime_ms must be positive.")
        self.clock = clock
        self.grid = grid
        self.lifetime_ms = lifetime_ms
        self.rng = rng if rng is not None else np.random.default_rng()
        self._current_state = current_state
        self._on_change = on_change
        self._timer = PeriodicTimer(clock, period_ms, self._on_fire)
        self._expiry: TimerHandle | None = None
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._timer.active

    def start(self) -> None:
        """Start (or restart with a full period) the spawn cadence."""
        self._timer.start()

    def stop(self) -> None:
        """Suspend spawning. A live hazard keeps its expiry."""
        self._timer.cancel()

    def reset(self) -> None:
        """Stop spawning and invalidate any armed expiry."""
        self._timer.cancel()
        self._cancel_expiry()
        self._generation += 1

    def spawn(self) -> Hazard | None:
        """Place a hazard now if the run allows one. Returns the new hazard."""
        state = self._current_state()
        if state.mode is not RunMode.RUNNING or state.hazard is not None:
            return None

        free = self.grid.free_cells(state.blocked_cells())
        if not free:
            logger.debug("No free cell for a hazard; skipping spawn.")
            return None

        self._generation += 1
        now = self.clock.now()
        hazard = Hazard(
            cell=free[int(self.rng.integers(len(free)))],
            generation=self._generation,
            spawned_at=now,
            expires_at=now + self.lifetime_ms,
        )
        state.hazard = hazard
        generation = hazard.generation
        self._cancel_expiry()
        self._expiry = self.clock.call_later(
            self.lifetime_ms, lambda: self._on_expire(generation),
        )
        logger.debug(
            "Hazard %d spawned at %s, expires at %.0f.",
            generation, hazard.cell, hazard.expires_at,
        )
        self._notify()
        return hazard

    def _on_fire(self) -> None:
        self.spawn()

    def _on_expire(self, generation: int) -> None:
        self._expiry = None
        state = self._current_state()
        if state.hazard is None or state.hazard.generation != generation:
            return
        state.hazard = None
        logger.debug("Hazard %d expired.", generation)
        self._notify()

    def _cancel_expiry(self) -> None:
        if self._expiry is not None:
            self._expiry.cancel()
            self._expiry = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
