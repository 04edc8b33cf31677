"""Game session: run lifecycle, timers, scoring and notifications."""

from __future__ import annotations

import logging

import numpy as np

from snake_arcade.config import Difficulty, GameConfig
from snake_arcade.control import HeadingBuffer, Signal
from snake_arcade.engine import SimulationEngine, TickResult
from snake_arcade.events import (
    Event,
    Frame,
    GameOver,
    GamePaused,
    GameResumed,
    NewBestScore,
    NotificationSink,
    PointScored,
    RenderSink,
    RunStarted,
)
from snake_arcade.food import FoodSpawner
from snake_arcade.grid import Grid
from snake_arcade.hazard import HazardScheduler
from snake_arcade.score import ScoreKeeper
from snake_arcade.snake import Direction
from snake_arcade.state import GameState, RunMode
from snake_arcade.storage import KeyValueStore
from snake_arcade.timers import Clock, PeriodicTimer

logger = logging.getLogger(__name__)

_NO_RUN = (RunMode.IDLE, RunMode.TERMINATED)


class GameSession:
    """Single-player session owning the authoritative :class:`GameState`.

    Control handlers (:meth:`steer`, :meth:`toggle_pause`, :meth:`start`)
    and the movement and hazard timers all run on one cooperative
    :class:`~snake_arcade.timers.Clock`, so they never interleave. Every
    handler returns False for an input that is illegal in the current
    mode and otherwise leaves the state untouched.

    Sinks are fire-and-forget: an exception raised by a sink is logged and
    the simulation carries on.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        clock: Clock,
        store: KeyValueStore | None = None,
        scores: ScoreKeeper | None = None,
        render_sink: RenderSink | None = None,
        notification_sink: NotificationSink | None = None,
    ) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.clock = clock
        self.rng = np.random.default_rng(cfg.seed)
        self.grid = Grid(cfg.grid_size)
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)
        self.engine = SimulationEngine(self.grid, self.food_spawner)
        self.scores = (
            scores if scores is not None
            else ScoreKeeper(store, key=cfg.best_score_key)
        )
        self.controls = HeadingBuffer()
        self.difficulty = cfg.difficulty
        self.render_sink = render_sink
        self.notification_sink = notification_sink

        self.state = GameState.initial(cfg, self.food_spawner)
        self._run_set_record = False

        self._movement = PeriodicTimer(
            clock, cfg.tick_period_ms(self.difficulty), self._on_tick,
        )
        self.hazards = HazardScheduler(
            clock,
            self.grid,
            lambda: self.state,
            period_ms=cfg.hazard_period_ms,
            lifetime_ms=cfg.hazard_lifetime_ms,
            rng=self.rng,
            on_change=self._render,
        )

    # ------------------------------------------------------------------
    # Observation

    @property
    def mode(self) -> RunMode:
        return self.state.mode

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def best_score(self) -> int:
        return self.scores.best

    @property
    def tick_period_ms(self) -> int:
        return self.config.tick_period_ms(self.difficulty)

    @property
    def movement_active(self) -> bool:
        return self._movement.active

    def frame(self) -> Frame:
        return Frame.capture(self.state, self.scores.best)

    # ------------------------------------------------------------------
    # Control surface

    def handle(self, signal: Signal) -> bool:
        """Dispatch one control signal. Returns whether it changed anything."""
        direction = signal.direction
        if direction is not None:
            return self.steer(direction)
        if signal is Signal.PAUSE:
            return self.toggle_pause()
        if signal is Signal.START:
            return self.start()
        # ACTION
        if self.state.mode in _NO_RUN:
            return self.start()
        return self.toggle_pause()

    def steer(self, direction: Direction) -> bool:
        """Request *direction* for the next tick.

        Returns whether the heading was queued. With ``implicit_start`` a
        direction pressed between runs starts a new run even when the
        heading itself is rejected as a reversal.
        """
        if self.state.mode in _NO_RUN and self.config.implicit_start:
            self.start()
            return self.controls.request(direction, self.state.heading)
        if self.state.mode is not RunMode.RUNNING:
            logger.debug("Ignored %s while %s.", direction.name, self.state.mode.value)
            return False
        return self.controls.request(direction, self.state.heading)

    def toggle_pause(self) -> bool:
        """Flip Running <-> Paused; a no-op in any other mode."""
        if self.state.mode is RunMode.RUNNING:
            self.state.mode = RunMode.PAUSED
            self._stop_timers()
            logger.info("Run paused at tick %d.", self.state.tick)
            self._notify(GamePaused())
            self._render()
            return True
        if self.state.mode is RunMode.PAUSED:
            self.state.mode = RunMode.RUNNING
            self._start_timers()
            logger.info("Run resumed at tick %d.", self.state.tick)
            self._notify(GameResumed())
            self._render()
            return True
        return False

    def start(self) -> bool:
        """Begin a fresh run; only legal when Idle or Terminated."""
        if self.state.mode not in _NO_RUN:
            return False
        self._stop_timers()
        self.hazards.reset()
        self.controls.clear()
        self.state = GameState.initial(
            self.config, self.food_spawner, mode=RunMode.RUNNING,
        )
        self._run_set_record = False
        self._start_timers()
        logger.info(
            "Run started (difficulty=%s, best=%d).",
            self.difficulty.value, self.scores.best,
        )
        self._notify(RunStarted(self.difficulty))
        self._render()
        return True

    def set_difficulty(self, difficulty: Difficulty | str) -> bool:
        """Change the tick period; only allowed between runs."""
        if self.state.mode not in _NO_RUN:
            return False
        try:
            self.difficulty = Difficulty(difficulty)
        except ValueError:
            logger.debug("Ignored unknown difficulty %r.", difficulty)
            return False
        return True

    # ------------------------------------------------------------------
    # Simulation

    def tick(self) -> TickResult:
        """Advance one step. Called by the movement timer."""
        result = self.engine.advance(self.state, self.controls.take())
        if result.consumed:
            self._notify(PointScored(self.state.score))
            if self.scores.record(self.state.score):
                self._run_set_record = True
                self._notify(NewBestScore(self.state.score))
        if result.collision is not None:
            self._stop_timers()
            self._notify(
                GameOver(
                    kind=result.collision,
                    final_score=self.state.score,
                    new_best=self._run_set_record,
                )
            )
        if result.moved or result.terminal:
            self._render()
        return result

    def close(self) -> None:
        """Cancel every timer this session armed."""
        self._stop_timers()
        self.hazards.reset()

    def _on_tick(self) -> None:
        self.tick()

    def _start_timers(self) -> None:
        self._movement.start(self.tick_period_ms)
        if self.config.hazards_enabled:
            self.hazards.start()

    def _stop_timers(self) -> None:
        self._movement.cancel()
        self.hazards.stop()

    # ------------------------------------------------------------------
    # Sinks

    def _render(self) -> None:
        if self.render_sink is None:
            return
        try:
            self.render_sink(self.frame())
        except Exception:
            logger.exception("Render sink failed.")

    def _notify(self, event: Event) -> None:
        if self.notification_sink is None:
            return
        try:
            self.notification_sink(event)
        except Exception:
            logger.exception("Notification sink failed for %s.", event.name)
