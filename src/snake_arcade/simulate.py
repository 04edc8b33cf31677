"""Headless simulation on a virtual clock, for smoke runs and throughput."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace

import numpy as np

from snake_arcade.config import GameConfig
from snake_arcade.events import Event, GameOver
from snake_arcade.score import ScoreKeeper
from snake_arcade.session import GameSession
from snake_arcade.snake import Direction
from snake_arcade.state import RunMode
from snake_arcade.timers import VirtualClock

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class SimulationReport:
    """Aggregate results of a batch of headless games."""

    total_games: int
    total_ticks: int
    best_score: int
    mean_score: float
    collisions: dict[str, int]
    wall_time_seconds: float

    def summary(self) -> str:
        kinds = ", ".join(f"{k}={v}" for k, v in sorted(self.collisions.items()))
        return (
            f"Simulated {self.total_games} games, {self.total_ticks} ticks in "
            f"{self.wall_time_seconds:.2f}s | mean score {self.mean_score:.2f}, "
            f"best {self.best_score} | collisions: {kinds or 'none'}"
        )


def simulate_games(
    *,
    num_games: int = 100,
    config: GameConfig | None = None,
    scores: ScoreKeeper | None = None,
    turn_probability: float = 0.2,
    max_ticks: int = 2_000,
    seed: int = 42,
) -> SimulationReport:
    """Play *num_games* runs with a random steering policy.

    Each tick the policy turns with probability *turn_probability*; the
    session's control surface drops any reversal it proposes. Time is
    virtual, so hazards spawn and expire on their real cadence without
    any sleeping.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    cfg = config or GameConfig()
    rng = np.random.default_rng(seed)
    keeper = scores if scores is not None else ScoreKeeper()

    final_scores: list[int] = []
    collisions: dict[str, int] = {}
    total_ticks = 0
    start = time.perf_counter()

    for _ in range(num_games):
        clock = VirtualClock()
        game_cfg = replace(cfg, seed=int(rng.integers(2**31)))
        outcomes: list[GameOver] = []

        def on_event(event: Event, outcomes: list[GameOver] = outcomes) -> None:
            if isinstance(event, GameOver):
                outcomes.append(event)

        session = GameSession(
            game_cfg, clock=clock, scores=keeper, notification_sink=on_event,
        )
        session.start()
        period = session.tick_period_ms
        while session.mode is RunMode.RUNNING and session.state.tick < max_ticks:
            if rng.random() < turn_probability:
                session.steer(_DIRECTIONS[int(rng.integers(len(_DIRECTIONS)))])
            clock.advance(period)
        session.close()

        total_ticks += session.state.tick
        final_scores.append(session.score)
        for outcome in outcomes:
            collisions[outcome.kind.value] = collisions.get(outcome.kind.value, 0) + 1

    elapsed = time.perf_counter() - start
    report = SimulationReport(
        total_games=num_games,
        total_ticks=total_ticks,
        best_score=keeper.best,
        mean_score=float(np.mean(final_scores)),
        collisions=collisions,
        wall_time_seconds=elapsed,
    )
    logger.info(report.summary())
    return report
