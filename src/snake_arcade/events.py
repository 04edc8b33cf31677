"""Notification events and render frames emitted by a game session."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from snake_arcade.config import Difficulty
from snake_arcade.grid import Cell, Grid
from snake_arcade.state import CollisionKind, GameState, RunMode


@dataclass(frozen=True)
class Event:
    """Base class for user-facing notifications."""

    name: ClassVar[str] = "event"

    def to_dict(self) -> dict:
        return {"event": self.name}


@dataclass(frozen=True)
class RunStarted(Event):
    name: ClassVar[str] = "run_started"

    difficulty: Difficulty = Difficulty.MEDIUM

    def to_dict(self) -> dict:
        return {"event": self.name, "difficulty": self.difficulty.value}


@dataclass(frozen=True)
class PointScored(Event):
    name: ClassVar[str] = "point_scored"

    score: int = 0

    def to_dict(self) -> dict:
        return {"event": self.name, "score": self.score}


@dataclass(frozen=True)
class NewBestScore(Event):
    name: ClassVar[str] = "new_best_score"

    score: int = 0

    def to_dict(self) -> dict:
        return {"event": self.name, "score": self.score}


@dataclass(frozen=True)
class GamePaused(Event):
    name: ClassVar[str] = "game_paused"


@dataclass(frozen=True)
class GameResumed(Event):
    name: ClassVar[str] = "game_resumed"


@dataclass(frozen=True)
class GameOver(Event):
    name: ClassVar[str] = "game_over"

    kind: CollisionKind = CollisionKind.WALL
    final_score: int = 0
    new_best: bool = False

    def to_dict(self) -> dict:
        return {
            "event": self.name,
            "kind": self.kind.value,
            "final_score": self.final_score,
            "new_best": self.new_best,
        }


@dataclass(frozen=True)
class Frame:
    """Immutable snapshot handed to the render sink."""

    grid_size: int
    snake: tuple[Cell, ...]
    food: Cell | None
    hazard: Cell | None
    score: int
    best_score: int
    mode: RunMode
    tick: int
    fatal_cell: Cell | None = None

    @classmethod
    def capture(cls, state: GameState, best_score: int) -> Frame:
        return cls(
            grid_size=state.grid_size,
            snake=tuple(state.snake.body),
            food=state.food,
            hazard=state.hazard_cell,
            score=state.score,
            best_score=best_score,
            mode=state.mode,
            tick=state.tick,
            fatal_cell=state.fatal_cell,
        )

    def cells(self) -> np.ndarray:
        """Painted ``[y, x]`` matrix of :class:`~snake_arcade.grid.CellType`."""
        return Grid(self.grid_size).paint(self.snake, self.food, self.hazard)

    def to_dict(self) -> dict:
        return {
            "grid_size": self.grid_size,
            "snake": [list(c) for c in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "hazard": list(self.hazard) if self.hazard is not None else None,
            "score": self.score,
            "best_score": self.best_score,
            "mode": self.mode.value,
            "tick": self.tick,
            "fatal_cell": list(self.fatal_cell) if self.fatal_cell else None,
        }


RenderSink = Callable[[Frame], None]
NotificationSink = Callable[[Event], None]
