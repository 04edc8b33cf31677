"""Authoritative game state and its lifecycle enums."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from snake_arcade.snake import Direction, Snake

if TYPE_CHECKING:
    from snake_arcade.config import GameConfig
    from snake_arcade.food import FoodSpawner
    from snake_arcade.grid import Cell


class RunMode(str, enum.Enum):
    """Coarse lifecycle of a single play session."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    TERMINATED = "terminated"


class CollisionKind(str, enum.Enum):
    """Why a run ended."""

    WALL = "wall"
    SELF = "self"
    HAZARD = "hazard"


@dataclass(frozen=True)
class Hazard:
    """A transient obstacle cell.

    ``generation`` identifies the spawn so an expiry armed for one hazard
    can never clear a later one.
    """

    cell: Cell
    generation: int
    spawned_at: float
    expires_at: float

    def to_dict(self) -> dict:
        return {
            "cell": list(self.cell),
            "generation": self.generation,
            "expires_at": self.expires_at,
        }


@dataclass
class GameState:
    """Everything the engine advances and the sinks observe."""

    grid_size: int
    snake: Snake
    food: Cell | None
    hazard: Hazard | None = None
    score: int = 0
    mode: RunMode = RunMode.IDLE
    tick: int = 0
    collision: CollisionKind | None = None
    fatal_cell: Cell | None = None

    @classmethod
    def initial(
        cls,
        config: GameConfig,
        food_spawner: FoodSpawner,
        mode: RunMode = RunMode.IDLE,
    ) -> GameState:
        """Fresh state: centred snake heading right, new food, no hazard."""
        centre = config.grid_size // 2
        snake = Snake((centre, centre), Direction.RIGHT, config.initial_length)
        food = food_spawner.place(set(snake.body))
        return cls(grid_size=config.grid_size, snake=snake, food=food, mode=mode)

    @property
    def heading(self) -> Direction:
        return self.snake.direction

    @property
    def hazard_cell(self) -> Cell | None:
        return self.hazard.cell if self.hazard is not None else None

    def blocked_cells(self) -> set[Cell]:
        """Cells a newly placed item must avoid."""
        blocked = set(self.snake.body)
        if self.food is not None:
            blocked.add(self.food)
        if self.hazard is not None:
            blocked.add(self.hazard.cell)
        return blocked

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "grid_size": self.grid_size,
            "tick": self.tick,
            "score": self.score,
            "mode": self.mode.value,
            "snake": self.snake.to_dict(),
            "food": list(self.food) if self.food is not None else None,
            "hazard": self.hazard.to_dict() if self.hazard is not None else None,
            "collision": self.collision.value if self.collision else None,
            "fatal_cell": list(self.fatal_cell) if self.fatal_cell else None,
        }
