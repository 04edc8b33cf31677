"""Tick-based simulation engine: movement, collisions, consumption."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from snake_arcade.food import FoodSpawner
from snake_arcade.grid import Cell, Grid
from snake_arcade.snake import Direction
from snake_arcade.state import CollisionKind, GameState, RunMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickResult:
    """Outcome of one call to :meth:`SimulationEngine.advance`."""

    moved: bool = False
    consumed: bool = False
    collision: CollisionKind | None = None
    fatal_cell: Cell | None = None

    @property
    def terminal(self) -> bool:
        return self.collision is not None


_IDLE_RESULT = TickResult()


class SimulationEngine:
    """Advances a :class:`GameState` by exactly one grid step per call.

    The engine applies whatever heading it is handed. Rejecting 180°
    reversals is the control surface's job, so a reversal that reaches
    the engine is resolved like any other move (usually as a self hit).
    """

    def __init__(self, grid: Grid, food_spawner: FoodSpawner) -> None:
        self.grid = grid
        self.food_spawner = food_spawner

    def advance(
        self, state: GameState, pending: Direction | None = None,
    ) -> TickResult:
        """Advance *state* in place by one tick and describe what happened."""
        if state.mode is not RunMode.RUNNING:
            return _IDLE_RESULT

        snake = state.snake
        if pending is not None:
            snake.direction = pending

        new_head = snake.next_head()
        kind = self._classify(state, new_head)
        if kind is not None:
            # The fatal move is discarded; only the cell is remembered.
            state.mode = RunMode.TERMINATED
            state.collision = kind
            state.fatal_cell = new_head
            state.tick += 1
            logger.info(
                "Run ended at tick %d: %s collision at %s, score %d.",
                state.tick, kind.value, new_head, state.score,
            )
            return TickResult(moved=False, collision=kind, fatal_cell=new_head)

        snake.body.appendleft(new_head)
        consumed = new_head == state.food
        if consumed:
            state.score += 1
            blocked = set(snake.body)
            if state.hazard is not None:
                blocked.add(state.hazard.cell)
            state.food = self.food_spawner.place(blocked)
        else:
            snake.body.pop()

        state.tick += 1
        return TickResult(moved=True, consumed=consumed)

    def _classify(self, state: GameState, new_head: Cell) -> CollisionKind | None:
        """Return the single collision a move into *new_head* causes, if any.

        Checked in order wall, self, hazard. The self check runs against
        the full pre-move body, tail included.
        """
        if not self.grid.in_bounds(new_head):
            return CollisionKind.WALL
        if state.snake.occupies(new_head):
            return CollisionKind.SELF
        if state.hazard is not None and state.hazard.cell == new_head:
            return CollisionKind.HAZARD
        return None
