"""Snake representation and movement primitives."""

from __future__ import annotations

import enum
from collections import deque

from snake_arcade.grid import Cell


class Direction(enum.Enum):
    """Cardinal headings with ``(dx, dy)`` unit vectors.

    ``y`` grows downward, so UP decreases it.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def step(self, cell: Cell) -> Cell:
        """Return the cell one unit away from *cell* along this heading."""
        dx, dy = self.value
        return cell[0] + dx, cell[1] + dy


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of ``(x, y)`` segments.

    The head is ``body[0]``; the tail is ``body[-1]``. ``direction`` is the
    committed heading; pending input lives in the control surface until the
    next tick commits it.
    """

    def __init__(
        self,
        head: Cell,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        behind = direction.opposite
        self.body: deque[Cell] = deque([head])
        for _ in range(length - 1):
            self.body.append(behind.step(self.body[-1]))
        self.direction = direction

    @classmethod
    def from_cells(
        cls, cells: list[Cell], direction: Direction = Direction.RIGHT,
    ) -> Snake:
        """Build a snake from an explicit head-first body."""
        if not cells:
            raise ValueError("Snake body must not be empty.")
        if len(set(cells)) != len(cells):
            raise ValueError("Snake body must not contain duplicate cells.")
        snake = cls(cells[0], direction, length=1)
        snake.body = deque(cells)
        return snake

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def next_head(self, direction: Direction | None = None) -> Cell:
        """Compute the next head position without moving."""
        return (direction or self.direction).step(self.head)

    def occupies(self, cell: Cell) -> bool:
        return cell in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
        }
