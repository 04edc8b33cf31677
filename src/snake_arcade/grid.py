"""Grid representation for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np

Cell = tuple[int, int]

MIN_GRID_SIZE = 4


class CellType(enum.IntEnum):
    """Integer codes stored in a painted grid matrix."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2
    HAZARD = 3
    HEAD = 4


class Grid:
    """Square N x N playfield.

    Cells are ``(x, y)`` pairs with ``x`` growing to the right and ``y``
    growing downward. Painted matrices are indexed ``[y, x]`` so that
    rows read top to bottom the way the board is drawn.
    """

    def __init__(self, size: int = 20) -> None:
        if size < MIN_GRID_SIZE:
            raise ValueError(
                f"Grid size must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}."
            )
        self.size = size

    @property
    def area(self) -> int:
        return self.size * self.size

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a coordinate lies within the grid."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def occupancy(self, blocked: Iterable[Cell]) -> np.ndarray:
        """Return a boolean ``[y, x]`` mask that is True on blocked cells."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for x, y in blocked:
            mask[y, x] = True
        return mask

    def free_cells(self, blocked: Iterable[Cell]) -> list[Cell]:
        """Return every in-bounds cell not present in *blocked*."""
        ys, xs = np.nonzero(~self.occupancy(blocked))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def paint(
        self,
        snake: Iterable[Cell],
        food: Cell | None = None,
        hazard: Cell | None = None,
    ) -> np.ndarray:
        """Render occupants into an ``int8`` matrix of :class:`CellType`."""
        cells = np.zeros((self.size, self.size), dtype=np.int8)
        body = list(snake)
        for x, y in body[1:]:
            cells[y, x] = CellType.SNAKE
        if body:
            hx, hy = body[0]
            cells[hy, hx] = CellType.HEAD
        if food is not None:
            cells[food[1], food[0]] = CellType.FOOD
        if hazard is not None:
            cells[hazard[1], hazard[0]] = CellType.HAZARD
        return cells
