"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_arcade.grid import Cell, Grid

logger = logging.getLogger(__name__)

# Rejection samples drawn before falling back to enumerating free cells.
_MAX_REJECTIONS = 64


class FoodSpawner:
    """Places food uniformly at random on cells not in a blocked set.

    Sampling is rejection-based: draw a random cell, redraw while it is
    blocked. On a crowded board this degrades, so after a bounded number
    of misses the spawner picks uniformly among the remaining free cells.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_rejections: int = _MAX_REJECTIONS,
    ) -> None:
        if max_rejections < 1:
            raise ValueError("max_rejections must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_rejections = max_rejections

    def place(self, blocked: Collection[Cell]) -> Cell | None:
        """Return a free cell for new food, or ``None`` if the board is full."""
        if len(blocked) >= self.grid.area and not self.grid.free_cells(blocked):
            logger.warning("No free cells available for food placement.")
            return None

        for _ in range(self.max_rejections):
            x, y = self.rng.integers(0, self.grid.size, size=2).tolist()
            if (x, y) not in blocked:
                return x, y

        free = self.grid.free_cells(blocked)
        if not free:
            logger.warning("No free cells available for food placement.")
            return None
        return free[int(self.rng.integers(len(free)))]
