"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_autopilot.grid import Grid
    from snake_autopilot.snake import Position

logger = logging.getLogger(__name__)


class BoardFullError(RuntimeError):
    """Raised when food cannot be placed because no free cell remains."""


class FoodSpawner:
    """Places food uniformly at random on cells the snake does not cover.

    Uses a seeded NumPy RNG so that placement is reproducible. A position
    is drawn over the whole grid and redrawn while it lands on the snake.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int | None = None,
    ) -> None:
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def spawn(self, snake: tuple[Position, ...]) -> Position:
        """Return a new food position that misses every segment of *snake*."""
        occupied = set(snake)
        if len(occupied) >= self.grid.cell_count:
            logger.warning("No free cells left for food placement.")
            raise BoardFullError("The snake covers the whole board.")

        attempts = 0
        while True:
            x, y = self.rng.integers(0, self.grid.size, size=2).tolist()
            if (x, y) not in occupied:
                return x, y
            attempts += 1
            if self.max_attempts is not None and attempts >= self.max_attempts:
                logger.warning(
                    "Food placement gave up after %d attempts.", attempts,
                )
                raise BoardFullError(
                    f"No free cell found after {attempts} attempts.",
                )
