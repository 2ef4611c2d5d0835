"""Toroidal grid geometry for the snake game."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_autopilot.snake import Direction, GameState, Position


class CellType(enum.IntEnum):
    """Integer codes stored in the occupancy array."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FOOD = 3


class Grid:
    """Square grid whose edges wrap around to the opposite side.

    Coordinates use (x, y) ordering; the NumPy occupancy array returned by
    :meth:`to_array` is indexed ``[y, x]``.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 2:
            raise ValueError("Grid size must be at least 2.")
        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def wrap(self, x: int, y: int) -> Position:
        """Wrap coordinates around the grid edges."""
        n = self.size
        return ((x % n) + n) % n, ((y % n) + n) % n

    def neighbor(self, pos: Position, direction: Direction) -> Position:
        """Return the wrapped cell one step from *pos* in *direction*."""
        return self.wrap(pos[0] + direction.dx, pos[1] + direction.dy)

    def free_cells(self, occupied: tuple[Position, ...]) -> list[Position]:
        """Return every cell not listed in *occupied*, row by row."""
        mask = np.ones((self.size, self.size), dtype=bool)
        for x, y in occupied:
            mask[y, x] = False
        ys, xs = np.nonzero(mask)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_array(self, state: GameState) -> np.ndarray:
        """Paint *state* onto an ``int8`` array of :class:`CellType` codes."""
        cells = np.zeros((self.size, self.size), dtype=np.int8)
        fx, fy = state.food
        cells[fy, fx] = CellType.FOOD
        for x, y in state.snake[1:]:
            cells[y, x] = CellType.SNAKE
        hx, hy = state.head
        cells[hy, hx] = CellType.HEAD
        return cells

    def to_dict(self) -> dict:
        """Serialize grid parameters to a dictionary."""
        return {"size": self.size}
