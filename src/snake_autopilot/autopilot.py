"""Greedy, safety-first autopilot that steers the snake toward food."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from snake_autopilot.snake import Direction

if TYPE_CHECKING:
    from snake_autopilot.grid import Grid
    from snake_autopilot.snake import GameState, Position

# Evaluation order; the first candidate wins exact ties.
CANDIDATE_ORDER: tuple[Direction, ...] = (
    Direction.RIGHT,
    Direction.LEFT,
    Direction.DOWN,
    Direction.UP,
)


@dataclass(frozen=True)
class Move:
    """A scored candidate move."""

    direction: Direction
    destination: Position
    distance: int
    safe: bool


def candidate_moves(state: GameState, grid: Grid) -> list[Move]:
    """Score every non-reversing move from the current head.

    Distance is the Manhattan distance between the *wrapped* destination
    and the food, so a route through an edge is never seen as shorter.
    A move is unsafe when its destination is any current body segment,
    the tail included even though it would move away this tick.
    """
    reverse = state.direction.opposite
    fx, fy = state.food
    moves: list[Move] = []
    for direction in CANDIDATE_ORDER:
        if direction is reverse:
            continue
        dest = grid.neighbor(state.head, direction)
        moves.append(
            Move(
                direction=direction,
                destination=dest,
                distance=abs(dest[0] - fx) + abs(dest[1] - fy),
                safe=not state.occupies(dest),
            )
        )
    return moves


def rank_moves(moves: list[Move]) -> list[Move]:
    """Order moves safe-first, then nearest-to-food; ties keep input order."""
    return sorted(moves, key=lambda m: (not m.safe, m.distance))


def choose_direction(state: GameState, grid: Grid) -> Direction:
    """Pick the next direction for *state*.

    Always one of the three non-reversing directions. When every move is
    unsafe the closest one is still returned.
    """
    ranked = rank_moves(candidate_moves(state, grid))
    assert ranked, "a non-reversing move always exists"  # noqa: S101
    return ranked[0].direction
