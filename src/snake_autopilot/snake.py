"""Directions and the immutable per-tick game state."""

from __future__ import annotations

import enum
from dataclasses import dataclass

Position = tuple[int, int]


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        """Return the direction that would cause a 180° reversal."""
        return _OPPOSITES[self]

    def is_reversal_of(self, other: Direction) -> bool:
        return _OPPOSITES[other] is self


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def coerce_direction(value: object) -> Direction | None:
    """Return a :class:`Direction` for *value*, or ``None`` if malformed.

    Accepts a ``Direction`` member or any ``(dx, dy)`` pair of ints that
    is one of the four unit vectors.
    """
    if isinstance(value, Direction):
        return value
    if not isinstance(value, (tuple, list)) or len(value) != 2:
        return None
    dx, dy = value
    if isinstance(dx, bool) or isinstance(dy, bool):
        return None
    if not isinstance(dx, int) or not isinstance(dy, int):
        return None
    try:
        return Direction((dx, dy))
    except ValueError:
        return None


@dataclass(frozen=True)
class GameState:
    """A snapshot of one game between ticks.

    The snake is a tuple of ``(x, y)`` segments; the head is
    ``snake[0]`` and the tail is ``snake[-1]``. Instances are never
    mutated; the engine returns a new state for every tick.
    """

    snake: tuple[Position, ...]
    food: Position
    direction: Direction = Direction.RIGHT
    score: int = 0
    game_over: bool = False
    autopilot_enabled: bool = False

    def __post_init__(self) -> None:
        if len(self.snake) < 1:
            raise ValueError("Snake length must be at least 1.")
        if self.score < 0:
            raise ValueError("Score must be non-negative.")

    @classmethod
    def new(
        cls,
        food: Position,
        start: Position = (10, 10),
        autopilot_enabled: bool = False,
    ) -> GameState:
        """Create the initial state: a one-segment snake heading right."""
        return cls(
            snake=(start,),
            food=food,
            direction=Direction.RIGHT,
            autopilot_enabled=autopilot_enabled,
        )

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    def occupies(self, pos: Position) -> bool:
        """Check whether any snake segment sits on *pos*."""
        return pos in self.snake

    def to_dict(self) -> dict:
        """Serialize the state to a JSON-friendly dictionary."""
        return {
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food),
            "direction": list(self.direction.value),
            "score": self.score,
            "game_over": self.game_over,
            "autopilot_enabled": self.autopilot_enabled,
        }
