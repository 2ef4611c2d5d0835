"""Tick-based simulation: a pure ``step`` function and a stateful engine."""

from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np

from snake_autopilot.autopilot import choose_direction
from snake_autopilot.config import GameConfig
from snake_autopilot.food import FoodSpawner
from snake_autopilot.grid import Grid
from snake_autopilot.snake import Direction, GameState, coerce_direction

logger = logging.getLogger(__name__)


def resolve_direction(
    state: GameState,
    requested: Direction | tuple[int, int] | None,
    grid: Grid,
) -> Direction:
    """Return the direction the snake will move in this tick.

    The autopilot owns direction while enabled, so manual requests are
    dropped. Otherwise a well-formed, non-reversing request replaces the
    current direction.
    """
    if state.autopilot_enabled:
        return choose_direction(state, grid)
    if requested is None:
        return state.direction

    direction = coerce_direction(requested)
    if direction is None:
        logger.debug("Ignoring malformed direction %r.", requested)
        return state.direction
    if direction.is_reversal_of(state.direction):
        logger.debug(
            "Ignoring reversal %s while heading %s.",
            direction.name, state.direction.name,
        )
        return state.direction
    return direction


def step(
    state: GameState,
    requested: Direction | tuple[int, int] | None = None,
    *,
    grid: Grid,
    spawner: FoodSpawner,
) -> GameState:
    """Advance *state* by one tick and return the resulting state.

    A terminal state is returned as-is. Food respawn through *spawner*
    is the only source of randomness.
    """
    if state.game_over:
        return state

    direction = resolve_direction(state, requested, grid)
    new_head = grid.neighbor(state.head, direction)

    # --- self-collision against the pre-move body, tail included ---
    if new_head in state.snake[1:]:
        return replace(state, direction=direction, game_over=True)

    # --- move ---
    body = (new_head, *state.snake)
    if new_head == state.food:
        return replace(
            state,
            snake=body,
            food=spawner.spawn(body),
            direction=direction,
            score=state.score + 1,
        )
    return replace(state, snake=body[:-1], direction=direction)


class GameEngine:
    """Single-game engine driven by an external scheduler.

    The engine owns the grid, the food spawner and the current
    :class:`GameState`. Each call to :meth:`step` consumes the pending
    direction request, advances one tick and returns a serializable
    snapshot.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(size=self.config.grid_size)
        self.rng = np.random.default_rng(self.config.seed)
        self.spawner = FoodSpawner(
            self.grid, rng=self.rng,
            max_attempts=self.config.food_max_attempts,
        )
        self.state = self._initial_state()
        self.tick = 0
        self._pending_direction: Direction | tuple[int, int] | None = None

    def _initial_state(self) -> GameState:
        start = self.config.start
        return GameState.new(
            food=self.spawner.spawn((start,)),
            start=start,
            autopilot_enabled=self.config.autopilot,
        )

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def score(self) -> int:
        return self.state.score

    def set_direction(self, direction: Direction | tuple[int, int]) -> None:
        """Record a direction request; only the latest one is kept."""
        self._pending_direction = direction

    def enable_autopilot(self) -> None:
        """Hand direction control to the autopilot."""
        if not self.state.autopilot_enabled:
            self.state = replace(self.state, autopilot_enabled=True)
            logger.info("Autopilot enabled at tick %d.", self.tick)

    def disable_autopilot(self) -> None:
        """Return direction control to manual input."""
        if self.state.autopilot_enabled:
            self.state = replace(self.state, autopilot_enabled=False)
            logger.info("Autopilot disabled at tick %d.", self.tick)

    def step(self) -> dict:
        """Consume the pending request and run one tick of :func:`step`.

        While the autopilot is on the request is discarded unused. Raises
        :class:`BoardFullError` if eating leaves no cell for new food.
        """
        requested, self._pending_direction = self._pending_direction, None
        if self.state.game_over:
            return self.get_state()

        previous = self.state
        self.state = step(
            previous, requested, grid=self.grid, spawner=self.spawner,
        )
        self.tick += 1

        if self.state.game_over:
            logger.info(
                "Snake collided with itself at tick %d with score %d.",
                self.tick, self.state.score,
            )
        elif self.state.score > previous.score:
            logger.debug(
                "Food eaten at %s; score %d, next food at %s.",
                self.state.head, self.state.score, self.state.food,
            )
        return self.get_state()

    def get_state(self) -> dict:
        """Snapshot the current ``GameState`` plus tick count and grid size."""
        return {
            "tick": self.tick,
            "grid": self.grid.to_dict(),
            **self.state.to_dict(),
        }

    def reset(self) -> None:
        """Start a fresh game with the same configuration."""
        self.state = self._initial_state()
        self.tick = 0
        self._pending_direction = None
        logger.info("Game reset.")
