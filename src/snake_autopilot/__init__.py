"""Snake Autopilot — toroidal snake engine with a greedy autopilot."""

from snake_autopilot.autopilot import Move, candidate_moves, choose_direction
from snake_autopilot.config import GameConfig
from snake_autopilot.engine import GameEngine, step
from snake_autopilot.food import BoardFullError, FoodSpawner
from snake_autopilot.grid import CellType, Grid
from snake_autopilot.render import LatestInput, TextRenderer
from snake_autopilot.scheduler import TickScheduler
from snake_autopilot.snake import Direction, GameState, coerce_direction

__all__ = [
    "BoardFullError",
    "CellType",
    "Direction",
    "FoodSpawner",
    "GameConfig",
    "GameEngine",
    "GameState",
    "Grid",
    "LatestInput",
    "Move",
    "TextRenderer",
    "TickScheduler",
    "candidate_moves",
    "choose_direction",
    "coerce_direction",
    "step",
]
