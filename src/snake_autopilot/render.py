"""Render sinks and input sources the tick loop talks to."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Protocol, TextIO

from snake_autopilot.grid import CellType
from snake_autopilot.snake import Direction

if TYPE_CHECKING:
    from snake_autopilot.grid import Grid
    from snake_autopilot.snake import GameState

logger = logging.getLogger(__name__)

KEY_BINDINGS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}

_GLYPHS: dict[int, str] = {
    CellType.EMPTY: ".",
    CellType.SNAKE: "o",
    CellType.HEAD: "@",
    CellType.FOOD: "*",
}


class RenderSink(Protocol):
    """Anything that can display a state snapshot once per tick."""

    def render(self, state: GameState) -> None: ...


class InputSource(Protocol):
    """Anything that can hand over the latest pending direction request."""

    def poll(self) -> Direction | None: ...


class LatestInput:
    """Holds at most one pending direction; newer requests replace older."""

    def __init__(self) -> None:
        self._pending: Direction | None = None

    def push(self, direction: Direction) -> None:
        self._pending = direction

    def press(self, key: str) -> bool:
        """Translate a key name into a request. Returns False if unbound."""
        direction = KEY_BINDINGS.get(key)
        if direction is None:
            logger.debug("Ignoring unbound key %r.", key)
            return False
        self.push(direction)
        return True

    def poll(self) -> Direction | None:
        """Return the pending request and clear it."""
        pending, self._pending = self._pending, None
        return pending


class TextRenderer:
    """Draws each snapshot as an ASCII frame on a text stream."""

    def __init__(self, grid: Grid, stream: TextIO | None = None) -> None:
        self.grid = grid
        self.stream = stream if stream is not None else sys.stdout

    def frame(self, state: GameState) -> str:
        """Return the text frame for *state* without writing it."""
        cells = self.grid.to_array(state)
        rows = ["".join(_GLYPHS[int(c)] for c in row) for row in cells]
        mode = "AI" if state.autopilot_enabled else "Manual"
        rows.append(f"Score: {state.score}  Mode: {mode}")
        if state.game_over:
            rows.append("GAME OVER - restart to play again")
        return "\n".join(rows)

    def render(self, state: GameState) -> None:
        self.stream.write(self.frame(state) + "\n\n")
        self.stream.flush()
