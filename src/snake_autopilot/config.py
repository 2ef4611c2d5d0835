"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Grid, timing and start parameters for a game.

    Supports JSON serialization for reproducible runs.
    """

    # Grid
    grid_size: int = 20
    cell_size: int = 20  # pixels per cell, cosmetic only

    # Timing
    tick_interval_ms: int = 200

    # Start
    start: tuple[int, int] = (10, 10)
    autopilot: bool = False

    # Food
    seed: int | None = None
    food_max_attempts: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError("grid_size must be at least 2.")
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if self.tick_interval_ms < 0:
            raise ValueError("tick_interval_ms must be >= 0.")
        x, y = self.start
        if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
            raise ValueError(
                f"start {self.start} lies outside a {self.grid_size}x"
                f"{self.grid_size} grid.",
            )

    @property
    def tick_interval(self) -> float:
        """Tick period in seconds."""
        return self.tick_interval_ms / 1000.0

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        d = asdict(self)
        d["start"] = list(self.start)
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if "start" in raw:
            raw["start"] = tuple(raw["start"])
        return cls(**raw)
