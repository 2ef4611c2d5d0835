"""Fixed-interval async tick loop driving a :class:`GameEngine`."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from snake_autopilot.food import BoardFullError

if TYPE_CHECKING:
    from snake_autopilot.engine import GameEngine
    from snake_autopilot.render import InputSource, RenderSink

logger = logging.getLogger(__name__)


class TickScheduler:
    """Invokes the engine once per interval until the game ends.

    Each tick polls the input source, steps the engine and hands the new
    state to the render sink. There is no queueing: a tick that finds no
    pending input simply keeps the current direction.
    """

    def __init__(
        self,
        engine: GameEngine,
        sink: RenderSink | None = None,
        input_source: InputSource | None = None,
        interval: float | None = None,
    ) -> None:
        self.engine = engine
        self.sink = sink
        self.input_source = input_source
        self.interval = (
            interval if interval is not None
            else engine.config.tick_interval
        )
        if self.interval < 0:
            raise ValueError("interval must be >= 0.")
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the loop to exit before its next tick."""
        self._running = False

    def tick(self) -> dict:
        """Run a single tick synchronously and return the snapshot."""
        if self.input_source is not None:
            requested = self.input_source.poll()
            if requested is not None:
                self.engine.set_direction(requested)
        snapshot = self.engine.step()
        if self.sink is not None:
            self.sink.render(self.engine.state)
        return snapshot

    async def run(self, max_ticks: int | None = None) -> dict:
        """Tick until game over, :meth:`stop`, or *max_ticks* ticks.

        Returns the last snapshot.
        """
        self._running = True
        snapshot = self.engine.get_state()
        ticks = 0
        try:
            while self._running and not self.engine.game_over:
                if max_ticks is not None and ticks >= max_ticks:
                    break
                await asyncio.sleep(self.interval)
                if not self._running:
                    break
                snapshot = self.tick()
                ticks += 1
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled after %d ticks.", ticks)
            raise
        except BoardFullError:
            logger.info("Board filled after %d ticks.", ticks)
            raise
        except Exception:
            logger.exception("Tick loop error after %d ticks.", ticks)
            raise
        finally:
            self._running = False
        logger.info(
            "Tick loop finished after %d ticks (score %d, game_over=%s).",
            ticks, self.engine.score, self.engine.game_over,
        )
        return snapshot
