"""Tests for the async tick scheduler."""

from dataclasses import replace

import pytest

from snake_autopilot.config import GameConfig
from snake_autopilot.engine import GameEngine
from snake_autopilot.food import BoardFullError
from snake_autopilot.render import LatestInput
from snake_autopilot.scheduler import TickScheduler
from snake_autopilot.snake import Direction, GameState


class _RecordingSink:
    def __init__(self):
        self.states = []

    def render(self, state):
        self.states.append(state)


class _StoppingSink(_RecordingSink):
    def __init__(self, scheduler_ref, stop_after):
        super().__init__()
        self._ref = scheduler_ref
        self._stop_after = stop_after

    def render(self, state):
        super().render(state)
        if len(self.states) >= self._stop_after:
            self._ref[0].stop()


@pytest.fixture()
def engine():
    return GameEngine(GameConfig(seed=0, tick_interval_ms=0))


class TestSchedulerInit:
    def test_interval_from_config(self):
        engine = GameEngine(GameConfig(seed=0))
        assert TickScheduler(engine).interval == pytest.approx(0.2)

    def test_negative_interval(self, engine):
        with pytest.raises(ValueError, match=">= 0"):
            TickScheduler(engine, interval=-1.0)


class TestSchedulerTick:
    def test_tick_forwards_input(self, engine):
        source = LatestInput()
        source.push(Direction.UP)
        sink = _RecordingSink()
        scheduler = TickScheduler(engine, sink=sink, input_source=source)
        snapshot = scheduler.tick()
        assert engine.state.head == (10, 9)
        assert snapshot["tick"] == 1
        assert sink.states == [engine.state]
        assert source.poll() is None


class TestSchedulerRun:
    @pytest.mark.asyncio
    async def test_max_ticks(self, engine):
        sink = _RecordingSink()
        scheduler = TickScheduler(engine, sink=sink)
        snapshot = await scheduler.run(max_ticks=5)
        assert snapshot["tick"] == 5
        assert len(sink.states) == 5
        assert not scheduler.running

    @pytest.mark.asyncio
    async def test_stops_on_game_over(self, engine):
        engine.state = replace(engine.state, game_over=True)
        sink = _RecordingSink()
        snapshot = await TickScheduler(engine, sink=sink).run(max_ticks=5)
        assert snapshot["tick"] == 0
        assert snapshot["game_over"]
        assert sink.states == []

    @pytest.mark.asyncio
    async def test_stop_from_sink(self, engine):
        ref = []
        sink = _StoppingSink(ref, stop_after=3)
        scheduler = TickScheduler(engine, sink=sink)
        ref.append(scheduler)
        snapshot = await scheduler.run(max_ticks=50)
        assert snapshot["tick"] == 3

    @pytest.mark.asyncio
    async def test_autopilot_game_until_end_or_limit(self):
        engine = GameEngine(
            GameConfig(seed=1, tick_interval_ms=0, autopilot=True),
        )
        snapshot = await TickScheduler(engine).run(max_ticks=300)
        assert snapshot["score"] >= 1
        assert snapshot["tick"] <= 300

    @pytest.mark.asyncio
    async def test_errors_propagate(self, engine):
        class _BrokenSink:
            def render(self, state):
                raise RuntimeError("display gone")

        scheduler = TickScheduler(engine, sink=_BrokenSink())
        with pytest.raises(RuntimeError, match="display gone"):
            await scheduler.run(max_ticks=3)
        assert not scheduler.running

    @pytest.mark.asyncio
    async def test_board_full_propagates(self):
        engine = GameEngine(
            GameConfig(grid_size=2, start=(1, 1), seed=0, tick_interval_ms=0),
        )
        engine.state = GameState(
            snake=((0, 1), (1, 1), (1, 0)), food=(0, 0),
            direction=Direction.UP,
        )
        scheduler = TickScheduler(engine)
        with pytest.raises(BoardFullError):
            await scheduler.run(max_ticks=5)
        assert not scheduler.running
