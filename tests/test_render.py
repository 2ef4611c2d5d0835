"""Tests for the text renderer and the latest-only input source."""

import io

from snake_autopilot.grid import Grid
from snake_autopilot.render import KEY_BINDINGS, LatestInput, TextRenderer
from snake_autopilot.snake import Direction, GameState


class TestLatestInput:
    def test_empty_poll(self):
        assert LatestInput().poll() is None

    def test_poll_clears(self):
        source = LatestInput()
        source.push(Direction.UP)
        assert source.poll() is Direction.UP
        assert source.poll() is None

    def test_latest_wins(self):
        source = LatestInput()
        source.push(Direction.UP)
        source.push(Direction.LEFT)
        assert source.poll() is Direction.LEFT

    def test_press_arrow_keys(self):
        source = LatestInput()
        assert source.press("ArrowDown")
        assert source.poll() is Direction.DOWN

    def test_press_unbound_key(self):
        source = LatestInput()
        assert not source.press("q")
        assert source.poll() is None

    def test_bindings_cover_all_directions(self):
        assert set(KEY_BINDINGS.values()) == set(Direction)


class TestTextRenderer:
    def test_frame(self):
        renderer = TextRenderer(Grid(3))
        state = GameState(snake=((1, 0), (0, 0)), food=(2, 2), score=4)
        assert renderer.frame(state).splitlines() == [
            "o@.",
            "...",
            "..*",
            "Score: 4  Mode: Manual",
        ]

    def test_game_over_banner(self):
        renderer = TextRenderer(Grid(3))
        state = GameState(
            snake=((1, 1),), food=(0, 0), game_over=True,
            autopilot_enabled=True,
        )
        lines = renderer.frame(state).splitlines()
        assert lines[3] == "Score: 0  Mode: AI"
        assert lines[4].startswith("GAME OVER")

    def test_render_writes_to_stream(self):
        stream = io.StringIO()
        renderer = TextRenderer(Grid(4), stream=stream)
        renderer.render(GameState(snake=((0, 0),), food=(3, 3)))
        assert stream.getvalue().startswith("@...\n")
        assert "Score: 0" in stream.getvalue()
