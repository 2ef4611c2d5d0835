"""Tests for the game configuration dataclass."""

import json

import pytest

from snake_autopilot.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 20
        assert cfg.cell_size == 20
        assert cfg.tick_interval_ms == 200
        assert cfg.tick_interval == pytest.approx(0.2)
        assert cfg.start == (10, 10)
        assert cfg.autopilot is False
        assert cfg.seed is None

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"grid_size": 1}, "grid_size"),
            ({"cell_size": 0}, "cell_size"),
            ({"tick_interval_ms": -5}, "tick_interval_ms"),
            ({"grid_size": 5}, "outside"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            GameConfig(**kwargs)

    def test_small_grid_with_matching_start(self):
        cfg = GameConfig(grid_size=2, start=(1, 1))
        assert cfg.grid_size == 2

    def test_to_dict_serializable(self):
        d = GameConfig(seed=3).to_dict()
        assert d["start"] == [10, 10]
        assert d["seed"] == 3
        assert isinstance(json.dumps(d), str)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(
            grid_size=12, start=(2, 3), seed=7, autopilot=True,
            food_max_attempts=50,
        )
        path = tmp_path / "nested" / "game.json"
        cfg.save(path)
        assert path.exists()

        loaded = GameConfig.load(path)
        assert loaded == cfg
        assert loaded.start == (2, 3)
