"""Tests for GameConfig."""

import json

import pytest

from snake_arcade.config import Difficulty, GameConfig


class TestGameConfigDefaults:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 20
        assert cfg.initial_length == 3
        assert cfg.difficulty is Difficulty.MEDIUM
        assert cfg.hazard_period_ms == 8000
        assert cfg.hazard_lifetime_ms == 5000
        assert cfg.best_score_key == "snakeHighScore"
        assert not cfg.implicit_start

    @pytest.mark.parametrize(
        ("tier", "period"),
        [("easy", 150), ("medium", 100), ("hard", 60), ("impossible", 30)],
    )
    def test_tick_periods(self, tier, period):
        assert GameConfig().tick_period_ms(Difficulty(tier)) == period

    def test_string_difficulty_coerced(self):
        assert GameConfig(difficulty="hard").difficulty is Difficulty.HARD


class TestGameConfigValidation:
    def test_grid_too_small(self):
        with pytest.raises(ValueError, match="grid_size"):
            GameConfig(grid_size=3)

    def test_length_too_short(self):
        with pytest.raises(ValueError, match="at least 3"):
            GameConfig(initial_length=2)

    def test_length_does_not_fit(self):
        with pytest.raises(ValueError, match="does not fit"):
            GameConfig(grid_size=6, initial_length=5)

    def test_missing_tier(self):
        with pytest.raises(ValueError, match="missing tiers"):
            GameConfig(tick_periods_ms={"easy": 150})

    def test_non_positive_hazard_timing(self):
        with pytest.raises(ValueError, match="positive"):
            GameConfig(hazard_lifetime_ms=0)


class TestGameConfigSerialization:
    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_size=15, difficulty=Difficulty.EASY, hazards_enabled=False)
        path = tmp_path / "game.json"
        cfg.save(path)
        loaded = GameConfig.load(path)
        assert loaded == cfg

    def test_to_dict_serializable(self):
        d = GameConfig().to_dict()
        assert d["difficulty"] == "medium"
        assert isinstance(json.dumps(d), str)
