"""Tests for headless simulation."""

import pytest

from snake_arcade.config import GameConfig
from snake_arcade.score import ScoreKeeper
from snake_arcade.simulate import SimulationReport, simulate_games
from snake_arcade.storage import MemoryStore


class TestSimulationReport:
    def test_summary_format(self):
        report = SimulationReport(
            total_games=10,
            total_ticks=500,
            best_score=7,
            mean_score=2.5,
            collisions={"wall": 8, "self": 2},
            wall_time_seconds=0.5,
        )
        summary = report.summary()
        assert "10 games" in summary
        assert "best 7" in summary
        assert "self=2, wall=8" in summary


class TestSimulateGames:
    def test_basic_run(self):
        report = simulate_games(
            num_games=5, config=GameConfig(grid_size=10), max_ticks=300,
        )
        assert report.total_games == 5
        assert report.total_ticks > 0
        assert sum(report.collisions.values()) <= 5
        assert set(report.collisions) <= {"wall", "self", "hazard"}

    def test_best_score_written_to_store(self):
        store = MemoryStore()
        keeper = ScoreKeeper(store)
        report = simulate_games(
            num_games=10, config=GameConfig(grid_size=8), scores=keeper,
            max_ticks=300,
        )
        assert report.best_score == keeper.best
        if keeper.best > 0:
            assert store.get("snakeHighScore") == str(keeper.best)

    def test_invalid_game_count(self):
        with pytest.raises(ValueError, match="at least 1"):
            simulate_games(num_games=0)
