"""Snake Arcade — tick-driven snake game core."""

from snake_arcade.config import Difficulty, GameConfig
from snake_arcade.control import Signal, parse_signal
from snake_arcade.engine import SimulationEngine, TickResult
from snake_arcade.events import (
    Frame,
    GameOver,
    GamePaused,
    GameResumed,
    NewBestScore,
    PointScored,
    RunStarted,
)
from snake_arcade.grid import Grid
from snake_arcade.score import ScoreKeeper
from snake_arcade.session import GameSession
from snake_arcade.snake import Direction, Snake
from snake_arcade.state import CollisionKind, GameState, RunMode
from snake_arcade.storage import JsonFileStore, MemoryStore
from snake_arcade.timers import LoopClock, VirtualClock

__all__ = [
    "CollisionKind",
    "Difficulty",
    "Direction",
    "Frame",
    "GameConfig",
    "GameOver",
    "GamePaused",
    "GameResumed",
    "GameSession",
    "GameState",
    "Grid",
    "JsonFileStore",
    "LoopClock",
    "MemoryStore",
    "NewBestScore",
    "PointScored",
    "RunMode",
    "RunStarted",
    "ScoreKeeper",
    "Signal",
    "SimulationEngine",
    "Snake",
    "TickResult",
    "VirtualClock",
    "parse_signal",
]
