"""Game configuration: grid, difficulty tiers, hazard timing."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from snake_arcade.grid import MIN_GRID_SIZE

logger = logging.getLogger(__name__)


class Difficulty(str, enum.Enum):
    """Difficulty tiers; each maps to a movement tick period."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    IMPOSSIBLE = "impossible"


DEFAULT_TICK_PERIODS_MS: dict[str, int] = {
    Difficulty.EASY.value: 150,
    Difficulty.MEDIUM.value: 100,
    Difficulty.HARD.value: 60,
    Difficulty.IMPOSSIBLE.value: 30,
}

DEFAULT_HAZARD_PERIOD_MS = 8000
DEFAULT_HAZARD_LIFETIME_MS = 5000
BEST_SCORE_KEY = "snakeHighScore"


@dataclass(frozen=True)
class GameConfig:
    """Tunables for a game session.

    Supports JSON serialization so a front end and the server can share
    one file.
    """

    grid_size: int = 20
    initial_length: int = 3
    difficulty: Difficulty = Difficulty.MEDIUM
    tick_periods_ms: dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_TICK_PERIODS_MS),
    )

    # Hazards
    hazards_enabled: bool = True
    hazard_period_ms: int = DEFAULT_HAZARD_PERIOD_MS
    hazard_lifetime_ms: int = DEFAULT_HAZARD_LIFETIME_MS

    # Input
    implicit_start: bool = False

    seed: int | None = None
    best_score_key: str = BEST_SCORE_KEY

    def __post_init__(self) -> None:
        if self.grid_size < MIN_GRID_SIZE:
            raise ValueError(f"grid_size must be at least {MIN_GRID_SIZE}.")
        if self.initial_length < 3:
            raise ValueError("initial_length must be at least 3.")
        # The snake spawns at the centre with its body trailing left.
        if self.initial_length > self.grid_size // 2 + 1:
            raise ValueError(
                "initial_length does not fit the configured grid; increase "
                "grid_size or reduce initial_length."
            )
        if not isinstance(self.difficulty, Difficulty):
            object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        missing = [
            d.value for d in Difficulty if d.value not in self.tick_periods_ms
        ]
        if missing:
            raise ValueError(f"tick_periods_ms is missing tiers: {missing}.")
        if any(p <= 0 for p in self.tick_periods_ms.values()):
            raise ValueError("tick periods must be positive.")
        if self.hazard_period_ms <= 0 or self.hazard_lifetime_ms <= 0:
            raise ValueError("hazard period and lifetime must be positive.")
        if not self.best_score_key:
            raise ValueError("best_score_key must not be empty.")

    def tick_period_ms(self, difficulty: Difficulty | None = None) -> int:
        """Movement period for *difficulty* (defaults to the configured tier)."""
        tier = Difficulty(difficulty or self.difficulty)
        return self.tick_periods_ms[tier.value]

    def to_dict(self) -> dict:
        d = asdict(self)
        d["difficulty"] = self.difficulty.value
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
        if "difficulty" in raw:
            raw["difficulty"] = Difficulty(raw["difficulty"])
        return cls(**raw)
