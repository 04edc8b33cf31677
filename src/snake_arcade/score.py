"""Best-score tracking with write-through persistence."""

from __future__ import annotations

import logging

from snake_arcade.config import BEST_SCORE_KEY
from snake_arcade.storage import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


class ScoreKeeper:
    """Owns the process-wide best score.

    The stored value is read once at construction. After that the
    in-memory value is authoritative: a store that fails to read or write
    is logged and otherwise ignored.
    """

    def __init__(
        self, store: KeyValueStore | None = None, key: str = BEST_SCORE_KEY,
    ) -> None:
        self.store = store if store is not None else MemoryStore()
        self.key = key
        self.best = self._load()

    def _load(self) -> int:
        try:
            raw = self.store.get(self.key)
        except Exception:
            logger.warning("Could not read best score; starting from 0.", exc_info=True)
            return 0
        if raw is None:
            return 0
        try:
            value = int(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed best score %r.", raw)
            return 0
        return max(value, 0)

    def record(self, score: int) -> bool:
        """Offer *score*; returns True if it set a new best."""
        if score <= self.best:
            return False
        self.best = score
        logger.info("New best score: %d.", score)
        self._persist()
        return True

    def reset(self) -> None:
        """Forget the best score, in memory and in the store."""
        self.best = 0
        self._persist()

    def _persist(self) -> None:
        try:
            self.store.set(self.key, str(self.best))
        except Exception:
            logger.warning(
                "Failed to persist best score %d.", self.best, exc_info=True,
            )
