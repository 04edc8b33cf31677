"""Input signals, key bindings, and the pending-heading buffer."""

from __future__ import annotations

import enum
import logging

from snake_arcade.snake import Direction

logger = logging.getLogger(__name__)


class Signal(str, enum.Enum):
    """Control inputs understood by a game session.

    ``ACTION`` is the space bar: it starts a run when none is active and
    toggles pause otherwise.
    """

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAUSE = "pause"
    START = "start"
    ACTION = "action"

    @property
    def direction(self) -> Direction | None:
        return _SIGNAL_DIRECTIONS.get(self)


_SIGNAL_DIRECTIONS: dict[Signal, Direction] = {
    Signal.UP: Direction.UP,
    Signal.DOWN: Direction.DOWN,
    Signal.LEFT: Direction.LEFT,
    Signal.RIGHT: Direction.RIGHT,
}

# Browser ``KeyboardEvent.key`` values.
KEY_BINDINGS: dict[str, Signal] = {
    "ArrowUp": Signal.UP,
    "ArrowDown": Signal.DOWN,
    "ArrowLeft": Signal.LEFT,
    "ArrowRight": Signal.RIGHT,
    "w": Signal.UP,
    "s": Signal.DOWN,
    "a": Signal.LEFT,
    "d": Signal.RIGHT,
    " ": Signal.ACTION,
    "p": Signal.PAUSE,
    "Enter": Signal.START,
}


def parse_signal(raw: str) -> Signal | None:
    """Map a signal name (``"up"``) or a key name (``"ArrowUp"``) to a signal."""
    if raw in KEY_BINDINGS:
        return KEY_BINDINGS[raw]
    if len(raw) == 1 and raw.lower() in KEY_BINDINGS:
        return KEY_BINDINGS[raw.lower()]
    try:
        return Signal(raw.strip().lower())
    except ValueError:
        return None


class HeadingBuffer:
    """Holds at most one pending heading until the next tick commits it.

    Requests are judged against the *committed* heading, so two quick
    turns inside one tick window can never add up to a reversal. The
    latest legal request wins.
    """

    def __init__(self) -> None:
        self.pending: Direction | None = None

    def request(self, direction: Direction, committed: Direction) -> bool:
        """Queue *direction*; returns False if it reverses *committed*."""
        if direction is committed.opposite:
            logger.debug(
                "Ignored reversal %s while heading %s.",
                direction.name, committed.name,
            )
            return False
        self.pending = direction
        return True

    def take(self) -> Direction | None:
        """Return and clear the pending heading."""
        pending, self.pending = self.pending, None
        return pending

    def clear(self) -> None:
        self.pending = None
