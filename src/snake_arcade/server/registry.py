"""In-memory session registry and per-connection message fan-out."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from snake_arcade.config import Difficulty, GameConfig
from snake_arcade.control import Signal
from snake_arcade.events import Event, Frame
from snake_arcade.score import ScoreKeeper
from snake_arcade.session import GameSession
from snake_arcade.state import RunMode
from snake_arcade.storage import KeyValueStore
from snake_arcade.timers import Clock, LoopClock

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100
_QUEUE_SIZE = 256


@dataclass
class SessionHandle:
    """A live session plus the queues of the sockets watching it."""

    session_id: str
    session: GameSession
    subscribers: dict[asyncio.Queue, asyncio.AbstractEventLoop] = field(
        default_factory=dict,
    )
    created_at: float = field(default_factory=time.monotonic)

    def subscribe(self, maxsize: int = _QUEUE_SIZE) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self.subscribers[queue] = asyncio.get_running_loop()
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self.subscribers.pop(queue, None)

    def publish(self, message: dict) -> None:
        """Queue *message* for every subscriber without waiting."""
        for queue in list(self.subscribers):
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                logger.debug(
                    "Dropping %s message for a slow subscriber of %s.",
                    message.get("type"), self.session_id,
                )

    def disconnect(self) -> None:
        """Tell every subscriber the session is gone.

        Each queue receives a ``None`` sentinel on the loop that owns it, so
        this is safe to call from a request handled on another loop.
        """
        for queue, loop in list(self.subscribers.items()):
            if loop.is_closed():
                continue
            loop.call_soon_threadsafe(_put_sentinel, queue)

    def on_frame(self, frame: Frame) -> None:
        self.publish({"type": "frame", **frame.to_dict()})

    def on_event(self, event: Event) -> None:
        self.publish({"type": "event", **event.to_dict()})


def _put_sentinel(queue: asyncio.Queue) -> None:
    while True:
        try:
            queue.put_nowait(None)
            return
        except asyncio.QueueFull:
            queue.get_nowait()


class SessionRegistry:
    """Central registry of game sessions sharing one best score."""

    def __init__(
        self,
        config: GameConfig | None = None,
        store: KeyValueStore | None = None,
        max_sessions: int = _MAX_SESSIONS,
        clock_factory: Callable[[], Clock] = LoopClock,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1.")
        self.config = config or GameConfig()
        self.scores = ScoreKeeper(store, key=self.config.best_score_key)
        self._sessions: dict[str, SessionHandle] = {}
        self._max_sessions = max_sessions
        self._clock_factory = clock_factory

    def create_session(
        self,
        difficulty: Difficulty | str | None = None,
        hazards_enabled: bool | None = None,
        implicit_start: bool | None = None,
        seed: int | None = None,
    ) -> SessionHandle:
        """Create an Idle session and return its handle."""
        overrides: dict = {}
        if difficulty is not None:
            overrides["difficulty"] = Difficulty(difficulty)
        if hazards_enabled is not None:
            overrides["hazards_enabled"] = hazards_enabled
        if implicit_start is not None:
            overrides["implicit_start"] = implicit_start
        if seed is not None:
            overrides["seed"] = seed
        config = replace(self.config, **overrides) if overrides else self.config

        session_id = uuid.uuid4().hex[:12]
        session = GameSession(
            config, clock=self._clock_factory(), scores=self.scores,
        )
        handle = SessionHandle(session_id=session_id, session=session)
        session.render_sink = handle.on_frame
        session.notification_sink = handle.on_event
        self._sessions[session_id] = handle
        self._prune()
        logger.info(
            "Session %s created (difficulty=%s).",
            session_id, config.difficulty.value,
        )
        return handle

    def get(self, session_id: str) -> SessionHandle | None:
        return self._sessions.get(session_id)

    def require(self, session_id: str) -> SessionHandle:
        handle = self._sessions.get(session_id)
        if handle is None:
            raise KeyError(f"Session {session_id} not found.")
        return handle

    def list_sessions(self) -> list[SessionHandle]:
        return list(self._sessions.values())

    def send_signal(self, session_id: str, signal: Signal) -> bool:
        """Apply *signal* to a session; returns whether it changed anything."""
        return self.require(session_id).session.handle(signal)

    def close_session(self, session_id: str) -> None:
        handle = self._sessions.pop(session_id, None)
        if handle is None:
            raise KeyError(f"Session {session_id} not found.")
        handle.session.close()
        handle.disconnect()
        logger.info("Session %s closed.", session_id)

    def _prune(self) -> None:
        """Drop the oldest sessions that are not mid-run past the cap.

        Paused sessions are evictable too.
        """
        overflow = len(self._sessions) - self._max_sessions
        if overflow <= 0:
            return
        stale = sorted(
            (
                h for h in self._sessions.values()
                if h.session.mode is not RunMode.RUNNING
            ),
            key=lambda h: h.created_at,
        )
        victims = stale[:overflow]
        for handle in victims:
            handle.session.close()
            handle.disconnect()
            self._sessions.pop(handle.session_id, None)
        if victims:
            logger.info(
                "Pruned %d inactive sessions (retaining up to %d).",
                len(victims), self._max_sessions,
            )

    async def cleanup(self) -> None:
        """Cancel every session's timers."""
        for handle in self._sessions.values():
            handle.session.close()
            handle.disconnect()
        self._sessions.clear()
        logger.info("SessionRegistry cleanup complete.")
