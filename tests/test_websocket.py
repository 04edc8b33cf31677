"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from snake_arcade.config import GameConfig
from snake_arcade.server.app import create_app
from snake_arcade.server.registry import SessionRegistry
from snake_arcade.state import RunMode


@pytest.fixture()
def tc():
    """Starlette sync TestClient; the socket's event loop drives the timers."""
    application = create_app()
    application.state.registry = SessionRegistry(
        GameConfig(hazards_enabled=False, seed=3),
    )
    return TestClient(application)


def _create_session(tc, **body):
    resp = tc.post("/sessions", json={"difficulty": "impossible", **body})
    assert resp.status_code == 201
    return resp.json()["session_id"]


def _receive_until(ws, predicate, limit=200):
    for _ in range(limit):
        msg = json.loads(ws.receive_text())
        if predicate(msg):
            return msg
    raise AssertionError("expected message never arrived")


class TestPlayWebSocket:
    def test_connect_and_receive_initial_frame(self, tc):
        session_id = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            frame = json.loads(ws.receive_text())
            assert frame["type"] == "frame"
            assert frame["mode"] == "idle"
            assert frame["snake"][0] == [10, 10]

    def test_play_until_game_over(self, tc):
        session_id = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"signal": "start"}))
            started = _receive_until(ws, lambda m: m["type"] == "event")
            assert started["event"] == "run_started"
            assert started["difficulty"] == "impossible"

            over = _receive_until(
                ws, lambda m: m.get("event") == "game_over",
            )
            assert over["kind"] == "wall"

    def test_key_messages_accepted(self, tc):
        session_id = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text("not json")
            ws.send_text(json.dumps(["up"]))
            ws.send_text(json.dumps({"key": " "}))
            started = _receive_until(ws, lambda m: m["type"] == "event")
            assert started["event"] == "run_started"
            ws.send_text(json.dumps({"key": "ArrowUp"}))
            over = _receive_until(
                ws, lambda m: m.get("event") == "game_over",
            )
            assert over["kind"] == "wall"

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ) as ws:
            ws.receive_text()

    def test_delete_disconnects_player(self, tc):
        session_id = _create_session(tc)
        handle = tc.app.state.registry.get(session_id)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            assert tc.delete(f"/sessions/{session_id}").status_code == 204
            ws.send_text(json.dumps({"signal": "start"}))
            with pytest.raises(WebSocketDisconnect) as exc_info:
                ws.receive_text()
            assert exc_info.value.code == 4004
        assert handle.session.mode is RunMode.IDLE
        assert not handle.session.movement_active
