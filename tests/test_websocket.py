"""WebSocket integration tests for the renderer bridge."""

from __future__ import annotations

import asyncio
import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocket

from solo_snake.config import GameConfig
from solo_snake.persistence import MemoryHighScoreStore
from solo_snake.server.app import create_app

_MAX_MESSAGES = 2_000


@pytest.fixture()
def store():
    return MemoryHighScoreStore()


@pytest.fixture()
def tc(store):
    """Context-managed TestClient so the lifespan builds the session and the
    tick timer keeps running on one event loop between calls."""
    application = create_app(
        GameConfig(seed=0, initial_tick_ms=20, tick_step_ms=1, min_tick_ms=10),
        store,
    )
    with TestClient(application) as client:
        yield client


def _receive_until(ws, predicate) -> dict:
    for _ in range(_MAX_MESSAGES):
        msg = json.loads(ws.receive_text())
        if predicate(msg):
            return msg
    raise AssertionError("expected message never arrived")


class TestPlayWebSocket:
    def test_initial_snapshot(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            msg = json.loads(ws.receive_text())
            assert msg["event"] == "snapshot"
            assert msg["data"]["state"] == "ready"
            assert msg["data"]["snake"]["body"] == [[10, 10]]

    def test_start_streams_render_events(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "start"}))
            state = _receive_until(ws, lambda m: m["event"] == "state")
            assert state["data"]["state"] == "playing"
            render = _receive_until(
                ws,
                lambda m: m["event"] == "render" and m["data"]["ticks"] > 0,
            )
            assert render["data"]["snake"]["body"][0][0] > 10

    def test_game_runs_into_wall(self, tc, store):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "start"}))
            over = _receive_until(ws, lambda m: m["event"] == "gameOver")
            assert over["data"]["reason"] == "wall"
            assert store.load() == over["data"]["score"]

        resp = tc.get("/game")
        assert resp.json()["state"] == "gameOver"

    def test_key_changes_heading(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "start"}))
            _receive_until(ws, lambda m: m["event"] == "state")
            ws.send_text(json.dumps({"key": "ArrowDown"}))
            render = _receive_until(
                ws,
                lambda m: m["event"] in ("render", "gameOver")
                and (
                    m["event"] == "gameOver"
                    or m["data"]["snake"]["direction"] == "down"
                ),
            )
            assert render["event"] == "render"

    def test_invalid_messages_ignored(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text("123")
            ws.send_text(json.dumps({"action": "explode"}))
            ws.send_text(json.dumps({"nothing": True}))
            ws.send_text(json.dumps({"action": "start"}))
            state = _receive_until(ws, lambda m: m["event"] == "state")
            assert state["data"]["state"] == "playing"

    def test_disconnect_leaves_game_running(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "start"}))
            _receive_until(ws, lambda m: m["event"] == "state")

        session = tc.app.state.session
        assert session.client_count == 0
        resp = tc.get("/game")
        assert resp.json()["state"] in ("playing", "gameOver")


class TestSnapshotOrdering:
    def test_events_during_slow_first_send_are_delivered(self, tc, monkeypatch):
        """The game starts and ends while the first frame is still being
        written; every event must still reach the renderer afterwards."""
        original_send = WebSocket.send_text
        sent: list[str] = []

        async def slow_first_send(self, data):
            if not sent:
                sent.append(data)
                tc.app.state.session.apply("start")
                await asyncio.sleep(0.5)
            await original_send(self, data)

        monkeypatch.setattr(WebSocket, "send_text", slow_first_send)

        with tc.websocket_connect("/game/play") as ws:
            snapshot = json.loads(ws.receive_text())
            assert snapshot["event"] == "snapshot"
            assert snapshot["data"]["state"] == "ready"
            over = _receive_until(ws, lambda m: m["event"] == "gameOver")
            assert over["data"]["reason"] == "wall"
            final = _receive_until(ws, lambda m: m["event"] == "render")
            assert final["data"]["state"] == "gameOver"
