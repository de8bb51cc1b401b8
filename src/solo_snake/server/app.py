"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from solo_snake.config import GameConfig
from solo_snake.game import GameStateMachine
from solo_snake.persistence import HighScoreStore, JsonHighScoreStore
from solo_snake.server.routes import router
from solo_snake.server.session import GameSession
from solo_snake.server.websocket import ws_router


def build_session(
    config: GameConfig | None = None,
    store: HighScoreStore | None = None,
) -> GameSession:
    """Wire a state machine to its high-score store inside a session."""
    cfg = config or GameConfig()
    if store is None:
        store = JsonHighScoreStore(cfg.high_score_path)
    return GameSession(GameStateMachine(cfg, store=store))


def create_app(
    config: GameConfig | None = None,
    store: HighScoreStore | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session = build_session(config, store)
        yield
        await app.state.session.close()

    app = FastAPI(title="Solo Snake", version="0.1.0", lifespan=_lifespan)
    app.include_router(router)
    app.include_router(ws_router)
    return app
