"""REST API route handlers for the running game."""

from __future__ import annotations

from fastapi import APIRouter, Request

from solo_snake.server.models import (
    ActionResponse,
    GameAction,
    HighScoreResponse,
    KeyRequest,
    KeyResponse,
)
from solo_snake.server.session import GameSession

router = APIRouter(prefix="/game", tags=["game"])


def _get_session(request: Request) -> GameSession:
    return request.app.state.session


@router.get("")
async def get_game(request: Request) -> dict:
    """Get the full game snapshot."""
    return _get_session(request).snapshot()


@router.get("/highscore")
async def get_high_score(request: Request) -> HighScoreResponse:
    session = _get_session(request)
    return HighScoreResponse(high_score=session.machine.high_score)


@router.post("/key")
async def press_key(body: KeyRequest, request: Request) -> KeyResponse:
    """Feed one key press to the game."""
    session = _get_session(request)
    accepted = session.handle_key(body.key)
    return KeyResponse(state=session.machine.state.value, accepted=accepted)


@router.post("/{action}")
async def apply_action(action: GameAction, request: Request) -> ActionResponse:
    """Start, restart, pause or resume the game."""
    session = _get_session(request)
    changed = session.apply(action.value)
    return ActionResponse(state=session.machine.state.value, changed=changed)
