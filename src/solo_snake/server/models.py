"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class GameAction(str, enum.Enum):
    """State transitions a client may request."""

    START = "start"
    RESTART = "restart"
    PAUSE = "pause"
    RESUME = "resume"


class KeyRequest(BaseModel):
    """Request body for POST /game/key."""

    key: str = Field(min_length=1, max_length=16)


class ActionResponse(BaseModel):
    state: str
    changed: bool


class KeyResponse(BaseModel):
    state: str
    accepted: bool


class HighScoreResponse(BaseModel):
    high_score: int
