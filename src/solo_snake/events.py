"""Signals the game fires to its renderer, audio and score display."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class EventKind(str, enum.Enum):
    EAT = "eat"
    MOVE = "move"
    RENDER = "render"
    SCORE = "score"
    SPEED = "speed"
    STATE = "state"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class GameEvent:
    """One fire-and-forget signal with an optional payload."""

    kind: EventKind
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"event": self.kind.value, "data": dict(self.data)}
