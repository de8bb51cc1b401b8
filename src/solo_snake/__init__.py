"""Solo Snake: single-player grid snake game core."""

from solo_snake.config import GameConfig
from solo_snake.events import EventKind, GameEvent
from solo_snake.food import FoodSpawner
from solo_snake.game import GameOverReason, GameState, GameStateMachine, TickResult
from solo_snake.grid import Grid
from solo_snake.persistence import JsonHighScoreStore, MemoryHighScoreStore
from solo_snake.snake import Direction, Snake

__all__ = [
    "Direction",
    "EventKind",
    "FoodSpawner",
    "GameConfig",
    "GameEvent",
    "GameOverReason",
    "GameState",
    "GameStateMachine",
    "Grid",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "Snake",
    "TickResult",
]
