"""Game-state machine driving a single snake game one tick at a time."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from solo_snake.config import GameConfig
from solo_snake.controls import PAUSE_KEY, key_to_direction
from solo_snake.events import EventKind, GameEvent
from solo_snake.food import FoodSpawner
from solo_snake.grid import Cell, Grid
from solo_snake.persistence import HighScoreStore, MemoryHighScoreStore
from solo_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent], None]


class GameState(str, enum.Enum):
    """Lifecycle states of the game."""

    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


class GameOverReason(str, enum.Enum):
    WALL = "wall"
    SELF = "self"
    BOARD_FULL = "board_full"


@dataclass(frozen=True)
class TickResult:
    """Outcome of a single :meth:`GameStateMachine.tick`."""

    ticked: bool
    ate: bool = False
    game_over: bool = False
    reason: GameOverReason | None = None


_IDLE = TickResult(ticked=False)


class GameStateMachine:
    """Owns the grid, snake, food, score and speed of one game.

    The machine mediates between the snake and the food: the snake only
    knows how to move, the machine decides whether a move grows it. Every
    observable change is published as a :class:`GameEvent` to subscribed
    listeners (renderer, audio, score display); a failing listener is
    logged and never affects game state.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = rng if rng is not None else np.random.default_rng(
            self.config.seed,
        )
        self.grid = Grid(self.config.grid_size)
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)
        self.high_score = self.store.load()
        self.state = GameState.READY
        self.last_reason: GameOverReason | None = None
        self.ticks = 0
        self._listeners: list[Listener] = []
        self._reset_board()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, kind: EventKind, **data) -> None:
        event = GameEvent(kind, data)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.warning(
                    "Listener %r failed on %s event.",
                    listener, kind.value, exc_info=True,
                )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Enter PLAYING from READY, or restart from GAME_OVER."""
        if self.state == GameState.GAME_OVER:
            self._reset_board()
            logger.info("Game restarted.")
        elif self.state == GameState.READY:
            self.snake.direction = self.config.direction
            self._pending_direction = None
            logger.info("Game started.")
        else:
            return False
        self._set_state(GameState.PLAYING)
        self._emit(EventKind.SCORE, score=self.score, high_score=self.high_score)
        self._emit(EventKind.RENDER, **self.snapshot())
        return True

    def restart(self) -> bool:
        """Reset the board and play from scratch, from any state."""
        if self.state in (GameState.PLAYING, GameState.PAUSED):
            logger.info("Game abandoned with score %d.", self.score)
            self.state = GameState.GAME_OVER
        return self.start()

    def pause(self) -> bool:
        if self.state != GameState.PLAYING:
            return False
        self._set_state(GameState.PAUSED)
        self._emit(EventKind.RENDER, **self.snapshot())
        return True

    def resume(self) -> bool:
        if self.state != GameState.PAUSED:
            return False
        self._set_state(GameState.PLAYING)
        self._emit(EventKind.RENDER, **self.snapshot())
        return True

    def toggle_pause(self) -> bool:
        """Pause while playing, resume while paused."""
        if self.state == GameState.PLAYING:
            return self.pause()
        return self.resume()

    def _set_state(self, state: GameState) -> None:
        self.state = state
        self._emit(EventKind.STATE, state=state.value)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    @property
    def pending_direction(self) -> Direction | None:
        return self._pending_direction

    def handle_direction_input(self, key: str | Direction) -> bool:
        """Buffer a direction request for the next tick.

        Only honoured while PLAYING. The latest request wins; the reversal
        rule is applied by the snake when the tick consumes it.
        """
        if self.state != GameState.PLAYING:
            return False
        direction = key if isinstance(key, Direction) else key_to_direction(key)
        if direction is None:
            return False
        self._pending_direction = direction
        return True

    def handle_key(self, key: str) -> bool:
        """Keyboard entry point: space toggles pause, others steer."""
        if self.state == GameState.GAME_OVER:
            return False
        if key == PAUSE_KEY:
            return self.toggle_pause()
        return self.handle_direction_input(key)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> TickResult:
        """Advance the game by one cell."""
        if self.state != GameState.PLAYING:
            return _IDLE

        if self._pending_direction is not None:
            self.snake.set_direction(self._pending_direction)
            self._pending_direction = None

        if self.snake.direction.value == (0, 0):
            return _IDLE

        self.ticks += 1
        if not self.grid.in_bounds(self.snake.next_head()):
            return self._game_over(GameOverReason.WALL)

        new_head = self.snake.advance()
        ate = new_head == self.food
        if ate:
            self.score += self.config.score_per_food
            food = self.food_spawner.spawn(self.snake.body)
            self.snake.grow()
            self._emit(EventKind.EAT, cell=list(new_head))
            self._speed_up()
            self._emit(
                EventKind.SCORE, score=self.score, high_score=self.high_score,
            )
            if food is None:
                return self._game_over(GameOverReason.BOARD_FULL, ate=True)
            self.food = food
        else:
            self.snake.shrink()
            self._emit(EventKind.MOVE)

        if self.snake.collides_with_self():
            return self._game_over(GameOverReason.SELF, ate=ate)

        self._emit(EventKind.RENDER, **self.snapshot())
        return TickResult(ticked=True, ate=ate)

    def _speed_up(self) -> None:
        interval = self.config.next_tick_ms(self.tick_interval_ms)
        if interval != self.tick_interval_ms:
            self.tick_interval_ms = interval
            self._emit(EventKind.SPEED, tick_interval_ms=interval)

    def _game_over(
        self, reason: GameOverReason, ate: bool = False,
    ) -> TickResult:
        self.last_reason = reason
        if self.score > self.high_score:
            self.high_score = self.score
            logger.info("New high score: %d.", self.high_score)
            try:
                self.store.save(self.high_score)
            except OSError:
                logger.warning("Failed to persist high score.", exc_info=True)
        logger.info(
            "Game over (%s) after %d ticks with score %d.",
            reason.value, self.ticks, self.score,
        )
        self._set_state(GameState.GAME_OVER)
        self._emit(
            EventKind.GAME_OVER, score=self.score, reason=reason.value,
        )
        self._emit(EventKind.SCORE, score=self.score, high_score=self.high_score)
        self._emit(EventKind.RENDER, **self.snapshot())
        return TickResult(ticked=True, ate=ate, game_over=True, reason=reason)

    def _reset_board(self) -> None:
        self.snake = Snake(
            self.config.start,
            self.config.direction,
            length=self.config.initial_length,
        )
        food = self.food_spawner.spawn(self.snake.body)
        if food is None:
            raise ValueError("Initial snake leaves no room for food.")
        self.food: Cell = food
        self.score = 0
        self.tick_interval_ms = self.config.initial_tick_ms
        self.last_reason = None
        self.ticks = 0
        self._pending_direction: Direction | None = None

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "state": self.state.value,
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "food": list(self.food),
            "score": self.score,
            "high_score": self.high_score,
            "tick_interval_ms": self.tick_interval_ms,
            "ticks": self.ticks,
            "reason": self.last_reason.value if self.last_reason else None,
        }
