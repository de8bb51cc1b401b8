"""Game tunables."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from solo_snake.snake import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board, scoring and speed settings for one game.

    Supports JSON serialization so a tuned setup can be shared.
    """

    # Board
    grid_size: int = 20
    start_x: int = 10
    start_y: int = 10
    initial_direction: str = "right"
    initial_length: int = 1

    # Scoring
    score_per_food: int = 10

    # Speed, in milliseconds per tick
    initial_tick_ms: int = 150
    tick_step_ms: int = 2
    min_tick_ms: int = 80

    # Persistence
    high_score_path: str = "snake_high_score.json"

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.score_per_food < 0:
            raise ValueError("score_per_food must be non-negative.")
        if self.min_tick_ms <= 0:
            raise ValueError("min_tick_ms must be positive.")
        if self.tick_step_ms < 0:
            raise ValueError("tick_step_ms must be non-negative.")
        if self.initial_tick_ms < self.min_tick_ms:
            raise ValueError("initial_tick_ms must not be below min_tick_ms.")

        direction = Direction.from_name(self.initial_direction)
        dx, dy = direction.value
        for i in range(self.initial_length):
            x = self.start_x - dx * i
            y = self.start_y - dy * i
            if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
                raise ValueError(
                    "initial snake does not fit the grid; move the start "
                    "cell or reduce initial_length."
                )

    @property
    def start(self) -> tuple[int, int]:
        return self.start_x, self.start_y

    @property
    def direction(self) -> Direction:
        return Direction.from_name(self.initial_direction)

    def next_tick_ms(self, current: int) -> int:
        """Return the interval after one food is eaten, floored."""
        return max(self.min_tick_ms, current - self.tick_step_ms)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
