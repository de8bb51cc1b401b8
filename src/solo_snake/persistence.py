"""High-score persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """Where the single persisted high score lives."""

    def load(self) -> int: ...
    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, initial: int = 0) -> None:
        self.value = initial
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = score
        self.saves += 1


class JsonHighScoreStore:
    """Stores the high score as ``{"high_score": n}`` in a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> int:
        """Return the stored score, or 0 when absent or unreadable."""
        if not self.path.exists():
            return 0
        try:
            raw = json.loads(self.path.read_text())
            score = int(raw.get("high_score", 0))
        except (OSError, ValueError, TypeError, AttributeError):
            logger.warning(
                "Could not read high score from %s; starting at 0.", self.path,
            )
            return 0
        return max(score, 0)

    def save(self, score: int) -> None:
        """Write the score to the JSON file via a sibling temp file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps({"high_score": score}))
        tmp.replace(self.path)
        logger.info("High score %d saved to %s", score, self.path)
