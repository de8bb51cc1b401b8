"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque

from solo_snake.grid import Cell


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name (``"up"``, ...)."""
        try:
            return cls[name.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {name!r}") from exc


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. Movement is split in
    two: :meth:`advance` pushes a new head, then the caller resolves the move
    with :meth:`grow` (keep the tail) or :meth:`shrink` (drop it), since only
    the caller knows where the food is.
    """

    def __init__(
        self,
        start: Cell = (10, 10),
        direction: Direction = Direction.RIGHT,
        length: int = 1,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        x, y = start
        self.body: deque[Cell] = deque(
            (x - dx * i, y - dy * i) for i in range(length)
        )
        self.direction = direction

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def set_direction(self, requested: Direction) -> bool:
        """Change direction, ignoring 180° reversals.

        Returns ``False`` when the request was a reversal and got dropped.
        """
        if requested is self.direction.opposite:
            return False
        self.direction = requested
        return True

    def next_head(self) -> Cell:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return x + dx, y + dy

    def advance(self) -> Cell:
        """Push the next head onto the body and return it."""
        new_head = self.next_head()
        self.body.appendleft(new_head)
        return new_head

    def grow(self) -> None:
        """Resolve the last advance as a growing move.

        The tail was already kept by :meth:`advance`; this exists so the
        caller states its decision explicitly.
        """

    def shrink(self) -> Cell:
        """Resolve the last advance as a plain move; returns the vacated cell."""
        return self.body.pop()

    def occupied(self) -> set[Cell]:
        return set(self.body)

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def collides_with_self(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in list(self.body)[1:])

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
            "length": len(self.body),
        }
