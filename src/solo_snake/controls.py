"""Keyboard bindings."""

from __future__ import annotations

from solo_snake.snake import Direction

PAUSE_KEY = " "

KEY_BINDINGS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "w": Direction.UP,
    "W": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "s": Direction.DOWN,
    "S": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "a": Direction.LEFT,
    "A": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "d": Direction.RIGHT,
    "D": Direction.RIGHT,
}


def key_to_direction(key: str) -> Direction | None:
    """Map a key name or direction name to a direction, if bound."""
    direction = KEY_BINDINGS.get(key)
    if direction is not None:
        return direction
    try:
        return Direction.from_name(key)
    except ValueError:
        return None
