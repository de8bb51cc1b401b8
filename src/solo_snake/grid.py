"""Grid geometry for the snake game."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

Cell = tuple[int, int]


class Grid:
    """Fixed N×N coordinate space.

    Coordinates are ``(x, y)`` with ``x`` growing to the right and ``y``
    growing downwards, matching the screen the renderer draws on.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a cell lies within the grid."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def occupancy(self, occupied: Iterable[Cell]) -> np.ndarray:
        """Return a boolean ``(y, x)`` mask with occupied cells set."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for x, y in occupied:
            if self.in_bounds((x, y)):
                mask[y, x] = True
        return mask

    def free_cells(self, occupied: Iterable[Cell]) -> list[Cell]:
        """Return every in-bounds cell not covered by *occupied*."""
        ys, xs = np.where(~self.occupancy(occupied))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid geometry to a dictionary."""
        return {"size": self.size}
