"""Food placement."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from solo_snake.grid import Cell, Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Picks a uniformly random unoccupied cell for the next food.

    Uses a NumPy RNG so a seeded game places food reproducibly.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self, occupied: Iterable[Cell]) -> Cell | None:
        """Return a free cell, or ``None`` when *occupied* fills the grid."""
        free = self.grid.free_cells(occupied)
        if not free:
            logger.warning("No free cells left for food; board is full.")
            return None
        return free[int(self.rng.integers(len(free)))]
