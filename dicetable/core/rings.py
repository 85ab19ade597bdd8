"""Chebyshev rings of cells around the layout center."""

from __future__ import annotations

import math
import random
from collections.abc import Iterator

from dicetable.core.grid import GridModel
from dicetable.core.models import Cell


def round_half_random(value: float, rng: random.Random) -> int:
    """Floor or ceil `value` on a coin flip; integers are returned unchanged."""
    if rng.random() >= 0.5:
        return math.floor(value)
    return math.ceil(value)


def random_center(grid: GridModel, rng: random.Random) -> Cell:
    """Return the layout center cell.

    On odd dimensions the half falls between two cells and either neighbour
    may be picked, so repeated layouts do not always favour the top-left.
    """
    row = round_half_random(grid.rows / 2, rng) - 1
    col = round_half_random(grid.cols / 2, rng) - 1
    return Cell(row=row, col=col)


class RingEnumerator:
    """Enumerates the in-bounds cells at a fixed distance from a center cell."""

    def __init__(self, grid: GridModel, center: Cell) -> None:
        self._grid = grid
        self._center = center

    @property
    def center(self) -> Cell:
        return self._center

    @property
    def max_level(self) -> int:
        return min(self._grid.rows, self._grid.cols)

    def level_cells(self, level: int) -> list[Cell]:
        """Return the cells on the border of the (2L+1) square around the center."""
        if level < 0:
            raise ValueError("level must be >= 0")
        center = self._center
        if level == 0:
            candidates = [center]
        else:
            candidates = []
            for row in range(center.row - level, center.row + level + 1):
                candidates.append(Cell(row=row, col=center.col - level))
                candidates.append(Cell(row=row, col=center.col + level))
            for col in range(center.col - level + 1, center.col + level):
                candidates.append(Cell(row=center.row - level, col=col))
                candidates.append(Cell(row=center.row + level, col=col))
        return [cell for cell in candidates if self._grid.contains(cell)]

    def iter_levels(self) -> Iterator[tuple[int, list[Cell]]]:
        """Yield ``(level, cells)`` from the center outward, up to `max_level`."""
        for level in range(self.max_level + 1):
            yield level, self.level_cells(level)
