"""Randomized, collision-free placement of dice on a grid."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from dicetable.core.errors import ConfigurationError, require_flag, require_positive_number
from dicetable.core.grid import GridModel
from dicetable.core.models import FULL_CIRCLE_IN_DEGREES, Cell, Coordinates, Token
from dicetable.core.rings import RingEnumerator, random_center
from dicetable.core.snap import SnapResolver, occupancy_of

TToken = TypeVar("TToken", bound=Token)

logger = logging.getLogger(__name__)


class PlacementEngine:
    """Lay out dice around the grid center.

    Held dice that already have coordinates keep them. Every other die gets a
    random cell out of the cells closest to the center; `dispersion` controls
    how many cells per die are offered, so 1 packs the dice tightly and larger
    values spread them out.
    """

    def __init__(
        self,
        grid: GridModel,
        *,
        dispersion: float = 1,
        rotate: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self._grid = grid
        self._dispersion = require_positive_number("dispersion", dispersion)
        self._rotate = require_flag("rotate", rotate)
        self._rng = rng or random.Random()
        self._snap = SnapResolver(grid)
        self._placed: tuple[Token, ...] = ()

    @property
    def grid(self) -> GridModel:
        return self._grid

    @property
    def dispersion(self) -> float:
        return self._dispersion

    @dispersion.setter
    def dispersion(self, value: float) -> None:
        self._dispersion = require_positive_number("dispersion", value)

    @property
    def rotate(self) -> bool:
        return self._rotate

    @rotate.setter
    def rotate(self, value: bool) -> None:
        self._rotate = require_flag("rotate", value)

    @property
    def placed(self) -> tuple[Token, ...]:
        """Dice of the most recent layout."""
        return self._placed

    def layout(self, dice: Sequence[TToken]) -> list[TToken]:
        """Assign coordinates and rotation to every die that is not held.

        Raises ConfigurationError when there are more dice than cells. When the
        ring search runs out of cells the remaining dice lose their coordinates
        instead; check ``has_coordinates()`` on the result.
        """
        capacity = self._grid.capacity
        if len(dice) > capacity:
            raise ConfigurationError(
                f"The number of dice that can be layout is {capacity}, got {len(dice)} dice instead."
            )

        fixed: list[TToken] = []
        to_place: list[TToken] = []
        for die in dice:
            if die.has_coordinates() and die.is_held():
                fixed.append(die)
            else:
                to_place.append(die)

        max_cells = min(len(dice) * self._dispersion, capacity)
        available = self.available_cells(max_cells, fixed)

        unplaced = 0
        for die in to_place:
            if not available:
                die.coordinates = None
                die.rotation = None
                unplaced += 1
                continue
            cell = available.pop(self._rng.randrange(len(available)))
            die.coordinates = self._grid.to_coordinates(cell)
            die.rotation = self._rng.randrange(FULL_CIRCLE_IN_DEGREES) if self._rotate else None

        if unplaced:
            logger.warning(
                "layout_partial placed=%d unplaced=%d capacity=%d",
                len(to_place) - unplaced,
                unplaced,
                capacity,
            )
        logger.debug("layout dice=%d held=%d max_cells=%s", len(dice), len(fixed), max_cells)

        result = fixed + to_place
        self._placed = tuple(result)
        return result

    def available_cells(self, max_cells: float, fixed: Sequence[Token]) -> list[Cell]:
        """Collect free cells ring by ring until `max_cells` are found."""
        taken = np.zeros((self._grid.rows, self._grid.cols), dtype=bool)
        for die in fixed:
            if die.coordinates is None:
                continue
            cell = self._grid.cell_from_coordinates(die.coordinates)
            if self._grid.contains(cell):
                taken[cell.row, cell.col] = True

        rings = RingEnumerator(self._grid, random_center(self._grid, self._rng))
        available: list[Cell] = []
        for _, cells in rings.iter_levels():
            if len(available) >= max_cells:
                break
            available.extend(cell for cell in cells if not taken[cell.row, cell.col])
        return available

    def die_at(self, point: Coordinates) -> Token | None:
        """Return the laid out die whose footprint contains `point`."""
        size = self._grid.cell_size
        for die in self._placed:
            coordinates = die.coordinates
            if coordinates is None:
                continue
            if coordinates.x <= point.x <= coordinates.x + size and coordinates.y <= point.y <= coordinates.y + size:
                return die
        return None

    def snap_to(self, point: Coordinates, die: Token | None = None) -> Coordinates | None:
        """Snap a drop point against the cells taken by the current layout."""
        return self._snap.snap_to(point, die, occupancy_of(self._grid, self._placed))
