"""Drop-point snapping to the best covered free cell."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from dicetable.core.grid import GridModel
from dicetable.core.models import Cell, Coordinates, Token

Occupancy = Mapping[Cell, Sequence[Token]]


@dataclass(frozen=True, slots=True)
class SnapCandidate:
    """One of the four cells around a drop point with its covered area."""

    cell: Cell
    coverage: float


def occupancy_of(grid: GridModel, dice: Iterable[Token]) -> dict[Cell, list[Token]]:
    """Group dice with coordinates by the grid cell they sit in."""
    occupied: dict[Cell, list[Token]] = {}
    for die in dice:
        if die.coordinates is None:
            continue
        cell = grid.cell_from_coordinates(die.coordinates)
        if grid.contains(cell):
            occupied.setdefault(cell, []).append(die)
    return occupied


class SnapResolver:
    """Pick the grid cell a dropped die should land in."""

    def __init__(self, grid: GridModel) -> None:
        self._grid = grid

    def candidates(self, point: Coordinates) -> list[SnapCandidate]:
        """Return corner, right, below and diagonal cells with their coverage.

        Coverage is the overlap between a die footprint whose top-left corner is
        at `point` and the candidate cell.
        """
        size = self._grid.cell_size
        corner = Cell(row=math.floor(point.y / size), col=math.floor(point.x / size))
        corner_xy = self._grid.to_coordinates(corner)
        width_in = corner_xy.x + size - point.x
        width_out = size - width_in
        height_in = corner_xy.y + size - point.y
        height_out = size - height_in
        return [
            SnapCandidate(corner, width_in * height_in),
            SnapCandidate(Cell(corner.row, corner.col + 1), width_out * height_in),
            SnapCandidate(Cell(corner.row + 1, corner.col), width_in * height_out),
            SnapCandidate(Cell(corner.row + 1, corner.col + 1), width_out * height_out),
        ]

    def snap_to(
        self,
        point: Coordinates,
        dragged: Token | None,
        occupied: Occupancy,
    ) -> Coordinates | None:
        """Return the top-left of the best free cell near `point`, or ``None``.

        A cell qualifies when it is on the grid and is either empty or only
        holds `dragged`. On equal coverage the earlier candidate wins.
        """
        best: SnapCandidate | None = None
        for candidate in self.candidates(point):
            if not self._grid.contains(candidate.cell):
                continue
            occupants = occupied.get(candidate.cell, ())
            if any(occupant is not dragged for occupant in occupants):
                continue
            if best is None or candidate.coverage > best.coverage:
                best = candidate
        if best is None:
            return None
        return self._grid.to_coordinates(best.cell)
