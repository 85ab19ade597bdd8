"""Grid geometry: surface size and cell size to rows, columns and conversions."""

from __future__ import annotations

from dicetable.core.errors import require_positive_number
from dicetable.core.models import Cell, Coordinates


class GridModel:
    """Square-cell grid laid over a rectangular surface.

    Columns and rows only count whole cells: a 550px wide surface with 100px
    cells has 5 columns. Conversions outside the grid return ``None`` rather
    than clamping.
    """

    def __init__(self, width: float, height: float, cell_size: float) -> None:
        self._width = require_positive_number("width", width)
        self._height = require_positive_number("height", height)
        self._cell_size = require_positive_number("cell size", cell_size)
        self._cols = 0
        self._rows = 0
        self._recompute()

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self.configure(width=value)

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self.configure(height=value)

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @cell_size.setter
    def cell_size(self, value: float) -> None:
        self.configure(cell_size=value)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def capacity(self) -> int:
        """Number of cells, i.e. the maximum number of dice on this grid."""
        return self._rows * self._cols

    def configure(
        self,
        *,
        width: float | None = None,
        height: float | None = None,
        cell_size: float | None = None,
    ) -> None:
        """Apply new dimensions; nothing changes unless every value is valid."""
        new_width = self._width if width is None else require_positive_number("width", width)
        new_height = self._height if height is None else require_positive_number("height", height)
        new_cell_size = (
            self._cell_size if cell_size is None else require_positive_number("cell size", cell_size)
        )
        self._width = new_width
        self._height = new_height
        self._cell_size = new_cell_size
        self._recompute()

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell.row < self._rows and 0 <= cell.col < self._cols

    def to_index(self, cell: Cell) -> int | None:
        """Return the linear cell number, or ``None`` for cells off the grid."""
        if not self.contains(cell):
            return None
        return cell.row * self._cols + cell.col

    def cell_from_index(self, index: int) -> Cell | None:
        if not 0 <= index < self.capacity:
            return None
        return Cell(row=index // self._cols, col=index % self._cols)

    def to_coordinates(self, cell: Cell) -> Coordinates:
        """Return the top-left pixel of a cell."""
        return Coordinates(x=cell.col * self._cell_size, y=cell.row * self._cell_size)

    def cell_from_coordinates(self, point: Coordinates) -> Cell:
        """Return the cell containing a point, truncating towards zero."""
        return Cell(row=int(point.y / self._cell_size), col=int(point.x / self._cell_size))

    def coordinates_to_index(self, point: Coordinates) -> int | None:
        return self.to_index(self.cell_from_coordinates(point))

    def _recompute(self) -> None:
        self._cols = int(self._width // self._cell_size)
        self._rows = int(self._height // self._cell_size)
