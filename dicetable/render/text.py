"""Plain-text rendering of a board as rows of unicode die faces."""

from __future__ import annotations

from dicetable.core.board import DiceBoard

EMPTY_CELL = "·"
HELD_MARK = "*"


def render_text(board: DiceBoard) -> str:
    """Return one line per grid row; held dice are followed by ``*``."""
    grid = board.grid
    cells = [[EMPTY_CELL + " " for _ in range(grid.cols)] for _ in range(grid.rows)]
    for die in board.dice:
        if die.coordinates is None:
            continue
        cell = grid.cell_from_coordinates(die.coordinates)
        if grid.contains(cell):
            cells[cell.row][cell.col] = die.to_unicode() + (HELD_MARK if die.is_held() else " ")
    return "\n".join("".join(row).rstrip() for row in cells)
