from __future__ import annotations

import random
from collections.abc import Callable, Sequence

import pytest

from dicetable.core.board import DiceBoard
from dicetable.core.config import BoardConfig
from dicetable.core.die import Die
from dicetable.core.models import Cell
from dicetable.runtime.scheduler import Scheduler

BoardFactory = Callable[..., tuple[DiceBoard, list[Die]]]


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def board_factory() -> BoardFactory:
    """Build a 5x5 board (100px cells) with one die per given cell."""

    def _make(cells: Sequence[tuple[int, int]] = ((1, 1),), **overrides: object) -> tuple[DiceBoard, list[Die]]:
        settings: dict[str, object] = {"width": 500, "height": 500, "die_size": 100, "dispersion": 1}
        settings.update(overrides)
        board = DiceBoard(BoardConfig(**settings), rng=random.Random(1337))
        dice = [board.add_die(Die(pips=index % 6 + 1)) for index in range(len(cells))]
        for die, (row, col) in zip(dice, cells):
            die.coordinates = board.grid.to_coordinates(Cell(row, col))
        board.render()
        return board, dice

    return _make
