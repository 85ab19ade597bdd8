"""Validated dice board configuration."""

from __future__ import annotations

from dataclasses import dataclass

from dicetable.core.errors import require_flag, require_positive_number

ROWS = 10
COLS = 10
DEFAULT_DIE_SIZE = 100  # px
DEFAULT_HOLD_DURATION = 375  # ms
DEFAULT_WIDTH = COLS * DEFAULT_DIE_SIZE
DEFAULT_HEIGHT = ROWS * DEFAULT_DIE_SIZE
DEFAULT_DISPERSION = ROWS // 2


@dataclass(frozen=True, slots=True)
class BoardConfig:
    """Board settings; construction raises ConfigurationError on bad values."""

    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    die_size: float = DEFAULT_DIE_SIZE
    dispersion: float = DEFAULT_DISPERSION
    hold_duration: float = DEFAULT_HOLD_DURATION
    draggable: bool = True
    holdable: bool = True
    rotating: bool = True

    def __post_init__(self) -> None:
        require_positive_number("width", self.width)
        require_positive_number("height", self.height)
        require_positive_number("die size", self.die_size)
        require_positive_number("dispersion", self.dispersion)
        require_positive_number("hold duration", self.hold_duration)
        require_flag("draggable", self.draggable)
        require_flag("holdable", self.holdable)
        require_flag("rotating", self.rotating)

    @property
    def hold_duration_seconds(self) -> float:
        return self.hold_duration / 1000.0
