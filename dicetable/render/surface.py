"""Surface rendering contract and a numpy raster implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from dicetable.core.models import Coordinates

if TYPE_CHECKING:
    from dicetable.core.die import Die

HELD_MARKER = 10


class SurfaceRenderer(Protocol):
    """Painting capabilities a dice board needs from its surface."""

    def clear(self) -> None:
        """Erase the whole surface."""

    def resize(self, width: float, height: float) -> None:
        """Change surface size; content is erased."""

    def draw_die(self, die: Die, size: float, at: Coordinates | None = None) -> None:
        """Paint a die at `at`, or at its own coordinates."""

    def snapshot(self) -> Any:
        """Return an opaque frozen copy of the current surface."""

    def restore(self, snapshot: Any) -> None:
        """Put a previously taken snapshot back on the surface."""


class RasterSurface:
    """Integer raster where each die paints its pips over its footprint.

    Held dice paint ``pips + HELD_MARKER`` so tests and tools can tell them
    apart. Rotation is not rasterized; footprints are axis-aligned squares.
    """

    def __init__(self, width: float, height: float) -> None:
        self._pixels = np.zeros((int(height), int(width)), dtype=np.int16)

    @property
    def pixels(self) -> np.ndarray:
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    @property
    def shape(self) -> tuple[int, int]:
        return self._pixels.shape

    def clear(self) -> None:
        self._pixels.fill(0)

    def resize(self, width: float, height: float) -> None:
        self._pixels = np.zeros((int(height), int(width)), dtype=np.int16)

    def draw_die(self, die: Die, size: float, at: Coordinates | None = None) -> None:
        position = at if at is not None else die.coordinates
        if position is None:
            return
        height, width = self._pixels.shape
        x0 = max(0, int(position.x))
        y0 = max(0, int(position.y))
        x1 = min(width, int(position.x + size))
        y1 = min(height, int(position.y + size))
        if x0 >= x1 or y0 >= y1:
            return
        value = die.pips + HELD_MARKER if die.is_held() else die.pips
        self._pixels[y0:y1, x0:x1] = value

    def snapshot(self) -> np.ndarray:
        return self._pixels.copy()

    def restore(self, snapshot: np.ndarray) -> None:
        if snapshot.shape != self._pixels.shape:
            raise ValueError(f"snapshot shape {snapshot.shape} does not match surface {self._pixels.shape}")
        np.copyto(self._pixels, snapshot)

    def value_at(self, x: float, y: float) -> int:
        return int(self._pixels[int(y), int(x)])
