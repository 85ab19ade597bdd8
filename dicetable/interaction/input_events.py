"""Pointer and touch input events, and touch-to-pointer normalization."""

from __future__ import annotations

from dataclasses import dataclass

POINTER_DOWN = "pointer_down"
POINTER_MOVE = "pointer_move"
POINTER_UP = "pointer_up"
POINTER_LEAVE = "pointer_leave"
POINTER_CANCEL = "pointer_cancel"

TOUCH_START = "touch_start"
TOUCH_MOVE = "touch_move"
TOUCH_END = "touch_end"
TOUCH_CANCEL = "touch_cancel"

_TOUCH_TO_POINTER: dict[str, str] = {
    TOUCH_START: POINTER_DOWN,
    TOUCH_MOVE: POINTER_MOVE,
    TOUCH_END: POINTER_UP,
    TOUCH_CANCEL: POINTER_CANCEL,
}
_RELEASE_TYPES = frozenset({TOUCH_END, TOUCH_CANCEL})


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """Raw pointer event in window coordinates."""

    event_type: str
    x: float
    y: float
    button: int = 1


@dataclass(frozen=True, slots=True)
class TouchPoint:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class TouchEvent:
    """Raw touch event; `touches` is empty for touch_end and touch_cancel."""

    event_type: str
    touches: tuple[TouchPoint, ...] = ()


class TouchTranslator:
    """Map touch events onto pointer events.

    The first touch point supplies coordinates. A touch_end or touch_cancel
    carries no touches, so it reuses the last coordinates seen. Unknown touch
    types, and starts or moves without any touch point, translate to ``None``.
    """

    def __init__(self) -> None:
        self._last_x = 0.0
        self._last_y = 0.0

    def translate(self, event: TouchEvent) -> PointerEvent | None:
        pointer_type = _TOUCH_TO_POINTER.get(event.event_type)
        if pointer_type is None:
            return None
        if event.touches:
            first = event.touches[0]
            self._last_x = float(first.x)
            self._last_y = float(first.y)
        elif event.event_type not in _RELEASE_TYPES:
            return None
        return PointerEvent(event_type=pointer_type, x=self._last_x, y=self._last_y)
