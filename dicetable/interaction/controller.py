"""Pointer gesture state machine: click, hold-toggle and drag-and-drop of dice."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from dicetable.core.board import DiceBoard
from dicetable.core.die import Die
from dicetable.core.models import Coordinates
from dicetable.interaction.input_events import (
    POINTER_CANCEL,
    POINTER_DOWN,
    POINTER_LEAVE,
    POINTER_MOVE,
    POINTER_UP,
    PointerEvent,
    TouchEvent,
    TouchTranslator,
)
from dicetable.runtime.scheduler import Scheduler

MIN_DELTA = 3.0  # px

CURSOR_DEFAULT = "default"
CURSOR_GRAB = "grab"
CURSOR_GRABBING = "grabbing"

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    """Pointer gesture states."""

    IDLE = auto()
    AWAITING = auto()
    HOLDING = auto()
    DRAGGING = auto()


@dataclass(slots=True)
class _Gesture:
    die: Die
    origin: Coordinates
    pre_drag: Coordinates | None = None
    hold_task: int | None = None
    snapshot: Any = None


class InteractionController:
    """Turns pointer events on a board into hold toggles and drags.

    A pointer-down on a die starts a gesture. If the pointer stays within
    `MIN_DELTA` until the hold timer fires, the die's held state is toggled for
    the board's current player. Moving further first turns the gesture into a
    drag, which cancels the timer; the drop snaps to the best free cell or puts
    the die back where it was.
    """

    def __init__(self, board: DiceBoard, scheduler: Scheduler) -> None:
        self._board = board
        self._scheduler = scheduler
        self._touch = TouchTranslator()
        self._state = InteractionState.IDLE
        self._gesture: _Gesture | None = None
        self._cursor = CURSOR_DEFAULT

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def cursor(self) -> str:
        """Cursor the host should show: default, grab or grabbing."""
        return self._cursor

    @property
    def active_die(self) -> Die | None:
        return None if self._gesture is None else self._gesture.die

    def handle(self, event: PointerEvent | TouchEvent) -> bool:
        """Route one raw input event; return whether it was consumed.

        Leaving the surface and a cancelled gesture end the gesture like a
        release does, so a pending hold never fires afterwards.
        """
        if isinstance(event, TouchEvent):
            translated = self._touch.translate(event)
            if translated is None:
                return False
            event = translated
        if event.event_type == POINTER_DOWN:
            return self.on_pointer_down(event.x, event.y)
        if event.event_type == POINTER_MOVE:
            return self.on_pointer_move(event.x, event.y)
        if event.event_type in {POINTER_UP, POINTER_LEAVE, POINTER_CANCEL}:
            return self.on_pointer_up(event.x, event.y)
        return False

    def on_pointer_down(self, x: float, y: float) -> bool:
        if self._state is not InteractionState.IDLE:
            return False
        config = self._board.config
        if not (config.holdable or config.draggable):
            return False
        point = self._board.to_surface(x, y)
        die = self._board.die_at(point)
        if die is None:
            return False
        self._gesture = _Gesture(die=die, origin=point)
        self._set_state(InteractionState.AWAITING)
        if config.holdable:
            self._start_hold_timer(self._gesture, config.hold_duration_seconds)
        return True

    def on_pointer_move(self, x: float, y: float) -> bool:
        point = self._board.to_surface(x, y)
        handled = self._move(point)
        self._update_cursor(point)
        return handled

    def on_pointer_up(self, x: float, y: float) -> bool:
        gesture = self._gesture
        if gesture is None:
            return False
        point = self._board.to_surface(x, y)
        if self._state is InteractionState.DRAGGING and gesture.pre_drag is not None:
            drop = self._drag_position(gesture.origin, gesture.pre_drag, point)
            snapped = self._board.snap_to(drop, gesture.die)
            gesture.die.coordinates = snapped if snapped is not None else gesture.pre_drag
            logger.debug("drag_dropped drop=%s snapped=%s", drop, snapped)
            self._end_gesture()
            self._board.render()
        else:
            self._end_gesture()
        self._update_cursor(point)
        return True

    def close(self) -> None:
        """Abort any gesture in progress; a pending hold never fires afterwards."""
        dragging = self._state is InteractionState.DRAGGING
        self._end_gesture()
        if dragging:
            self._board.render()

    def _move(self, point: Coordinates) -> bool:
        gesture = self._gesture
        if gesture is None:
            return False
        if self._state is InteractionState.AWAITING:
            if not self._board.config.draggable:
                return False
            dx = abs(gesture.origin.x - point.x)
            dy = abs(gesture.origin.y - point.y)
            if dx <= MIN_DELTA and dy <= MIN_DELTA:
                return False
            if not self._start_drag(gesture):
                return False
        elif self._state is not InteractionState.DRAGGING:
            return False
        if gesture.pre_drag is None:
            return False
        position = self._drag_position(gesture.origin, gesture.pre_drag, point)
        renderer = self._board.renderer
        renderer.restore(gesture.snapshot)
        renderer.draw_die(gesture.die, self._board.grid.cell_size, at=position)
        return True

    def _start_drag(self, gesture: _Gesture) -> bool:
        self._cancel_hold_timer(gesture)
        if gesture.die.coordinates is None:
            self._end_gesture()
            return False
        gesture.pre_drag = gesture.die.coordinates
        self._set_state(InteractionState.DRAGGING)
        self._board.render([die for die in self._board.dice if die is not gesture.die])
        gesture.snapshot = self._board.renderer.snapshot()
        return True

    @staticmethod
    def _drag_position(origin: Coordinates, start: Coordinates, point: Coordinates) -> Coordinates:
        """Return `start` moved by the pointer travel since `origin`."""
        return start.offset(point.x - origin.x, point.y - origin.y)

    def _start_hold_timer(self, gesture: _Gesture, delay_seconds: float) -> None:
        self._cancel_hold_timer(gesture)
        gesture.hold_task = self._scheduler.call_later(delay_seconds, self._on_hold_timeout)

    def _cancel_hold_timer(self, gesture: _Gesture) -> None:
        if gesture.hold_task is not None:
            self._scheduler.cancel(gesture.hold_task)
            gesture.hold_task = None

    def _on_hold_timeout(self) -> None:
        gesture = self._gesture
        if gesture is None or self._state is not InteractionState.AWAITING:
            return
        gesture.hold_task = None
        self._set_state(InteractionState.HOLDING)
        player = self._board.current_player
        die = gesture.die
        if die.is_held():
            changed = die.release_it(player)
        else:
            changed = die.hold_it(player)
        logger.debug("hold_toggled player=%s held=%s changed=%s", player, die.is_held(), changed)
        self._end_gesture()
        self._board.render()

    def _end_gesture(self) -> None:
        if self._gesture is not None:
            self._cancel_hold_timer(self._gesture)
        self._gesture = None
        self._set_state(InteractionState.IDLE)

    def _set_state(self, state: InteractionState) -> None:
        if state is not self._state:
            logger.debug("interaction_state from=%s to=%s", self._state.name, state.name)
        self._state = state

    def _update_cursor(self, point: Coordinates) -> None:
        config = self._board.config
        if self._state is InteractionState.DRAGGING:
            self._cursor = CURSOR_GRABBING
        elif (config.draggable or config.holdable) and self._board.die_at(point) is not None:
            self._cursor = CURSOR_GRAB
        else:
            self._cursor = CURSOR_DEFAULT
