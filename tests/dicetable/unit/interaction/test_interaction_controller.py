from __future__ import annotations

import pytest

from dicetable.core.events import DieHeld
from dicetable.core.models import Coordinates, Player
from dicetable.interaction.controller import (
    CURSOR_DEFAULT,
    CURSOR_GRAB,
    CURSOR_GRABBING,
    InteractionController,
    InteractionState,
)
from dicetable.interaction.input_events import (
    POINTER_CANCEL,
    POINTER_DOWN,
    POINTER_LEAVE,
    POINTER_MOVE,
    POINTER_UP,
    TOUCH_CANCEL,
    TOUCH_END,
    TOUCH_MOVE,
    TOUCH_START,
    PointerEvent,
    TouchEvent,
    TouchPoint,
)
from dicetable.render.surface import RasterSurface
from dicetable.runtime.scheduler import Scheduler

HOLD_SECONDS = 0.375


def test_click_without_waiting_changes_nothing(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    assert controller.on_pointer_down(150, 150) is True
    assert controller.state is InteractionState.AWAITING
    assert controller.active_die is die
    assert controller.on_pointer_up(151, 151) is True
    scheduler.advance(1.0)

    assert controller.state is InteractionState.IDLE
    assert not die.is_held()
    assert die.coordinates == Coordinates(100, 100)


def test_holding_still_toggles_hold_once(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    held_events: list[DieHeld] = []
    board.bus.subscribe(DieHeld, held_events.append)
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    scheduler.advance(0.3)
    assert not die.is_held()
    scheduler.advance(0.1)
    assert die.held_by == board.current_player
    assert controller.state is InteractionState.IDLE

    scheduler.advance(5.0)
    assert controller.on_pointer_up(150, 150) is False
    assert die.is_held()
    assert len(held_events) == 1


def test_hold_releases_a_held_die(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    die.hold_it(board.current_player)
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    scheduler.advance(HOLD_SECONDS)

    assert not die.is_held()


def test_hold_uses_the_current_player(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    alice = Player("Alice", "green")
    board.current_player = alice
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    scheduler.advance(HOLD_SECONDS)

    assert die.held_by == alice
    renderer = board.renderer
    assert isinstance(renderer, RasterSurface)
    assert renderer.value_at(150, 150) == die.pips + 10


def test_small_moves_do_not_start_a_drag(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    assert controller.on_pointer_move(153, 147) is False
    assert controller.state is InteractionState.AWAITING
    scheduler.advance(HOLD_SECONDS)

    assert die.is_held()
    assert die.coordinates == Coordinates(100, 100)


def test_drag_cancels_hold_and_snaps_on_drop(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    assert controller.on_pointer_move(160, 150) is True
    assert controller.state is InteractionState.DRAGGING
    assert scheduler.queued_task_count == 0
    scheduler.advance(1.0)
    assert not die.is_held()

    controller.on_pointer_up(260, 150)

    assert controller.state is InteractionState.IDLE
    assert die.coordinates == Coordinates(200, 100)


def test_drag_redraws_only_the_dragged_die(board_factory, scheduler: Scheduler) -> None:
    board, (dragged, other) = board_factory([(1, 1), (3, 3)])
    renderer = board.renderer
    assert isinstance(renderer, RasterSurface)
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    controller.on_pointer_move(260, 150)

    assert renderer.value_at(215, 105) == dragged.pips
    assert renderer.value_at(105, 105) == 0
    assert renderer.value_at(350, 350) == other.pips
    assert dragged.coordinates == Coordinates(100, 100)

    controller.on_pointer_move(170, 150)
    assert renderer.value_at(250, 105) == 0
    assert renderer.value_at(125, 105) == dragged.pips


def test_drop_avoids_cells_taken_by_other_dice(board_factory, scheduler: Scheduler) -> None:
    board, (dragged, other) = board_factory([(1, 1), (1, 2)])
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    controller.on_pointer_move(240, 130)
    controller.on_pointer_up(240, 130)

    assert dragged.coordinates == Coordinates(200, 0)
    assert other.coordinates == Coordinates(200, 100)


def test_drop_off_the_board_restores_the_die(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory([(0, 0)])
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(50, 50)
    controller.on_pointer_move(-100, -100)
    controller.on_pointer_up(-400, -400)

    assert die.coordinates == Coordinates(0, 0)
    renderer = board.renderer
    assert isinstance(renderer, RasterSurface)
    assert renderer.value_at(50, 50) == die.pips


def test_pointer_leave_drops_like_pointer_up(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.handle(PointerEvent(POINTER_DOWN, 150, 150))
    controller.handle(PointerEvent(POINTER_MOVE, 260, 150))
    assert controller.handle(PointerEvent(POINTER_LEAVE, 260, 150)) is True

    assert controller.state is InteractionState.IDLE
    assert die.coordinates == Coordinates(200, 100)


def test_holding_disabled_still_allows_drag(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory(holdable=False)
    controller = InteractionController(board, scheduler)

    assert controller.on_pointer_down(150, 150) is True
    assert scheduler.queued_task_count == 0
    scheduler.advance(1.0)
    assert not die.is_held()

    controller.on_pointer_move(260, 150)
    controller.on_pointer_up(260, 150)
    assert die.coordinates == Coordinates(200, 100)


def test_dragging_disabled_still_allows_hold(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory(draggable=False)
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    assert controller.on_pointer_move(300, 300) is False
    assert controller.state is InteractionState.AWAITING
    scheduler.advance(HOLD_SECONDS)

    assert die.is_held()
    assert die.coordinates == Coordinates(100, 100)


def test_pointer_down_is_ignored_when_nothing_is_enabled(board_factory, scheduler: Scheduler) -> None:
    board, _ = board_factory(draggable=False, holdable=False)
    controller = InteractionController(board, scheduler)

    assert controller.on_pointer_down(150, 150) is False
    assert controller.state is InteractionState.IDLE


def test_pointer_down_on_empty_surface_is_ignored(board_factory, scheduler: Scheduler) -> None:
    board, _ = board_factory()
    controller = InteractionController(board, scheduler)

    assert controller.on_pointer_down(450, 450) is False
    assert controller.on_pointer_move(460, 460) is False
    assert controller.on_pointer_up(460, 460) is False
    assert scheduler.queued_task_count == 0


def test_touch_gestures_drag_like_pointer_gestures(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.handle(TouchEvent(TOUCH_START, (TouchPoint(150, 150), TouchPoint(400, 400))))
    controller.handle(TouchEvent(TOUCH_MOVE, (TouchPoint(260, 150),)))
    controller.handle(TouchEvent(TOUCH_END))

    assert die.coordinates == Coordinates(200, 100)


def test_close_cancels_a_pending_hold(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    controller.close()
    scheduler.advance(1.0)

    assert controller.state is InteractionState.IDLE
    assert not die.is_held()


def test_close_during_drag_keeps_the_die_in_place(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.on_pointer_down(150, 150)
    controller.on_pointer_move(300, 300)
    controller.close()

    assert die.coordinates == Coordinates(100, 100)
    renderer = board.renderer
    assert isinstance(renderer, RasterSurface)
    assert renderer.value_at(150, 150) == die.pips


def test_cursor_follows_the_gesture(board_factory, scheduler: Scheduler) -> None:
    board, _ = board_factory()
    controller = InteractionController(board, scheduler)

    controller.on_pointer_move(450, 450)
    assert controller.cursor == CURSOR_DEFAULT
    controller.on_pointer_move(150, 150)
    assert controller.cursor == CURSOR_GRAB
    controller.on_pointer_down(150, 150)
    controller.on_pointer_move(200, 150)
    assert controller.cursor == CURSOR_GRABBING
    controller.handle(PointerEvent(POINTER_UP, 200, 150))
    assert controller.cursor == CURSOR_GRAB


def test_viewport_offset_is_applied_to_pointer_events(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    board.set_viewport(10, 10)
    controller = InteractionController(board, scheduler)

    assert controller.on_pointer_down(115, 115) is True
    assert controller.active_die is die


@pytest.mark.parametrize("event_type", ["wheel", "pointer_enter"])
def test_unknown_pointer_events_are_not_consumed(board_factory, scheduler: Scheduler, event_type: str) -> None:
    board, _ = board_factory()
    controller = InteractionController(board, scheduler)
    assert controller.handle(PointerEvent(event_type, 150, 150)) is False


def test_pointer_cancel_ends_the_gesture_without_a_hold(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.handle(PointerEvent(POINTER_DOWN, 150, 150))
    assert controller.handle(PointerEvent(POINTER_CANCEL, 150, 150)) is True
    assert scheduler.queued_task_count == 0
    scheduler.advance(1.0)

    assert controller.state is InteractionState.IDLE
    assert not die.is_held()


def test_touch_cancel_ends_a_pending_hold(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.handle(TouchEvent(TOUCH_START, (TouchPoint(150, 150),)))
    assert controller.handle(TouchEvent(TOUCH_CANCEL)) is True
    scheduler.advance(1.0)

    assert controller.state is InteractionState.IDLE
    assert not die.is_held()


def test_touch_cancel_during_drag_drops_the_die(board_factory, scheduler: Scheduler) -> None:
    board, (die,) = board_factory()
    controller = InteractionController(board, scheduler)

    controller.handle(TouchEvent(TOUCH_START, (TouchPoint(150, 150),)))
    controller.handle(TouchEvent(TOUCH_MOVE, (TouchPoint(260, 150),)))
    controller.handle(TouchEvent(TOUCH_CANCEL))

    assert controller.state is InteractionState.IDLE
    assert die.coordinates == Coordinates(200, 100)


def test_touch_start_without_touches_picks_up_nothing(board_factory, scheduler: Scheduler) -> None:
    board, _ = board_factory([(0, 0)])
    controller = InteractionController(board, scheduler)

    assert controller.handle(TouchEvent(TOUCH_START)) is False
    assert controller.state is InteractionState.IDLE
    assert scheduler.queued_task_count == 0


def test_unknown_touch_events_are_not_consumed(board_factory, scheduler: Scheduler) -> None:
    board, _ = board_factory()
    controller = InteractionController(board, scheduler)
    assert controller.handle(TouchEvent("touch_force_change", (TouchPoint(150, 150),))) is False
