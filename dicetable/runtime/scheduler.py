"""Manual-clock timer queue for hold timers and other deferred callbacks."""

from __future__ import annotations

import heapq
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

TaskCallback = Callable[[], None]

logger = logging.getLogger(__name__)


@dataclass(order=True, slots=True)
class _Timer:
    due_seconds: float
    task_id: int
    callback: TaskCallback = field(compare=False)


class Scheduler:
    """One-shot timers on a clock that only the host moves forward.

    The host loop calls `advance` (or `run_due` with its own clock) and every
    timer due by then fires in due order; equal due times fire in the order
    they were scheduled. Cancelled timers stay in the heap until they surface
    and are skipped there.
    """

    def __init__(self, *, now_seconds: float = 0.0) -> None:
        self._now_seconds = now_seconds
        self._last_id = 0
        self._heap: list[_Timer] = []
        self._pending: set[int] = set()

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def queued_task_count(self) -> int:
        """Timers that are scheduled and not cancelled."""
        return len(self._pending)

    def call_later(self, delay_seconds: float, callback: TaskCallback) -> int:
        """Run `callback` once `delay_seconds` have passed; returns the task id."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        self._last_id += 1
        heapq.heappush(self._heap, _Timer(self._now_seconds + delay_seconds, self._last_id, callback))
        self._pending.add(self._last_id)
        return self._last_id

    def cancel(self, task_id: int) -> None:
        """Cancel a timer; unknown or already fired ids are ignored."""
        self._pending.discard(task_id)

    def is_pending(self, task_id: int) -> bool:
        return task_id in self._pending

    def advance(self, delta_seconds: float) -> int:
        """Move the clock forward by `delta_seconds` and fire due timers."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def run_due(self, now_seconds: float) -> int:
        """Set the clock to `now_seconds` and fire every timer due by then."""
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        self._now_seconds = now_seconds
        fired = 0
        while self._heap and self._heap[0].due_seconds <= now_seconds:
            timer = heapq.heappop(self._heap)
            if timer.task_id not in self._pending:
                continue
            self._pending.discard(timer.task_id)
            timer.callback()
            fired += 1
        if fired:
            logger.debug("timers_fired count=%d now=%.3f", fired, now_seconds)
        return fired
