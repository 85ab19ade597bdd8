"""In-process pub/sub shared by the board, its dice and the interaction controller."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Subscription:
    """Token returned by `EventBus.subscribe`, used to unsubscribe."""

    id: int
    event_type: type


class EventBus:
    """Handlers registered per event class.

    Publishing walks the event's class hierarchy, so a handler subscribed to a
    base class (``DieEvent``, or ``object`` for everything) also sees its
    subclasses. Handlers for the most specific class run first.
    """

    def __init__(self) -> None:
        self._last_id = 0
        self._handlers: dict[type, dict[int, EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        self._last_id += 1
        self._handlers.setdefault(event_type, {})[self._last_id] = handler
        return Subscription(self._last_id, event_type)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription; removing twice is harmless."""
        handlers = self._handlers.get(subscription.event_type)
        if handlers is None:
            return
        handlers.pop(subscription.id, None)
        if not handlers:
            del self._handlers[subscription.event_type]

    def publish(self, event: object) -> int:
        """Deliver `event` and return how many handlers ran."""
        matched = [
            handler
            for event_class in type(event).__mro__
            for handler in self._handlers.get(event_class, {}).values()
        ]
        for handler in matched:
            handler(event)
        invoked = len(matched)
        logger.debug("event_published type=%s handlers=%d", type(event).__name__, invoked)
        return invoked
