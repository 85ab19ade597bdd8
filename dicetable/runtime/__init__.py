"""Runtime primitives: event bus, scheduler and logging pipeline."""

from dicetable.runtime.events import EventBus, Subscription
from dicetable.runtime.scheduler import Scheduler

__all__ = ["EventBus", "Scheduler", "Subscription"]
