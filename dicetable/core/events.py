"""Board and die notifications published on the shared event bus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from dicetable.core.models import Player

if TYPE_CHECKING:
    from dicetable.core.die import Die


@dataclass(frozen=True, slots=True)
class DieEvent:
    die: Die


@dataclass(frozen=True, slots=True)
class DieAdded(DieEvent):
    pass


@dataclass(frozen=True, slots=True)
class DieRemoved(DieEvent):
    pass


@dataclass(frozen=True, slots=True)
class DieThrown(DieEvent):
    """A die got a new random number of pips."""


@dataclass(frozen=True, slots=True)
class DieHeld(DieEvent):
    player: Player


@dataclass(frozen=True, slots=True)
class DieReleased(DieEvent):
    player: Player


@dataclass(frozen=True, slots=True)
class DiceLaidOut:
    dice: tuple[Die, ...]
