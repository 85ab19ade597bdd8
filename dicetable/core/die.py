"""A six-sided die that can be thrown, held and moved around a board."""

from __future__ import annotations

import random

from dicetable.core.errors import ConfigurationError
from dicetable.core.events import DieHeld, DieReleased, DieThrown
from dicetable.core.models import NUMBER_OF_PIPS, Coordinates, Player
from dicetable.runtime.events import EventBus

DEFAULT_COLOR = "Ivory"
DIE_UNICODE_CHARACTERS: tuple[str, ...] = ("⚀", "⚁", "⚂", "⚃", "⚄", "⚅")


def is_pip_number(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= NUMBER_OF_PIPS


class Die:
    """A die on a dice board.

    Coordinates and rotation are written by the board's placement engine and by
    dragging; a die without coordinates is not shown. Hold and release
    notifications go to the bus the owning board binds.
    """

    def __init__(
        self,
        *,
        pips: int | None = None,
        color: str = DEFAULT_COLOR,
        rng: random.Random | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        if pips is None:
            pips = self._random_pips()
        elif not is_pip_number(pips):
            raise ConfigurationError(f"pips should be between 1 and {NUMBER_OF_PIPS}, got {pips!r} instead.")
        self._pips = pips
        self._color = color
        self._coordinates: Coordinates | None = None
        self._rotation: int | None = None
        self._held_by: Player | None = None
        self._bus: EventBus | None = None

    def __repr__(self) -> str:
        return f"Die(pips={self._pips}, coordinates={self._coordinates}, held_by={self._held_by})"

    @property
    def pips(self) -> int:
        return self._pips

    @property
    def color(self) -> str:
        return self._color

    @property
    def coordinates(self) -> Coordinates | None:
        return self._coordinates

    @coordinates.setter
    def coordinates(self, value: Coordinates | None) -> None:
        self._coordinates = value

    @property
    def rotation(self) -> int | None:
        """Rotation in degrees, 0 <= rotation < 360, or ``None`` when not rotated."""
        return self._rotation

    @rotation.setter
    def rotation(self, value: int | None) -> None:
        self._rotation = value

    @property
    def held_by(self) -> Player | None:
        return self._held_by

    def bind(self, bus: EventBus | None) -> None:
        """Attach the event bus of the board this die is on."""
        self._bus = bus

    def has_coordinates(self) -> bool:
        return self._coordinates is not None

    def is_held(self) -> bool:
        return self._held_by is not None

    def to_unicode(self) -> str:
        return DIE_UNICODE_CHARACTERS[self._pips - 1]

    def throw_it(self) -> bool:
        """Roll new pips. Held dice are not thrown."""
        if self.is_held():
            return False
        self._pips = self._random_pips()
        self._publish(DieThrown(die=self))
        return True

    def hold_it(self, player: Player) -> bool:
        """Let `player` hold this die unless someone already holds it."""
        if self.is_held():
            return False
        self._held_by = player
        self._publish(DieHeld(die=self, player=player))
        return True

    def release_it(self, player: Player) -> bool:
        """Release this die; only the holding player can do so."""
        if self._held_by is None or self._held_by != player:
            return False
        self._held_by = None
        self._publish(DieReleased(die=self, player=player))
        return True

    def _random_pips(self) -> int:
        return self._rng.randint(1, NUMBER_OF_PIPS)

    def _publish(self, event: object) -> None:
        if self._bus is not None:
            self._bus.publish(event)
