"""Core value types shared by layout, snapping and interaction."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol

from dicetable.core.errors import ConfigurationError

NUMBER_OF_PIPS = 6
FULL_CIRCLE_IN_DEGREES = 360


@dataclass(frozen=True, slots=True)
class Cell:
    """Grid cell in row/column space."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Surface-local pixel point; the top-left corner of a die's footprint."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Coordinates:
        return Coordinates(self.x + dx, self.y + dy)


class Token(Protocol):
    """What layout and snapping need from a die."""

    coordinates: Coordinates | None
    rotation: int | None

    def has_coordinates(self) -> bool: ...

    def is_held(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class Player:
    """A player of a dice game.

    Two players with the same name and color are the same player.
    """

    name: str
    color: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("A Player needs a name")
        if not self.color:
            raise ConfigurationError("A Player needs a color")

    def __str__(self) -> str:
        return self.name


GAME_MASTER = Player(name="GameMaster", color="red")


class PlayerList:
    """Ordered set of players known to a board."""

    def __init__(self, players: tuple[Player, ...] = (GAME_MASTER,)) -> None:
        self._players: list[Player] = []
        for player in players:
            self.add(player)

    def add(self, player: Player) -> None:
        if player not in self._players:
            self._players.append(player)

    def find(self, name: str) -> Player | None:
        """Return the first player called `name`, if any."""
        for player in self._players:
            if player.name == name:
                return player
        return None

    def __contains__(self, player: object) -> bool:
        return player in self._players

    def __iter__(self) -> Iterator[Player]:
        return iter(tuple(self._players))

    def __len__(self) -> int:
        return len(self._players)
