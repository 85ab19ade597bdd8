"""Dice board: owns the dice, lays them out and renders them."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from dicetable.core.config import BoardConfig
from dicetable.core.die import Die
from dicetable.core.errors import ConfigurationError, require_positive_number
from dicetable.core.events import DiceLaidOut, DieAdded, DieRemoved
from dicetable.core.grid import GridModel
from dicetable.core.models import GAME_MASTER, Coordinates, Player, PlayerList
from dicetable.core.placement import PlacementEngine
from dicetable.render.surface import RasterSurface, SurfaceRenderer
from dicetable.runtime.events import EventBus

logger = logging.getLogger(__name__)


class DiceBoard:
    """A bounded surface with dice that is re-packed whenever its dice change."""

    def __init__(
        self,
        config: BoardConfig | None = None,
        *,
        renderer: SurfaceRenderer | None = None,
        bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or BoardConfig()
        self._bus = bus or EventBus()
        self._grid = GridModel(self._config.width, self._config.height, self._config.die_size)
        self._engine = PlacementEngine(
            self._grid,
            dispersion=self._config.dispersion,
            rotate=self._config.rotating,
            rng=rng,
        )
        self._renderer: SurfaceRenderer = renderer or RasterSurface(self._config.width, self._config.height)
        self._dice: list[Die] = []
        self._players = PlayerList()
        self._current_player = GAME_MASTER
        self._origin = Coordinates(0.0, 0.0)
        self._scale = 1.0

    @property
    def config(self) -> BoardConfig:
        return self._config

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def grid(self) -> GridModel:
        return self._grid

    @property
    def engine(self) -> PlacementEngine:
        return self._engine

    @property
    def renderer(self) -> SurfaceRenderer:
        return self._renderer

    @property
    def dice(self) -> tuple[Die, ...]:
        return tuple(self._dice)

    @property
    def players(self) -> PlayerList:
        return self._players

    @property
    def maximum_number_of_dice(self) -> int:
        return self._grid.capacity

    @property
    def current_player(self) -> Player:
        """Player on whose behalf dice are held and released."""
        return self._current_player

    @current_player.setter
    def current_player(self, player: Player) -> None:
        self._players.add(player)
        self._current_player = player

    def configure(self, **changes: Any) -> BoardConfig:
        """Apply configuration changes and re-render.

        Dice keep their coordinates; the next layout uses the new grid. Unknown
        names and invalid values raise ConfigurationError and leave the board
        untouched.
        """
        try:
            config = replace(self._config, **changes)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc
        self._grid.configure(width=config.width, height=config.height, cell_size=config.die_size)
        self._engine.dispersion = config.dispersion
        self._engine.rotate = config.rotating
        if (config.width, config.height) != (self._config.width, self._config.height):
            self._renderer.resize(config.width, config.height)
        self._config = config
        logger.info(
            "board_configured width=%s height=%s die_size=%s rows=%d cols=%d",
            config.width,
            config.height,
            config.die_size,
            self._grid.rows,
            self._grid.cols,
        )
        self.render()
        return config

    def set_viewport(self, origin_x: float, origin_y: float, scale: float = 1.0) -> None:
        """Describe where the surface sits in window space for pointer mapping."""
        self._scale = require_positive_number("scale", scale)
        self._origin = Coordinates(float(origin_x), float(origin_y))

    def to_surface(self, x: float, y: float) -> Coordinates:
        """Map window coordinates to surface-local coordinates."""
        return Coordinates((x - self._origin.x) / self._scale, (y - self._origin.y) / self._scale)

    def add_die(self, die: Die) -> Die:
        if len(self._dice) >= self._grid.capacity:
            raise ConfigurationError(
                f"The number of dice that can be layout is {self._grid.capacity}, "
                f"got {len(self._dice) + 1} dice instead."
            )
        die.bind(self._bus)
        self._dice.append(die)
        self._bus.publish(DieAdded(die=die))
        self.relayout()
        self.render()
        return die

    def remove_die(self, die: Die) -> None:
        self._dice.remove(die)
        self._bus.publish(DieRemoved(die=die))
        die.bind(None)
        self.relayout()
        self.render()

    def throw_dice(self, player: Player = GAME_MASTER) -> tuple[Die, ...]:
        """Throw every die that is not held and lay them out again."""
        for die in self._dice:
            die.throw_it()
        self.current_player = player
        self.relayout()
        self.render()
        logger.info("dice_thrown player=%s dice=%d", player, len(self._dice))
        return self.dice

    def relayout(self) -> list[Die]:
        laid_out = self._engine.layout(self._dice)
        self._bus.publish(DiceLaidOut(dice=tuple(laid_out)))
        return laid_out

    def die_at(self, point: Coordinates) -> Die | None:
        found = self._engine.die_at(point)
        return found if isinstance(found, Die) else None

    def snap_to(self, point: Coordinates, die: Die | None = None) -> Coordinates | None:
        return self._engine.snap_to(point, die)

    def render(self, dice: Sequence[Die] | None = None) -> None:
        """Clear the surface and paint `dice`, by default every die on the board."""
        self._renderer.clear()
        for die in self._dice if dice is None else dice:
            if die.has_coordinates():
                self._renderer.draw_die(die, self._grid.cell_size)
