"""Construction rules: houses, weapons and catapults."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from .board import Board
from .enums import WEAPON
from .models import PlayerState, Tile
from .rules_config import GameConfig

if TYPE_CHECKING:
    from .catapults import CatapultSystem


def has_cost(player: PlayerState, cost: Mapping[str, int]) -> bool:
    """True when the inventory covers every entry of ``cost``."""

    return all(player.inventory.get(key, 0) >= need for key, need in cost.items())


def consume(player: PlayerState, cost: Mapping[str, int]) -> bool:
    """Deduct ``cost`` from the inventory; no change and False if unaffordable."""

    if not has_cost(player, cost):
        return False
    for key, need in cost.items():
        player.inventory[key] = player.inventory.get(key, 0) - need
    return True


class BuildSystem:
    """Stateless validator/mutator over ``(config, board)``.

    Each ``can_build_*`` predicate checks exactly the preconditions its
    ``build_*`` counterpart enforces.
    """

    def __init__(self, config: GameConfig, board: Board) -> None:
        self._config = config
        self._board = board

    def _tile_under(self, player: PlayerState) -> Tile | None:
        return self._board.tile_at_pixel(player.pos)

    # --- Predicates ------------------------------------------------------------

    def can_build_house(self, player: PlayerState) -> bool:
        tile = self._tile_under(player)
        if tile is None or tile.has_house or tile.has_catapult:
            return False
        return has_cost(player, self._config.build_cost_house)

    def can_build_weapon(self, player: PlayerState) -> bool:
        return has_cost(player, self._config.build_cost_weapon)

    def can_build_catapult(self, player: PlayerState) -> bool:
        tile = self._tile_under(player)
        if tile is None or not tile.has_house:
            return False
        return has_cost(player, self._config.build_cost_catapult)

    # --- Mutators --------------------------------------------------------------

    def build_house(self, player: PlayerState) -> bool:
        if not self.can_build_house(player):
            return False
        tile = self._tile_under(player)
        if tile is None:
            return False
        consume(player, self._config.build_cost_house)
        tile.has_house = True
        player.houses += 1
        return True

    def build_weapon(self, player: PlayerState) -> bool:
        if not consume(player, self._config.build_cost_weapon):
            return False
        player.inventory[WEAPON] = player.inventory.get(WEAPON, 0) + max(
            1, int(self._config.weapon_yield)
        )
        return True

    def build_catapult(self, player: PlayerState, catapults: CatapultSystem) -> bool:
        """Charge the catapult cost and let ``catapults`` convert the house tile."""
        if not self.can_build_catapult(player):
            return False
        consume(player, self._config.build_cost_catapult)
        return catapults.build_at(player)
