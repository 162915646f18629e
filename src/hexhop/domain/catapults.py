"""Catapult construction and area attacks."""

from __future__ import annotations

from hexhop.utils.hex_math import HexCoord, hex_neighbors

from .board import Board
from .enemies import EnemySystem
from .models import PlayerState


class CatapultSystem:
    """Tracks active catapults.

    The coordinate registry is a cache of the board's ``has_catapult``
    flags. Enemy collisions and undo change those flags directly, so call
    :meth:`sync_from_board` afterwards. This system takes no part in
    snapshots for the same reason.
    """

    def __init__(self, board: Board) -> None:
        self._board = board
        self._spots: set[HexCoord] = set()

    @property
    def spots(self) -> frozenset[HexCoord]:
        return frozenset(self._spots)

    def build_at(self, player: PlayerState) -> bool:
        """Turn the house under the player into a catapult. Costs are not handled here."""

        tile = self._board.tile_at_pixel(player.pos)
        if tile is None or not tile.has_house:
            return False
        tile.has_house = False
        tile.has_catapult = True
        self._spots.add(tile.coord)
        return True

    def attack(self, enemies: EnemySystem) -> list[HexCoord]:
        """Clear enemies from the six neighbours of every catapult.

        Returns:
            The on-board coordinates that were attacked
        """

        attacked: list[HexCoord] = []
        for spot in sorted(self._spots, key=lambda c: (c.q, c.r)):
            if self._board.tile_at(spot) is None:
                continue
            adjacent = [coord for coord in hex_neighbors(spot) if self._board.tile_at(coord)]
            enemies.remove_at(adjacent)
            attacked.extend(adjacent)
        return attacked

    def sync_from_board(self) -> None:
        self._spots = {tile.coord for tile in self._board.tiles if tile.has_catapult}
