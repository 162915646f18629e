"""Monster spawning, ring movement and removal."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from hexhop.utils.hex_math import HexCoord, Point, pixel_distance
from hexhop.utils.rng import generate_seed, random_choice

from .board import Board
from .models import Enemy

logger = logging.getLogger(__name__)

# Tiles closer than this many pixels to the player never receive a spawn
SPAWN_MIN_PLAYER_DISTANCE = 20.0

NEVER_SPAWNED = -999


@dataclass(frozen=True, slots=True)
class EnemyState:
    """Undo payload: ``(handle, q, r)`` per enemy plus the last spawn turn."""

    enemies: tuple[tuple[int, int, int], ...]
    last_turn_spawned: int


class EnemySystem:
    """Owns every enemy on the board.

    Movement follows the ring traversal direction: each enemy steps from
    index ``i`` to ``(i + 1) % len(ring)`` of the ring table built by
    :class:`~hexhop.domain.board.Board`. The direction is the same on every
    level.
    """

    def __init__(self, board: Board, *, seed: str) -> None:
        self._board = board
        self._seed = seed
        self._enemies: list[Enemy] = []
        self._last_turn_spawned = NEVER_SPAWNED
        self._next_handle = 1

    @property
    def enemies(self) -> list[Enemy]:
        return list(self._enemies)

    @property
    def last_turn_spawned(self) -> int:
        return self._last_turn_spawned

    def positions(self) -> list[HexCoord]:
        return [enemy.coord for enemy in self._enemies]

    def _new_enemy(self, coord: HexCoord) -> Enemy:
        enemy = Enemy(coord=coord, handle=self._next_handle)
        self._next_handle += 1
        self._enemies.append(enemy)
        return enemy

    # --- Spawning --------------------------------------------------------------

    def try_spawn_by_turns(self, turn: int, spawn_rate: int, player_pos: Point) -> Enemy | None:
        """Spawn one enemy when ``turn`` is a positive multiple of ``spawn_rate``.

        Fires at most once per distinct turn number.
        """

        if spawn_rate <= 0:
            return None
        if turn <= 0 or turn % spawn_rate != 0 or self._last_turn_spawned == turn:
            return None
        self._last_turn_spawned = turn
        return self._spawn(turn, player_pos)

    def _spawn(self, turn: int, player_pos: Point) -> Enemy | None:
        occupied = set(self.positions())
        candidates = [
            tile
            for tile in self._board.tiles
            if not tile.has_house
            and not tile.has_catapult
            and tile.coord not in occupied
            and pixel_distance(tile.center, player_pos) > SPAWN_MIN_PLAYER_DISTANCE
        ]
        if not candidates:
            logger.debug("No eligible spawn tile on turn %s", turn)
            return None

        pick = random_choice(generate_seed(self._seed, turn, "spawn"), candidates)
        enemy = self._new_enemy(pick["choice"].coord)
        logger.debug("Spawned enemy %s at %s on turn %s", enemy.handle, enemy.coord, turn)
        return enemy

    # --- Movement --------------------------------------------------------------

    def move_all(self) -> list[HexCoord]:
        """Advance every enemy one step along its ring.

        An enemy holds in place when it sits on the origin, when its ring
        position cannot be found, or when the next ring tile holds another
        enemy. Walking into a house or catapult destroys the structure and
        the enemy.

        Returns:
            Coordinates of the buildings destroyed this move
        """

        destroyed: list[HexCoord] = []
        survivors: list[Enemy] = []
        for enemy in self._enemies:
            tile = self._board.tile_at(enemy.coord)
            if tile is None:
                survivors.append(enemy)
                continue

            ring = self._board.ring(self._board.ring_radius(tile))
            index = next((i for i, t in enumerate(ring) if t.coord == enemy.coord), -1)
            if index < 0:
                survivors.append(enemy)
                continue

            target = ring[(index + 1) % len(ring)]
            if any(other is not enemy and other.coord == target.coord for other in self._enemies):
                survivors.append(enemy)
                continue

            enemy.coord = target.coord
            if target.has_house or target.has_catapult:
                target.has_house = False
                target.has_catapult = False
                destroyed.append(target.coord)
                logger.debug("Enemy %s destroyed building at %s", enemy.handle, target.coord)
                continue

            survivors.append(enemy)

        self._enemies = survivors
        return destroyed

    # --- Combat ----------------------------------------------------------------

    def hit_on(self, q: int, r: int) -> Enemy | None:
        coord = HexCoord(q=q, r=r)
        return next((enemy for enemy in self._enemies if enemy.coord == coord), None)

    def remove(self, enemy: Enemy) -> None:
        self._enemies = [other for other in self._enemies if other is not enemy]

    def remove_at(self, coords: Iterable[HexCoord]) -> list[Enemy]:
        """Remove every enemy standing on one of ``coords``; return the removed ones."""

        targets = set(coords)
        removed = [enemy for enemy in self._enemies if enemy.coord in targets]
        self._enemies = [enemy for enemy in self._enemies if enemy.coord not in targets]
        return removed

    def clear(self) -> None:
        self._enemies = []

    # --- Undo ------------------------------------------------------------------

    def capture(self) -> EnemyState:
        return EnemyState(
            enemies=tuple((enemy.handle, enemy.coord.q, enemy.coord.r) for enemy in self._enemies),
            last_turn_spawned=self._last_turn_spawned,
        )

    def restore(self, state: EnemyState) -> None:
        """Replace all enemies with the captured ones; off-board entries are dropped."""

        self.clear()
        self._last_turn_spawned = state.last_turn_spawned
        for handle, q, r in state.enemies:
            coord = HexCoord(q=q, r=r)
            if self._board.tile_at(coord) is None:
                continue
            self._enemies.append(Enemy(coord=coord, handle=handle))
            self._next_handle = max(self._next_handle, handle + 1)
