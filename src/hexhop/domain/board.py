"""Procedurally generated hex board with coordinate and pixel lookup.

The board is the single arena of tiles shared by the subsystems. Each
subsystem may only touch specific tile fields:

* BuildSystem sets ``has_house``.
* CatapultSystem swaps ``has_house`` for ``has_catapult``.
* EnemySystem clears both flags when an enemy walks into a building.
* History restores both flags through :meth:`Board.restore`.

Resources and coordinates are fixed once :meth:`Board.randomize` has run.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from hexhop.utils.hex_math import (
    ORIGIN,
    HexCoord,
    Point,
    axial_to_pixel,
    hex_distance,
    hex_ring,
    hexes_in_range,
    point_in_hex,
)
from hexhop.utils.rng import shuffled

from .enums import ResourceKind
from .models import Tile
from .rules_config import DEFAULT_CONFIG, GameConfig

# Pool order; also the order in which rounding surplus is kept.
POOL_ORDER: tuple[ResourceKind, ...] = (
    ResourceKind.BRICK,
    ResourceKind.WHEAT,
    ResourceKind.WOOD,
    ResourceKind.SHEEP,
    ResourceKind.STONE,
)
POOL_FALLBACK = ResourceKind.WOOD


@dataclass(frozen=True, slots=True)
class BoardFlags:
    """Per-tile building flags in board order."""

    houses: tuple[bool, ...]
    catapults: tuple[bool, ...]


def tile_count(radius: int) -> int:
    """Number of tiles on a hex board of ``radius``: 3R^2 + 3R + 1."""
    return 3 * radius * radius + 3 * radius + 1


def build_resource_pool(weights: Mapping[ResourceKind, int], n: int) -> list[ResourceKind]:
    """Build an unshuffled pool of exactly ``n`` resources.

    Each resource gets ``round(weight / total * n)`` entries (half rounds
    up, negative weights count as zero). A rounding shortfall is filled with
    WOOD; a rounding surplus is trimmed from the end of the pool.
    """

    if n < 0:
        raise ValueError(f"pool size must be non-negative, got {n}")

    clamped = [(kind, max(0, weights.get(kind, 0))) for kind in POOL_ORDER]
    total = sum(weight for _, weight in clamped) or 1

    pool: list[ResourceKind] = []
    for kind, weight in clamped:
        count = int(weight / total * n + 0.5)
        pool.extend([kind] * count)

    if len(pool) < n:
        pool.extend([POOL_FALLBACK] * (n - len(pool)))
    return pool[:n]


class Board:
    """Hex board of radius ``config.map_radius`` centered on the origin."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG) -> None:
        if config.map_radius < 0:
            raise ValueError(f"map_radius must be non-negative, got {config.map_radius}")
        if config.hex_size <= 0:
            raise ValueError(f"hex_size must be positive, got {config.hex_size}")
        self._config = config
        self.tiles: list[Tile] = []
        self._by_coord: dict[HexCoord, Tile] = {}
        self._rings: dict[int, list[Tile]] = {}

    @property
    def radius(self) -> int:
        return self._config.map_radius

    @property
    def hex_size(self) -> float:
        return self._config.hex_size

    def randomize(self, seed: str) -> None:
        """(Re)generate every tile with a resource layout shuffled by ``seed``."""

        self.tiles = []
        self._by_coord = {}
        self._rings = {}

        coords = hexes_in_range(ORIGIN, self.radius)
        pool = shuffled(seed, build_resource_pool(self._config.resource_weights, len(coords)))

        for coord, resource in zip(coords, pool, strict=True):
            tile = Tile(
                coord=coord,
                center=axial_to_pixel(coord, self.hex_size),
                resource=resource,
            )
            self.tiles.append(tile)
            self._by_coord[coord] = tile

        for radius in range(1, self.radius + 1):
            self._rings[radius] = [
                self._by_coord[coord]
                for coord in hex_ring(ORIGIN, radius)
                if coord in self._by_coord
            ]

    # --- Lookup ----------------------------------------------------------------

    def tile_by_axial(self, q: int, r: int) -> Tile | None:
        return self._by_coord.get(HexCoord(q=q, r=r))

    def tile_at(self, coord: HexCoord) -> Tile | None:
        return self._by_coord.get(coord)

    def tiles_at_pixel(self, p: Point) -> list[Tile]:
        """Return every tile whose hexagon contains ``p``."""
        return [tile for tile in self.tiles if point_in_hex(tile.center, self.hex_size, p)]

    def tile_at_pixel(self, p: Point) -> Tile | None:
        """Return the topmost tile containing ``p``; no nearest-tile fallback."""
        matches = self.tiles_at_pixel(p)
        return matches[-1] if matches else None

    def ring_radius(self, tile: Tile) -> int:
        return hex_distance(tile.coord, ORIGIN)

    def ring(self, radius: int) -> list[Tile]:
        """Return the ordered ring of ``radius``, or an empty list when out of range."""
        return self._rings.get(radius, [])

    def catapult_count(self) -> int:
        return sum(1 for tile in self.tiles if tile.has_catapult)

    # --- Flag snapshots --------------------------------------------------------

    def house_state(self) -> list[bool]:
        return [tile.has_house for tile in self.tiles]

    def set_house_state(self, flags: Sequence[bool]) -> None:
        for index, tile in enumerate(self.tiles):
            tile.has_house = bool(flags[index]) if index < len(flags) else False

    def catapult_state(self) -> list[bool]:
        return [tile.has_catapult for tile in self.tiles]

    def set_catapult_state(self, flags: Sequence[bool]) -> None:
        for index, tile in enumerate(self.tiles):
            tile.has_catapult = bool(flags[index]) if index < len(flags) else False

    def capture(self) -> BoardFlags:
        return BoardFlags(houses=tuple(self.house_state()), catapults=tuple(self.catapult_state()))

    def restore(self, state: BoardFlags) -> None:
        self.set_house_state(state.houses)
        self.set_catapult_state(state.catapults)
