"""Jump simulation and landing resolution."""

from __future__ import annotations

import math
from dataclasses import dataclass

from hexhop.utils.hex_math import Point

from .board import Board
from .enums import LandingKind
from .models import PlayerState, Tile
from .rules_config import DEFAULT_CONFIG, GameConfig


@dataclass(frozen=True, slots=True)
class JumpInput:
    """Jump intent: how long the button was held and where it points."""

    press_ms: float
    angle_rad: float


@dataclass(frozen=True, slots=True)
class LandingResult:
    """Outcome of :func:`settle_landing`; ``tile`` is set only for ``OK``."""

    kind: LandingKind
    tile: Tile | None = None


def jump_length_hex(press_ms: float, config: GameConfig = DEFAULT_CONFIG) -> float:
    """Map a press duration to a jump length in hex units."""

    ratio = min(1.0, max(0.0, press_ms) / config.press_ms_full)
    return config.jump_min_hex + (config.jump_max_hex - config.jump_min_hex) * ratio


def simulate_jump(
    origin: Point,
    jump: JumpInput,
    hex_pixel_size: float,
    *,
    config: GameConfig = DEFAULT_CONFIG,
) -> Point:
    """Return the landing point of a jump. Pure; nothing is mutated."""

    distance = jump_length_hex(jump.press_ms, config) * hex_pixel_size
    return Point(
        origin.x + math.cos(jump.angle_rad) * distance,
        origin.y + math.sin(jump.angle_rad) * distance,
    )


def settle_landing(player: PlayerState, board: Board, new_pos: Point) -> LandingResult:
    """Resolve a landing and harvest the tile's resource.

    A point outside every tile returns ``OUT_OF_MAP`` and leaves ``player``
    untouched; the caller decides what that means. Otherwise the topmost
    tile wins: the player moves there and gains one unit of its resource,
    plus one more if the tile carries a house. Turn counting is left to the
    caller.
    """

    tiles = board.tiles_at_pixel(new_pos)
    if not tiles:
        return LandingResult(kind=LandingKind.OUT_OF_MAP)

    tile = tiles[-1]
    player.pos = new_pos

    key = tile.resource.value
    gained = 2 if tile.has_house else 1
    player.inventory[key] = player.inventory.get(key, 0) + gained

    return LandingResult(kind=LandingKind.OK, tile=tile)
