"""Dataclasses describing the hexhop game entities.

The rules layer operates purely on these in-memory types. Renderers and HUDs
read them (or the views built from them) but never mutate them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from hexhop.utils.hex_math import HexCoord, Point

from .enums import INVENTORY_KEYS, LoseReason, ResourceKind


@dataclass(slots=True)
class Tile:
    """Board tile.

    A tile never has both ``has_house`` and ``has_catapult`` set.
    """

    coord: HexCoord
    center: Point
    resource: ResourceKind
    has_house: bool = False
    has_catapult: bool = False


@dataclass(slots=True)
class PlayerState:
    """The single player: position, inventory, counters."""

    pos: Point = field(default_factory=lambda: Point(0.0, 0.0))
    inventory: dict[str, int] = field(default_factory=dict)
    houses: int = 0
    turns: int = 0


def new_player(pos: Point | None = None) -> PlayerState:
    """Create a player at ``pos`` (origin by default) with an empty inventory."""

    return PlayerState(
        pos=pos if pos is not None else Point(0.0, 0.0),
        inventory={key: 0 for key in INVENTORY_KEYS},
    )


@dataclass(slots=True)
class Enemy:
    """A roaming monster; ``handle`` identifies its sprite for the renderer."""

    coord: HexCoord
    handle: int


@dataclass(frozen=True, slots=True)
class GameState:
    """Point-in-time values that goal expressions are evaluated against."""

    turn: int
    score: int
    inventory: Mapping[str, int]
    houses: int
    catapults: int
    last_lose_reason: LoseReason | None = None
