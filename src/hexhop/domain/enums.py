"""Enumerations and type aliases for the hexhop domain."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class ResourceKind(StrEnum):
    """Resources harvested by landing on a tile."""

    BRICK = "BRICK"
    WHEAT = "WHEAT"
    WOOD = "WOOD"
    SHEEP = "SHEEP"
    STONE = "STONE"


# Crafted inventory kind; never found on a tile.
WEAPON: Final = "WEAPON"

INVENTORY_KEYS: tuple[str, ...] = (*(kind.value for kind in ResourceKind), WEAPON)


class LandingKind(StrEnum):
    """Result of settling a jump against the board."""

    OK = "OK"
    OUT_OF_MAP = "OUT_OF_MAP"


class LoseReason(StrEnum):
    """Why a game was lost."""

    MONSTER = "MONSTER"
    OUT_OF_MAP = "OUT_OF_MAP"
    TURN_LIMIT = "TURN_LIMIT"


class Outcome(StrEnum):
    """Win/lose state of a game."""

    WIN = "win"
    LOSE = "lose"
    ONGOING = "ongoing"


class BuildKind(StrEnum):
    """Construction kinds the player may request."""

    HOUSE = "house"
    WEAPON = "weapon"
    CATAPULT = "catapult"


class TurnStep(StrEnum):
    """Effects that run at the start of each turn, in level-defined order."""

    MOVE_ENEMIES = "move_enemies"
    SPAWN_ENEMIES = "spawn_enemies"
    CATAPULT_ATTACK = "catapult_attack"
    RESOLVE_COLLISION = "resolve_collision"


class ChargeState(StrEnum):
    """States of the press/charge input mechanic."""

    IDLE = "idle"
    CHARGING = "charging"
    RELEASED = "released"
