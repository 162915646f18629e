"""Built-in level catalog.

Each level is pure data: configuration overrides, enemy parameters and a
:class:`LevelRules` record. The session reads nothing level-specific from
anywhere else.
"""

from __future__ import annotations

import logging

from hexhop.schemas.level import LevelSpec

from .enums import TurnStep
from .rules_config import LevelRules

logger = logging.getLogger(__name__)

_NO_STONE = {"BRICK": 4, "WHEAT": 4, "WOOD": 4, "SHEEP": 4, "STONE": 0}

LEVELS: tuple[LevelSpec, ...] = (
    LevelSpec(
        id=1,
        name="Level 1",
        overrides={
            "map_radius": 2,
            "score_to_win": 1,
            "turn_limit": 4,
            "resource_weights": _NO_STONE,
        },
    ),
    LevelSpec(
        id=2,
        name="Level 2",
        overrides={
            "map_radius": 3,
            "score_to_win": 5,
            "turn_limit": 16,
            "resource_weights": _NO_STONE,
        },
    ),
    LevelSpec(
        id=3,
        name="Level 3 - Monsters & Weapons (Stone/Wood only)",
        overrides={
            "map_radius": 2,
            "score_to_win": 3,
            "turn_limit": 12,
            "resource_weights": {"BRICK": 0, "WHEAT": 0, "SHEEP": 0, "WOOD": 1, "STONE": 1},
        },
        enemies=[{"kind": "monster", "params": {"spawn_rate": 3, "mobile": True}}],
        rules=LevelRules(
            enemies_enabled=True,
            weapon_build_enabled=True,
            house_score=0,
            catapult_build_score=0,
            turn_steps=(
                TurnStep.MOVE_ENEMIES,
                TurnStep.SPAWN_ENEMIES,
                TurnStep.RESOLVE_COLLISION,
            ),
        ),
    ),
    LevelSpec(
        id=4,
        name="Level 4 - Monsters & Catapults",
        overrides={"map_radius": 3, "score_to_win": 10},
        enemies=[{"kind": "monster", "params": {"spawn_rate": 3, "mobile": True}}],
        rules=LevelRules(
            enemies_enabled=True,
            catapults_enabled=True,
            weapon_build_enabled=True,
            catapult_build_enabled=True,
            turn_steps=(
                TurnStep.MOVE_ENEMIES,
                TurnStep.SPAWN_ENEMIES,
                TurnStep.CATAPULT_ATTACK,
                TurnStep.RESOLVE_COLLISION,
            ),
        ),
    ),
)


def get_level_spec(level_id: int) -> LevelSpec:
    """Return level ``level_id``, falling back to the first level."""

    for level in LEVELS:
        if level.id == level_id:
            return level
    logger.warning("Unknown level %s, falling back to level %s", level_id, LEVELS[0].id)
    return LEVELS[0]
