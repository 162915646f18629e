"""Rules layer for hexhop.

This package hosts every game rule. It exposes:

* Dataclasses describing tiles, the player and enemies (see :mod:`models`).
* Enumerations shared across the rules layer.
* Rule configuration objects (see :mod:`rules_config`).
* The subsystems: board, jump, build, enemies, catapults, goals, victory
  and history.

The level catalog (:mod:`levels`) and the turn processor (:mod:`session`)
depend on the validated level schema and are imported directly.
"""

from . import (
    board,
    build,
    catapults,
    charge,
    enemies,
    enums,
    goals,
    history,
    jump,
    models,
    rules_config,
    victory,
)

__all__ = [
    "board",
    "build",
    "catapults",
    "charge",
    "enemies",
    "enums",
    "goals",
    "history",
    "jump",
    "models",
    "rules_config",
    "victory",
]
