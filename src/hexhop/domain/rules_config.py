"""Declarative rule configuration for the hexhop domain."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from .enums import ResourceKind, TurnStep


def _default_weights() -> dict[ResourceKind, int]:
    return {kind: 4 for kind in ResourceKind}


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Board, jump, build and victory constants for one level."""

    map_radius: int = 3
    hex_size: float = 44.0
    jump_min_hex: float = 0.25
    jump_max_hex: float = 3.0
    press_ms_full: float = 800.0
    build_cost_house: Mapping[str, int] = field(
        default_factory=lambda: {"BRICK": 1, "WHEAT": 1, "WOOD": 1, "SHEEP": 1}
    )
    build_cost_weapon: Mapping[str, int] = field(default_factory=lambda: {"STONE": 2, "WOOD": 1})
    build_cost_catapult: Mapping[str, int] = field(
        default_factory=lambda: {"STONE": 3, "BRICK": 2}
    )
    weapon_yield: int = 1
    score_to_win: int = 5
    turn_limit: int = 0  # 0 = unlimited
    resource_weights: Mapping[ResourceKind, int] = field(default_factory=_default_weights)


@dataclass(frozen=True, slots=True)
class LevelRules:
    """Capabilities, score amounts and per-turn effects of a level."""

    enemies_enabled: bool = False
    catapults_enabled: bool = False
    weapon_build_enabled: bool = False
    catapult_build_enabled: bool = False
    house_score: int = 1
    catapult_build_score: int = 2
    catapult_attack_score: int = 0  # per enemy removed
    monster_kill_score: int = 1
    turn_steps: tuple[TurnStep, ...] = ()


DEFAULT_CONFIG = GameConfig()
DEFAULT_LEVEL_RULES = LevelRules()

_CONFIG_FIELDS = frozenset(f.name for f in fields(GameConfig))


def merge_config(base: GameConfig, overrides: Mapping[str, Any]) -> GameConfig:
    """Shallow-merge ``overrides`` onto ``base``.

    Every field is replaced wholesale except ``resource_weights``, which is
    merged key by key so a level may change a single weight. Unknown keys and
    ``None`` values are ignored.
    """

    updates: dict[str, Any] = {
        key: value
        for key, value in overrides.items()
        if key in _CONFIG_FIELDS and value is not None
    }
    weights = updates.pop("resource_weights", None)
    if weights:
        merged = dict(base.resource_weights)
        merged.update({ResourceKind(key): value for key, value in weights.items()})
        updates["resource_weights"] = merged
    return replace(base, **updates)
