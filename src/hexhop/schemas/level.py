from typing import Any

from pydantic import BaseModel, Field, field_validator

from hexhop.domain.enums import INVENTORY_KEYS, ResourceKind
from hexhop.domain.goals import LevelGoals, parse_level_goals
from hexhop.domain.rules_config import DEFAULT_CONFIG, GameConfig, LevelRules, merge_config


def _check_cost_keys(cost: dict[str, int] | None) -> dict[str, int] | None:
    if cost is None:
        return None
    unknown = set(cost) - set(INVENTORY_KEYS)
    if unknown:
        raise ValueError(f"unknown inventory kinds in cost: {sorted(unknown)}")
    return cost


class ConfigOverrides(BaseModel):
    """Partial game configuration; unset fields keep the base value."""

    map_radius: int | None = Field(None, ge=0, description="Board radius in hexes")
    hex_size: float | None = Field(None, gt=0, description="Hex circumradius in pixels")
    jump_min_hex: float | None = Field(None, ge=0, description="Shortest jump in hex units")
    jump_max_hex: float | None = Field(None, ge=0, description="Longest jump in hex units")
    press_ms_full: float | None = Field(None, gt=0, description="Press time for a full jump")
    build_cost_house: dict[str, int] | None = None
    build_cost_weapon: dict[str, int] | None = None
    build_cost_catapult: dict[str, int] | None = None
    weapon_yield: int | None = Field(None, ge=1, description="WEAPON gained per build")
    score_to_win: int | None = Field(None, ge=0, description="Legacy score target")
    turn_limit: int | None = Field(None, ge=0, description="0 means unlimited turns")
    resource_weights: dict[ResourceKind, int] | None = Field(
        None, description="Per-resource weights, merged key by key"
    )

    @field_validator("build_cost_house", "build_cost_weapon", "build_cost_catapult")
    @classmethod
    def check_costs(cls, value: dict[str, int] | None) -> dict[str, int] | None:
        return _check_cost_keys(value)


class EnemyParams(BaseModel):
    spawn_rate: int = Field(default=5, ge=0, description="Spawn every N turns; 0 disables")
    mobile: bool = Field(default=True, description="Whether enemies move along their ring")
    move_pattern: str = Field(default="ring", description="Informational movement label")


class EnemySpec(BaseModel):
    kind: str = Field(default="monster")
    params: EnemyParams = Field(default_factory=EnemyParams)


class LevelSpec(BaseModel):
    """A playable level: config overrides, enemy parameters, rules and goals."""

    id: int = Field(..., ge=1, description="Level number")
    name: str = Field(..., min_length=1)
    overrides: ConfigOverrides = Field(default_factory=ConfigOverrides)
    enemies: list[EnemySpec] = Field(default_factory=list)
    rules: LevelRules = Field(default_factory=LevelRules)
    goals: dict[str, Any] | None = Field(
        None, description='Goal expressions, e.g. {"win": {"type": "scoreAtLeast", "value": 3}}'
    )

    @field_validator("goals")
    @classmethod
    def check_goals(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if value is not None:
            parse_level_goals(value)
        return value

    def build_config(self, base: GameConfig = DEFAULT_CONFIG) -> GameConfig:
        return merge_config(base, self.overrides.model_dump(exclude_none=True))

    def goal_spec(self) -> LevelGoals | None:
        return parse_level_goals(self.goals) if self.goals is not None else None

    @property
    def spawn_rate(self) -> int:
        return self.enemies[0].params.spawn_rate if self.enemies else EnemyParams().spawn_rate

    @property
    def enemies_mobile(self) -> bool:
        return self.enemies[0].params.mobile if self.enemies else True
