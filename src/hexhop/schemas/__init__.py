from .level import ConfigOverrides, EnemyParams, EnemySpec, LevelSpec

__all__ = [
    "ConfigOverrides",
    "EnemyParams",
    "EnemySpec",
    "LevelSpec",
]
