"""Boolean goal expressions evaluated against a :class:`GameState`.

Goals are written as small trees of atoms combined with ``AllOf``,
``AnyOf`` and ``Not``. Levels describe them as plain dictionaries, e.g.::

    {"allOf": [{"type": "scoreAtLeast", "value": 3},
               {"not": {"type": "turnsAtMost", "value": 2}}]}

which :func:`parse_goal` turns into the dataclasses below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, assert_never

from .enums import LoseReason
from .models import GameState


@dataclass(frozen=True, slots=True)
class ScoreAtLeast:
    value: int


@dataclass(frozen=True, slots=True)
class TurnsAtMost:
    value: int


@dataclass(frozen=True, slots=True)
class HousesAtLeast:
    value: int


@dataclass(frozen=True, slots=True)
class CatapultsAtLeast:
    value: int


@dataclass(frozen=True, slots=True)
class ResourcesAtLeast:
    need: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class NoDeathBy:
    reasons: frozenset[LoseReason] = frozenset()


GoalAtom = (
    ScoreAtLeast | TurnsAtMost | HousesAtLeast | CatapultsAtLeast | ResourcesAtLeast | NoDeathBy
)


@dataclass(frozen=True, slots=True)
class AllOf:
    items: tuple[GoalExpr, ...] = ()


@dataclass(frozen=True, slots=True)
class AnyOf:
    items: tuple[GoalExpr, ...] = ()


@dataclass(frozen=True, slots=True)
class Not:
    item: GoalExpr


GoalExpr = GoalAtom | AllOf | AnyOf | Not


@dataclass(frozen=True, slots=True)
class LevelGoals:
    """Win expression plus an optional lose expression."""

    win: GoalExpr
    lose: GoalExpr | None = None


# --- Evaluation ----------------------------------------------------------------


def evaluate(expr: GoalExpr, state: GameState) -> bool:
    """Reduce ``expr`` to a boolean. ``AllOf(())`` is true, ``AnyOf(())`` is false."""

    match expr:
        case AllOf(items=items):
            return all(evaluate(item, state) for item in items)
        case AnyOf(items=items):
            return any(evaluate(item, state) for item in items)
        case Not(item=item):
            return not evaluate(item, state)
        case _:
            return evaluate_atom(expr, state)


def evaluate_atom(atom: GoalAtom, state: GameState) -> bool:
    match atom:
        case ScoreAtLeast(value=value):
            return state.score >= value
        case TurnsAtMost(value=value):
            return state.turn <= value
        case HousesAtLeast(value=value):
            return state.houses >= value
        case CatapultsAtLeast(value=value):
            return state.catapults >= value
        case ResourcesAtLeast(need=need):
            return all(state.inventory.get(key, 0) >= amount for key, amount in need.items())
        case NoDeathBy(reasons=reasons):
            return state.last_lose_reason not in reasons
        case _:
            assert_never(atom)


def collect_atoms(expr: GoalExpr) -> list[GoalAtom]:
    """Leaf atoms of ``expr`` in reading order; subtrees under ``Not`` are skipped."""

    match expr:
        case AllOf(items=items) | AnyOf(items=items):
            return [atom for item in items for atom in collect_atoms(item)]
        case Not():
            return []
        case _:
            return [expr]


def describe_atom(atom: GoalAtom, state: GameState) -> str:
    """One human-readable progress line for ``atom``."""

    done = evaluate_atom(atom, state)
    match atom:
        case ScoreAtLeast(value=value):
            text = f"Score {state.score}/{value}"
        case TurnsAtMost(value=value):
            text = f"Turns <= {value} (now {state.turn})"
        case HousesAtLeast(value=value):
            text = f"Houses {state.houses}/{value}"
        case CatapultsAtLeast(value=value):
            text = f"Catapults {state.catapults}/{value}"
        case ResourcesAtLeast(need=need):
            parts = " ".join(f"{key}:{state.inventory.get(key, 0)}/{n}" for key, n in need.items())
            text = f"Resources {parts}"
        case NoDeathBy(reasons=reasons):
            text = "Avoid death by " + ", ".join(sorted(reason.value for reason in reasons))
        case _:
            assert_never(atom)
    return f"[{'x' if done else ' '}] {text}"


# --- Parsing -------------------------------------------------------------------

_VALUE_ATOMS: dict[str, type[ScoreAtLeast | TurnsAtMost | HousesAtLeast | CatapultsAtLeast]] = {
    "scoreAtLeast": ScoreAtLeast,
    "turnsAtMost": TurnsAtMost,
    "housesAtLeast": HousesAtLeast,
    "catapultsAtLeast": CatapultsAtLeast,
}


def parse_goal(data: Mapping[str, Any]) -> GoalExpr:
    """Build a goal expression from its dictionary form.

    Raises:
        ValueError: If the dictionary is not a recognised expression
    """

    if not isinstance(data, Mapping):
        raise ValueError(f"goal expression must be a mapping, got {type(data).__name__}")

    if "allOf" in data:
        return AllOf(items=_parse_items(data["allOf"], "allOf"))
    if "anyOf" in data:
        return AnyOf(items=_parse_items(data["anyOf"], "anyOf"))
    if "not" in data:
        return Not(item=parse_goal(data["not"]))

    kind = data.get("type")
    if not isinstance(kind, str):
        raise ValueError(f"goal atom requires a string 'type', got {data!r}")
    if kind in _VALUE_ATOMS:
        if "value" not in data:
            raise ValueError(f"goal atom '{kind}' requires a 'value'")
        return _VALUE_ATOMS[kind](value=_as_int(data["value"], kind))
    if kind == "resourcesAtLeast":
        need = data.get("need", {})
        if not isinstance(need, Mapping):
            raise ValueError(f"'need' of {kind} must be a mapping, got {type(need).__name__}")
        return ResourcesAtLeast(need={str(key): _as_int(n, kind) for key, n in need.items()})
    if kind == "noDeathBy":
        reasons = data.get("reasons", ())
        if isinstance(reasons, str) or not isinstance(reasons, list | tuple):
            raise ValueError(f"'reasons' of {kind} must be a list, got {type(reasons).__name__}")
        try:
            return NoDeathBy(reasons=frozenset(LoseReason(reason) for reason in reasons))
        except ValueError as exc:
            raise ValueError(f"unknown lose reason in {data!r}") from exc

    raise ValueError(f"unknown goal expression: {data!r}")


def _parse_items(items: Any, key: str) -> tuple[GoalExpr, ...]:
    if not isinstance(items, list | tuple):
        raise ValueError(f"'{key}' must be a list, got {type(items).__name__}")
    return tuple(parse_goal(item) for item in items)


def _as_int(value: Any, kind: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise ValueError(f"goal atom '{kind}' needs an integer, got {value!r}")
    try:
        return int(value)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"goal atom '{kind}' needs an integer, got {value!r}") from exc


def parse_level_goals(data: Mapping[str, Any]) -> LevelGoals:
    """Parse ``{"win": ..., "lose": ...}``; ``lose`` is optional."""

    if not isinstance(data, Mapping):
        raise ValueError(f"level goals must be a mapping, got {type(data).__name__}")
    if "win" not in data:
        raise ValueError("level goals require a 'win' expression")
    lose = data.get("lose")
    return LevelGoals(win=parse_goal(data["win"]), lose=parse_goal(lose) if lose else None)
