"""Tests for goal expressions: evaluation, parsing and progress lines."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from hexhop.domain.enums import LoseReason
from hexhop.domain.goals import (
    AllOf,
    AnyOf,
    CatapultsAtLeast,
    HousesAtLeast,
    LevelGoals,
    NoDeathBy,
    Not,
    ResourcesAtLeast,
    ScoreAtLeast,
    TurnsAtMost,
    collect_atoms,
    describe_atom,
    evaluate,
    parse_goal,
    parse_level_goals,
)
from hexhop.domain.models import GameState


def _state(**kwargs) -> GameState:
    values = {
        "turn": 3,
        "score": 2,
        "inventory": {"WOOD": 2, "STONE": 1},
        "houses": 1,
        "catapults": 0,
        "last_lose_reason": None,
    }
    values.update(kwargs)
    return GameState(**values)


states = st.builds(
    GameState,
    turn=st.integers(0, 50),
    score=st.integers(0, 50),
    inventory=st.just({}),
    houses=st.integers(0, 5),
    catapults=st.integers(0, 5),
)


class TestAtoms:
    def test_thresholds(self) -> None:
        state = _state()
        assert evaluate(ScoreAtLeast(2), state)
        assert not evaluate(ScoreAtLeast(3), state)
        assert evaluate(TurnsAtMost(3), state)
        assert not evaluate(TurnsAtMost(2), state)
        assert evaluate(HousesAtLeast(1), state)
        assert not evaluate(CatapultsAtLeast(1), state)

    def test_resources(self) -> None:
        state = _state()
        assert evaluate(ResourcesAtLeast({"WOOD": 2, "STONE": 1}), state)
        assert not evaluate(ResourcesAtLeast({"SHEEP": 1}), state)
        assert evaluate(ResourcesAtLeast({}), state)

    def test_no_death_by(self) -> None:
        atom = NoDeathBy(frozenset({LoseReason.MONSTER}))
        assert evaluate(atom, _state())
        assert evaluate(atom, _state(last_lose_reason=LoseReason.OUT_OF_MAP))
        assert not evaluate(atom, _state(last_lose_reason=LoseReason.MONSTER))


class TestCombinators:
    def test_vacuous_truth(self) -> None:
        assert evaluate(AllOf(()), _state())
        assert not evaluate(AnyOf(()), _state())

    def test_nesting(self) -> None:
        expr = AllOf((ScoreAtLeast(1), AnyOf((HousesAtLeast(5), Not(CatapultsAtLeast(1))))))
        assert evaluate(expr, _state())
        assert not evaluate(expr, _state(catapults=1))

    @given(states, st.integers(0, 50))
    def test_double_negation(self, state: GameState, value: int) -> None:
        atom = ScoreAtLeast(value)
        assert evaluate(Not(Not(atom)), state) == evaluate(atom, state)


class TestParsing:
    def test_parse_nested(self) -> None:
        expr = parse_goal(
            {
                "allOf": [
                    {"type": "scoreAtLeast", "value": 3},
                    {"not": {"type": "turnsAtMost", "value": 2}},
                    {"anyOf": [{"type": "housesAtLeast", "value": 1}]},
                ]
            }
        )
        assert expr == AllOf(
            (ScoreAtLeast(3), Not(TurnsAtMost(2)), AnyOf((HousesAtLeast(1),)))
        )

    def test_parse_resources_and_death(self) -> None:
        assert parse_goal({"type": "resourcesAtLeast", "need": {"WOOD": 2}}) == ResourcesAtLeast(
            {"WOOD": 2}
        )
        assert parse_goal({"type": "noDeathBy", "reasons": ["MONSTER"]}) == NoDeathBy(
            frozenset({LoseReason.MONSTER})
        )

    @pytest.mark.parametrize(
        "data",
        [
            {"type": "flyAtLeast", "value": 1},
            {"type": "scoreAtLeast"},
            {"type": "noDeathBy", "reasons": ["BOREDOM"]},
            {"type": "noDeathBy", "reasons": "MONSTER"},
            {},
            {"type": "scoreAtLeast", "value": None},
            {"type": "scoreAtLeast", "value": "three"},
            {"type": "housesAtLeast", "value": [1]},
            {"allOf": 5},
            {"anyOf": {"type": "scoreAtLeast", "value": 1}},
            {"not": 3},
            {"type": "resourcesAtLeast", "need": [1, 2]},
            {"type": "resourcesAtLeast", "need": {"WOOD": None}},
            {"type": ["scoreAtLeast"]},
        ],
    )
    def test_invalid_expressions(self, data) -> None:
        with pytest.raises(ValueError):
            parse_goal(data)

    def test_non_mapping(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            parse_goal(["scoreAtLeast"])  # type: ignore[arg-type]

    def test_level_goals(self) -> None:
        goals = parse_level_goals(
            {
                "win": {"type": "scoreAtLeast", "value": 1},
                "lose": {"type": "turnsAtMost", "value": 0},
            }
        )
        assert goals == LevelGoals(win=ScoreAtLeast(1), lose=TurnsAtMost(0))
        assert parse_level_goals({"win": {"allOf": []}}).lose is None

    def test_level_goals_require_win(self) -> None:
        with pytest.raises(ValueError, match="win"):
            parse_level_goals({"lose": {"type": "scoreAtLeast", "value": 1}})


class TestProgress:
    def test_collect_atoms_skips_negated(self) -> None:
        expr = AllOf((ScoreAtLeast(1), Not(TurnsAtMost(2)), AnyOf((HousesAtLeast(1),))))
        assert collect_atoms(expr) == [ScoreAtLeast(1), HousesAtLeast(1)]

    def test_describe_atom(self) -> None:
        state = _state()
        assert describe_atom(ScoreAtLeast(2), state) == "[x] Score 2/2"
        assert describe_atom(HousesAtLeast(3), state) == "[ ] Houses 1/3"
        assert describe_atom(ResourcesAtLeast({"WOOD": 3}), state) == "[ ] Resources WOOD:2/3"
        line = describe_atom(NoDeathBy(frozenset({LoseReason.MONSTER})), state)
        assert line == "[x] Avoid death by MONSTER"
