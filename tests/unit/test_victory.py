"""Tests for score tracking and win/lose evaluation."""

from hexhop.domain.enums import LoseReason, Outcome
from hexhop.domain.goals import HousesAtLeast, LevelGoals, NoDeathBy, Not, ScoreAtLeast, TurnsAtMost
from hexhop.domain.models import GameState
from hexhop.domain.rules_config import GameConfig
from hexhop.domain.victory import VictorySystem


def _state(score: int = 0, turn: int = 0, houses: int = 0, reason=None) -> GameState:
    return GameState(
        turn=turn, score=score, inventory={}, houses=houses, catapults=0, last_lose_reason=reason
    )


class TestLegacyThreshold:
    def test_reached_at_target(self) -> None:
        victory = VictorySystem.from_config(GameConfig(score_to_win=3))
        victory.add_score(2)
        assert not victory.reached()
        victory.add_score(1)
        assert victory.reached()
        assert victory.check(_state(score=3)) is Outcome.WIN

    def test_set_score(self) -> None:
        victory = VictorySystem(target=5)
        victory.set_score(7)
        assert victory.score == 7
        assert victory.reached()

    def test_no_target_never_wins(self) -> None:
        victory = VictorySystem()
        victory.add_score(100)
        assert not victory.reached()
        assert victory.check(_state(score=100)) is Outcome.ONGOING


class TestGoalMode:
    def test_goals_replace_threshold(self) -> None:
        goals = LevelGoals(win=HousesAtLeast(2))
        victory = VictorySystem.from_config(GameConfig(score_to_win=1), goals)
        victory.add_score(10)
        assert not victory.reached()
        assert victory.check(_state(score=10, houses=1)) is Outcome.ONGOING
        assert victory.check(_state(houses=2)) is Outcome.WIN

    def test_lose_beats_win(self) -> None:
        goals = LevelGoals(win=ScoreAtLeast(1), lose=Not(TurnsAtMost(3)))
        victory = VictorySystem(goals=goals)
        assert victory.check(_state(score=1, turn=3)) is Outcome.WIN
        assert victory.check(_state(score=1, turn=4)) is Outcome.LOSE

    def test_death_reason_in_lose_expression(self) -> None:
        goals = LevelGoals(
            win=ScoreAtLeast(9), lose=Not(NoDeathBy(frozenset({LoseReason.MONSTER})))
        )
        victory = VictorySystem(goals=goals)
        assert victory.check(_state()) is Outcome.ONGOING
        assert victory.check(_state(reason=LoseReason.MONSTER)) is Outcome.LOSE

    def test_set_goals_switches_mode(self) -> None:
        victory = VictorySystem(target=1)
        victory.add_score(1)
        victory.set_goals(LevelGoals(win=ScoreAtLeast(2)))
        assert victory.goals is not None
        assert not victory.reached()
        assert victory.check(_state(score=1)) is Outcome.ONGOING


class TestProgressAndUndo:
    def test_progress_lines(self) -> None:
        victory = VictorySystem(goals=LevelGoals(win=ScoreAtLeast(2)))
        assert victory.progress_lines() == []
        victory.check(_state(score=1))
        assert victory.progress_lines() == ["[ ] Score 1/2"]
        assert victory.progress_lines(_state(score=2)) == ["[x] Score 2/2"]

    def test_legacy_mode_has_no_progress(self) -> None:
        assert VictorySystem(target=1).progress_lines(_state()) == []

    def test_capture_restore(self) -> None:
        victory = VictorySystem(target=10)
        victory.add_score(4)
        saved = victory.capture()
        victory.add_score(3)
        victory.restore(saved)
        assert victory.score == 4
