"""Score tracking and win/lose evaluation."""

from __future__ import annotations

from .enums import Outcome
from .goals import LevelGoals, collect_atoms, describe_atom, evaluate
from .models import GameState
from .rules_config import GameConfig


class VictorySystem:
    """Holds the score and decides win/lose/ongoing.

    Two modes are available: legacy threshold (win once the score reaches
    ``target``) and goal expressions. Supplying goals switches to the second
    mode; :meth:`reached` then always reports False and :meth:`check` decides.
    """

    def __init__(self, *, target: int | None = None, goals: LevelGoals | None = None) -> None:
        self._score = 0
        self._target = target
        self._goals = goals
        self._progress: list[str] = []

    @classmethod
    def from_config(cls, config: GameConfig, goals: LevelGoals | None = None) -> VictorySystem:
        if goals is not None:
            return cls(goals=goals)
        return cls(target=config.score_to_win)

    @property
    def score(self) -> int:
        return self._score

    @property
    def goals(self) -> LevelGoals | None:
        return self._goals

    def add_score(self, amount: int) -> None:
        self._score += amount

    def set_score(self, value: int) -> None:
        self._score = value

    def set_goals(self, goals: LevelGoals) -> None:
        self._goals = goals

    def reached(self) -> bool:
        """Legacy threshold test; always False in goal mode."""
        if self._goals is not None or self._target is None:
            return False
        return self._score >= self._target

    def check(self, state: GameState) -> Outcome:
        """Evaluate ``state``; a satisfied lose expression beats a satisfied win."""

        if self._goals is None:
            if self._target is not None and state.score >= self._target:
                return Outcome.WIN
            return Outcome.ONGOING

        win = evaluate(self._goals.win, state)
        lose = evaluate(self._goals.lose, state) if self._goals.lose is not None else False
        self._progress = self.progress_lines(state)
        if lose:
            return Outcome.LOSE
        if win:
            return Outcome.WIN
        return Outcome.ONGOING

    def progress_lines(self, state: GameState | None = None) -> list[str]:
        """One line per leaf atom of the win expression.

        Without ``state`` the lines from the last :meth:`check` are returned.
        """
        if state is None:
            return list(self._progress)
        if self._goals is None:
            return []
        return [describe_atom(atom, state) for atom in collect_atoms(self._goals.win)]

    # --- Undo ------------------------------------------------------------------

    def capture(self) -> int:
        return self._score

    def restore(self, state: int) -> None:
        self._score = state
