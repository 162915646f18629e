"""Start-of-turn snapshots and the bounded undo stack."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .board import Board, BoardFlags
from .catapults import CatapultSystem
from .enemies import EnemyState, EnemySystem
from .models import PlayerState
from .victory import VictorySystem

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DEPTH = 100


def clone_player(player: PlayerState) -> PlayerState:
    """Deep copy of ``player``; positions are immutable points."""

    return PlayerState(
        pos=player.pos,
        inventory=dict(player.inventory),
        houses=player.houses,
        turns=player.turns,
    )


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Everything needed to rewind to the start of ``turn_no``."""

    turn_no: int
    player: PlayerState
    house_state: tuple[bool, ...]
    catapult_state: tuple[bool, ...]
    victory_score: int
    enemies_state: EnemyState | None = None


def take_snapshot(
    player: PlayerState,
    board: Board,
    victory: VictorySystem,
    enemies: EnemySystem | None = None,
) -> Snapshot:
    """Capture the participants in a fixed order: player, board, victory, enemies."""

    flags = board.capture()
    return Snapshot(
        turn_no=player.turns,
        player=clone_player(player),
        house_state=flags.houses,
        catapult_state=flags.catapults,
        victory_score=victory.capture(),
        enemies_state=enemies.capture() if enemies is not None else None,
    )


def restore_snapshot(
    snapshot: Snapshot,
    board: Board,
    victory: VictorySystem,
    enemies: EnemySystem | None = None,
    catapults: CatapultSystem | None = None,
) -> PlayerState:
    """Restore every participant from ``snapshot`` and return a fresh player copy.

    The catapult registry is rebuilt from the restored board flags.
    """

    board.restore(BoardFlags(houses=snapshot.house_state, catapults=snapshot.catapult_state))
    victory.restore(snapshot.victory_score)
    if enemies is not None:
        if snapshot.enemies_state is not None:
            enemies.restore(snapshot.enemies_state)
        else:
            enemies.clear()
    if catapults is not None:
        catapults.sync_from_board()

    player = clone_player(snapshot.player)
    player.turns = snapshot.turn_no
    return player


class HistoryStack:
    """LIFO of snapshots; the oldest entry is dropped beyond ``max_depth``."""

    def __init__(self, max_depth: int = DEFAULT_HISTORY_DEPTH) -> None:
        if max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.max_depth = max_depth
        self._stack: list[Snapshot] = []

    def push(self, snapshot: Snapshot) -> None:
        self._stack.append(snapshot)
        if len(self._stack) > self.max_depth:
            self._stack.pop(0)
        logger.debug("Pushed snapshot for turn %s (depth %s)", snapshot.turn_no, len(self._stack))

    def pop(self) -> Snapshot | None:
        return self._stack.pop() if self._stack else None

    def peek(self) -> Snapshot | None:
        return self._stack[-1] if self._stack else None

    def clear(self) -> None:
        self._stack.clear()

    def __len__(self) -> int:
        return len(self._stack)
