"""Generic turn processing for one play session.

A :class:`GameSession` owns every subsystem for the current level and
drives them in a fixed order on each player action::

    snapshot -> simulate jump -> settle landing -> landing collision
    -> turn increment -> level turn steps -> victory check -> turn limit

Level differences come only from the :class:`LevelSpec` data (config
overrides, enemy parameters, :class:`LevelRules`, goals).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from hexhop.schemas.level import LevelSpec
from hexhop.utils.hex_math import SQRT3, HexCoord, Point
from hexhop.utils.rng import generate_seed, new_session_seed

from .board import Board
from .build import BuildSystem
from .catapults import CatapultSystem
from .enemies import EnemySystem
from .enums import WEAPON, BuildKind, LandingKind, LoseReason, Outcome, ResourceKind, TurnStep
from .history import DEFAULT_HISTORY_DEPTH, HistoryStack, restore_snapshot, take_snapshot
from .jump import JumpInput, LandingResult, settle_landing, simulate_jump
from .models import GameState, PlayerState, new_player
from .rules_config import DEFAULT_CONFIG, GameConfig
from .victory import VictorySystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TurnResult:
    """What happened on one jump; ``landing`` is None if the game was already over."""

    landing: LandingResult | None
    outcome: Outcome
    lose_reason: LoseReason | None = None
    destroyed: tuple[HexCoord, ...] = ()
    spawned: bool = False


@dataclass(frozen=True, slots=True)
class TileView:
    q: int
    r: int
    x: float
    y: float
    resource: ResourceKind
    has_house: bool
    has_catapult: bool


@dataclass(frozen=True, slots=True)
class SessionView:
    """Read-only state for renderers and HUDs."""

    level_id: int
    turn: int
    score: int
    inventory: dict[str, int]
    houses: int
    catapults: int
    player_pos: Point
    outcome: Outcome
    lose_reason: LoseReason | None
    tiles: tuple[TileView, ...] = ()
    enemies: tuple[tuple[int, int, int], ...] = ()
    progress: tuple[str, ...] = field(default_factory=tuple)


class GameSession:
    """One level being played, from the first jump to win or loss."""

    def __init__(
        self,
        level: LevelSpec,
        *,
        seed: str | None = None,
        base_config: GameConfig = DEFAULT_CONFIG,
        history_depth: int = DEFAULT_HISTORY_DEPTH,
    ) -> None:
        self.level = level
        self.rules = level.rules
        self.config = level.build_config(base_config)
        self.seed = seed if seed is not None else new_session_seed()
        self.history = HistoryStack(history_depth)
        self._restarts = 0
        self._setup()

    def _setup(self) -> None:
        self.board = Board(self.config)
        self.board.randomize(generate_seed(self.seed, self._restarts, "board"))
        self.builder = BuildSystem(self.config, self.board)
        self.victory = VictorySystem.from_config(self.config, self.level.goal_spec())
        self.enemies: EnemySystem | None = None
        if self.rules.enemies_enabled:
            self.enemies = EnemySystem(
                self.board, seed=generate_seed(self.seed, self._restarts, "enemies")
            )
        self.catapults: CatapultSystem | None = None
        if self.rules.catapults_enabled:
            self.catapults = CatapultSystem(self.board)
        self.player: PlayerState = new_player()
        self.outcome = Outcome.ONGOING
        self.lose_reason: LoseReason | None = None
        self.last_lose_reason: LoseReason | None = None
        self.history.clear()
        self._last_snapshot_turn = -1
        self._push_snapshot_if_needed()

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.ONGOING

    @property
    def hex_pixel_size(self) -> float:
        """Center-to-center distance between neighbouring hexes."""
        return self.config.hex_size * SQRT3

    # --- Player actions ----------------------------------------------------------

    def jump(self, press_ms: float, angle_rad: float) -> TurnResult:
        if self.is_over:
            return TurnResult(landing=None, outcome=self.outcome, lose_reason=self.lose_reason)

        self._push_snapshot_if_needed()

        target = simulate_jump(
            self.player.pos,
            JumpInput(press_ms=press_ms, angle_rad=angle_rad),
            self.hex_pixel_size,
            config=self.config,
        )
        landing = settle_landing(self.player, self.board, target)
        if landing.kind is LandingKind.OUT_OF_MAP:
            self._lose(LoseReason.OUT_OF_MAP)
            return self._result(landing)

        self._resolve_player_vs_monster()
        if self.is_over:
            return self._result(landing)

        self.player.turns += 1
        destroyed, spawned = self._run_turn_steps(self.player.turns)
        if self.is_over:
            return self._result(landing, destroyed, spawned)

        self._evaluate_victory()
        limit = self.config.turn_limit
        if limit > 0 and self.player.turns > limit and self.outcome is Outcome.ONGOING:
            self._lose(LoseReason.TURN_LIMIT)
        return self._result(landing, destroyed, spawned)

    def build_house(self) -> bool:
        if self.is_over or not self.builder.can_build_house(self.player):
            return False
        self._push_snapshot_if_needed()
        if not self.builder.build_house(self.player):
            return False
        self.victory.add_score(self.rules.house_score)
        self._evaluate_victory()
        return True

    def build_weapon(self) -> bool:
        if self.is_over or not self.rules.weapon_build_enabled:
            return False
        if not self.builder.can_build_weapon(self.player):
            return False
        self._push_snapshot_if_needed()
        return self.builder.build_weapon(self.player)

    def build_catapult(self) -> bool:
        if self.is_over or not self.rules.catapult_build_enabled or self.catapults is None:
            return False
        if not self.builder.can_build_catapult(self.player):
            return False
        self._push_snapshot_if_needed()
        if not self.builder.build_catapult(self.player, self.catapults):
            return False
        self.victory.add_score(self.rules.catapult_build_score)
        if self.enemies is not None:
            self._catapult_attack()
        self._evaluate_victory()
        return True

    def build(self, kind: BuildKind) -> bool:
        """Dispatch a build request by kind."""

        builders = {
            BuildKind.HOUSE: self.build_house,
            BuildKind.WEAPON: self.build_weapon,
            BuildKind.CATAPULT: self.build_catapult,
        }
        return builders[kind]()

    def undo(self) -> bool:
        """Rewind to the start of the previous snapshot's turn; False with no history."""

        snapshot = self.history.pop()
        if snapshot is None:
            return False
        self.player = restore_snapshot(
            snapshot, self.board, self.victory, self.enemies, self.catapults
        )
        self.outcome = Outcome.ONGOING
        self.lose_reason = None
        self.last_lose_reason = None
        self._last_snapshot_turn = snapshot.turn_no - 1
        logger.debug("Undo to turn %s", snapshot.turn_no)
        return True

    def restart(self) -> None:
        """Start the level over on a freshly shuffled board."""

        self._restarts += 1
        self._setup()
        logger.info("Restarted level %s", self.level.id)

    # --- State for goals and display ---------------------------------------------

    def game_state(self) -> GameState:
        return GameState(
            turn=self.player.turns,
            score=self.victory.score,
            inventory=dict(self.player.inventory),
            houses=self.player.houses,
            catapults=self.board.catapult_count(),
            last_lose_reason=self.last_lose_reason,
        )

    def view(self) -> SessionView:
        state = self.game_state()
        tiles = tuple(
            TileView(
                q=tile.coord.q,
                r=tile.coord.r,
                x=tile.center.x,
                y=tile.center.y,
                resource=tile.resource,
                has_house=tile.has_house,
                has_catapult=tile.has_catapult,
            )
            for tile in self.board.tiles
        )
        enemies = ()
        if self.enemies is not None:
            enemies = tuple((e.handle, e.coord.q, e.coord.r) for e in self.enemies.enemies)
        return SessionView(
            level_id=self.level.id,
            turn=state.turn,
            score=state.score,
            inventory=dict(state.inventory),
            houses=state.houses,
            catapults=state.catapults,
            player_pos=self.player.pos,
            outcome=self.outcome,
            lose_reason=self.lose_reason,
            tiles=tiles,
            enemies=enemies,
            progress=tuple(self.victory.progress_lines(state)),
        )

    # --- Internals ----------------------------------------------------------------

    def _push_snapshot_if_needed(self) -> None:
        if self.player.turns == self._last_snapshot_turn:
            return
        self.history.push(take_snapshot(self.player, self.board, self.victory, self.enemies))
        self._last_snapshot_turn = self.player.turns

    def _run_turn_steps(self, turn_no: int) -> tuple[tuple[HexCoord, ...], bool]:
        destroyed: list[HexCoord] = []
        spawned = False
        for step in self.rules.turn_steps:
            if self.is_over:
                break
            handler = _STEP_HANDLERS[step]
            step_destroyed, step_spawned = handler(self, turn_no)
            destroyed.extend(step_destroyed)
            spawned = spawned or step_spawned
        return tuple(destroyed), spawned

    def _step_move_enemies(self, turn_no: int) -> tuple[list[HexCoord], bool]:
        if self.enemies is None or not self.level.enemies_mobile:
            return [], False
        destroyed = self.enemies.move_all()
        if destroyed and self.catapults is not None:
            self.catapults.sync_from_board()
        return destroyed, False

    def _step_spawn_enemies(self, turn_no: int) -> tuple[list[HexCoord], bool]:
        if self.enemies is None:
            return [], False
        enemy = self.enemies.try_spawn_by_turns(turn_no, self.level.spawn_rate, self.player.pos)
        return [], enemy is not None

    def _step_catapult_attack(self, turn_no: int) -> tuple[list[HexCoord], bool]:
        if self.enemies is not None and self.catapults is not None:
            self._catapult_attack()
        return [], False

    def _step_resolve_collision(self, turn_no: int) -> tuple[list[HexCoord], bool]:
        self._resolve_player_vs_monster()
        return [], False

    def _catapult_attack(self) -> None:
        if self.enemies is None or self.catapults is None:
            return
        before = len(self.enemies.enemies)
        self.catapults.attack(self.enemies)
        self.catapults.sync_from_board()
        removed = before - len(self.enemies.enemies)
        if removed and self.rules.catapult_attack_score:
            self.victory.add_score(removed * self.rules.catapult_attack_score)

    def _resolve_player_vs_monster(self) -> None:
        """Kill the monster on the player's tile with a weapon, or die."""

        if self.enemies is None:
            return
        tile = self.board.tile_at_pixel(self.player.pos)
        if tile is None:
            return
        hit = self.enemies.hit_on(tile.coord.q, tile.coord.r)
        if hit is None:
            return
        if self.player.inventory.get(WEAPON, 0) > 0:
            self.player.inventory[WEAPON] -= 1
            self.enemies.remove(hit)
            self.victory.add_score(self.rules.monster_kill_score)
            logger.debug("Player killed enemy %s at %s", hit.handle, hit.coord)
        else:
            self._lose(LoseReason.MONSTER)

    def _evaluate_victory(self) -> None:
        if self.is_over:
            return
        if self.victory.goals is None:
            if self.victory.reached():
                self._win()
            return
        outcome = self.victory.check(self.game_state())
        if outcome is Outcome.WIN:
            self._win()
        elif outcome is Outcome.LOSE:
            self.outcome = Outcome.LOSE
            self.lose_reason = self.last_lose_reason
            logger.info("Level %s lost on goal expression", self.level.id)

    def _win(self) -> None:
        self.outcome = Outcome.WIN
        logger.info("Level %s won on turn %s", self.level.id, self.player.turns)

    def _lose(self, reason: LoseReason) -> None:
        self.outcome = Outcome.LOSE
        self.lose_reason = reason
        self.last_lose_reason = reason
        logger.info("Level %s lost (%s) on turn %s", self.level.id, reason, self.player.turns)

    def _result(
        self,
        landing: LandingResult,
        destroyed: tuple[HexCoord, ...] = (),
        spawned: bool = False,
    ) -> TurnResult:
        return TurnResult(
            landing=landing,
            outcome=self.outcome,
            lose_reason=self.lose_reason,
            destroyed=destroyed,
            spawned=spawned,
        )


_StepHandler = Callable[[GameSession, int], tuple[list[HexCoord], bool]]

_STEP_HANDLERS: dict[TurnStep, _StepHandler] = {
    TurnStep.MOVE_ENEMIES: GameSession._step_move_enemies,
    TurnStep.SPAWN_ENEMIES: GameSession._step_spawn_enemies,
    TurnStep.CATAPULT_ATTACK: GameSession._step_catapult_attack,
    TurnStep.RESOLVE_COLLISION: GameSession._step_resolve_collision,
}
