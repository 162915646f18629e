"""Tests for enemy spawning, ring movement and undo state."""

import pytest

from hexhop.domain.board import Board
from hexhop.domain.enemies import NEVER_SPAWNED, EnemyState, EnemySystem
from hexhop.domain.rules_config import GameConfig
from hexhop.utils.hex_math import HexCoord, Point


@pytest.fixture
def board() -> Board:
    board = Board(GameConfig(map_radius=2))
    board.randomize("enemy-tests")
    return board


def _with_enemies(board: Board, *coords: tuple[int, int]) -> EnemySystem:
    system = EnemySystem(board, seed="s")
    system.restore(
        EnemyState(
            enemies=tuple((i + 1, q, r) for i, (q, r) in enumerate(coords)),
            last_turn_spawned=NEVER_SPAWNED,
        )
    )
    return system


FAR_AWAY = Point(10_000.0, 10_000.0)


class TestMovement:
    def test_steps_along_ring(self, board: Board) -> None:
        system = _with_enemies(board, (1, 0), (2, 0))
        assert system.move_all() == []
        assert system.positions() == [HexCoord(q=1, r=-1), HexCoord(q=2, r=-1)]

    def test_wraps_around(self, board: Board) -> None:
        system = _with_enemies(board, (0, 1))
        system.move_all()
        assert system.positions() == [HexCoord(q=1, r=0)]

    def test_full_lap_returns_home(self, board: Board) -> None:
        system = _with_enemies(board, (2, 0))
        for _ in range(12):
            system.move_all()
        assert system.positions() == [HexCoord(q=2, r=0)]

    def test_origin_enemy_holds(self, board: Board) -> None:
        system = _with_enemies(board, (0, 0))
        system.move_all()
        assert system.positions() == [HexCoord(q=0, r=0)]

    def test_blocked_enemy_holds(self, board: Board) -> None:
        # The first enemy sees the second still in place and waits
        system = _with_enemies(board, (1, 0), (1, -1))
        system.move_all()
        assert system.positions() == [HexCoord(q=1, r=0), HexCoord(q=0, r=-1)]

    def test_walking_into_house_destroys_both(self, board: Board) -> None:
        target = board.tile_by_axial(1, -1)
        assert target is not None
        target.has_house = True
        system = _with_enemies(board, (1, 0))

        destroyed = system.move_all()

        assert destroyed == [HexCoord(q=1, r=-1)]
        assert not target.has_house
        assert system.enemies == []

    def test_walking_into_catapult_destroys_both(self, board: Board) -> None:
        target = board.tile_by_axial(0, -1)
        assert target is not None
        target.has_catapult = True
        system = _with_enemies(board, (1, -1))

        assert system.move_all() == [HexCoord(q=0, r=-1)]
        assert not target.has_catapult
        assert system.enemies == []


class TestSpawning:
    def test_spawns_on_multiples_only(self, board: Board) -> None:
        system = EnemySystem(board, seed="s")
        assert system.try_spawn_by_turns(1, 3, FAR_AWAY) is None
        assert system.try_spawn_by_turns(0, 3, FAR_AWAY) is None
        assert system.try_spawn_by_turns(3, 3, FAR_AWAY) is not None
        assert len(system.enemies) == 1
        assert system.last_turn_spawned == 3

    def test_once_per_turn(self, board: Board) -> None:
        system = EnemySystem(board, seed="s")
        assert system.try_spawn_by_turns(3, 3, FAR_AWAY) is not None
        assert system.try_spawn_by_turns(3, 3, FAR_AWAY) is None
        assert len(system.enemies) == 1

    def test_rate_zero_disables(self, board: Board) -> None:
        system = EnemySystem(board, seed="s")
        assert system.try_spawn_by_turns(6, 0, FAR_AWAY) is None

    def test_deterministic_for_seed(self, board: Board) -> None:
        first = EnemySystem(board, seed="same").try_spawn_by_turns(3, 3, FAR_AWAY)
        second = EnemySystem(board, seed="same").try_spawn_by_turns(3, 3, FAR_AWAY)
        assert first is not None and second is not None
        assert first.coord == second.coord

    def test_skips_buildings_occupied_and_player_tiles(self, board: Board) -> None:
        for tile in board.tiles:
            tile.has_house = True
        free = board.tile_by_axial(2, -2)
        player_tile = board.tile_by_axial(0, 0)
        assert free is not None and player_tile is not None
        free.has_house = False
        player_tile.has_house = False

        system = EnemySystem(board, seed="s")
        enemy = system.try_spawn_by_turns(3, 3, player_tile.center)

        assert enemy is not None
        assert enemy.coord == free.coord
        assert system.try_spawn_by_turns(6, 3, player_tile.center) is None

    def test_handles_are_unique(self, board: Board) -> None:
        system = EnemySystem(board, seed="s")
        for turn in (3, 6, 9):
            system.try_spawn_by_turns(turn, 3, FAR_AWAY)
        handles = [enemy.handle for enemy in system.enemies]
        assert len(set(handles)) == len(handles) == 3


class TestCombatAndUndo:
    def test_hit_and_remove(self, board: Board) -> None:
        system = _with_enemies(board, (1, 0), (0, 1))
        hit = system.hit_on(1, 0)
        assert hit is not None
        system.remove(hit)
        assert system.hit_on(1, 0) is None
        assert system.positions() == [HexCoord(q=0, r=1)]

    def test_remove_at_returns_removed(self, board: Board) -> None:
        system = _with_enemies(board, (1, 0), (0, 1), (2, 0))
        removed = system.remove_at([HexCoord(q=1, r=0), HexCoord(q=2, r=0)])
        assert [enemy.coord for enemy in removed] == [HexCoord(q=1, r=0), HexCoord(q=2, r=0)]
        assert system.positions() == [HexCoord(q=0, r=1)]

    def test_capture_restore_round_trip(self, board: Board) -> None:
        system = EnemySystem(board, seed="s")
        system.try_spawn_by_turns(3, 3, FAR_AWAY)
        state = system.capture()

        system.move_all()
        system.try_spawn_by_turns(6, 3, FAR_AWAY)
        system.restore(state)

        assert system.capture() == state
        assert system.last_turn_spawned == 3

    def test_restore_drops_off_board_entries(self, board: Board) -> None:
        system = EnemySystem(board, seed="s")
        system.restore(EnemyState(enemies=((4, 1, 0), (5, 9, 9)), last_turn_spawned=3))
        assert [(e.handle, e.coord) for e in system.enemies] == [(4, HexCoord(q=1, r=0))]

    def test_new_handles_after_restore_do_not_collide(self, board: Board) -> None:
        system = EnemySystem(board, seed="s")
        system.restore(EnemyState(enemies=((7, 1, 0),), last_turn_spawned=NEVER_SPAWNED))
        enemy = system.try_spawn_by_turns(3, 3, FAR_AWAY)
        assert enemy is not None
        assert enemy.handle == 8
