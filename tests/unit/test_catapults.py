"""Tests for catapult construction and area attacks."""

import pytest

from hexhop.domain.board import Board
from hexhop.domain.catapults import CatapultSystem
from hexhop.domain.enemies import NEVER_SPAWNED, EnemyState, EnemySystem
from hexhop.domain.models import new_player
from hexhop.domain.rules_config import GameConfig
from hexhop.utils.hex_math import HexCoord


@pytest.fixture
def board() -> Board:
    board = Board(GameConfig(map_radius=2))
    board.randomize("catapult-tests")
    return board


def _enemies(board: Board, *coords: tuple[int, int]) -> EnemySystem:
    system = EnemySystem(board, seed="s")
    system.restore(
        EnemyState(
            enemies=tuple((i + 1, q, r) for i, (q, r) in enumerate(coords)),
            last_turn_spawned=NEVER_SPAWNED,
        )
    )
    return system


def _catapult_at(board: Board, catapults: CatapultSystem, q: int, r: int) -> None:
    tile = board.tile_by_axial(q, r)
    assert tile is not None
    tile.has_house = True
    player = new_player(tile.center)
    assert catapults.build_at(player)


def test_build_requires_house(board: Board) -> None:
    catapults = CatapultSystem(board)
    assert not catapults.build_at(new_player())
    assert catapults.spots == frozenset()


def test_build_swaps_house_for_catapult(board: Board) -> None:
    catapults = CatapultSystem(board)
    _catapult_at(board, catapults, 0, 0)
    tile = board.tile_by_axial(0, 0)
    assert tile is not None
    assert tile.has_catapult and not tile.has_house
    assert catapults.spots == {HexCoord(q=0, r=0)}


def test_attack_only_hits_neighbours(board: Board) -> None:
    catapults = CatapultSystem(board)
    _catapult_at(board, catapults, 0, 0)
    enemies = _enemies(board, (1, 0), (2, 0), (-1, 1))

    attacked = catapults.attack(enemies)

    assert len(attacked) == 6
    assert enemies.positions() == [HexCoord(q=2, r=0)]


def test_attack_from_edge_skips_off_board(board: Board) -> None:
    catapults = CatapultSystem(board)
    _catapult_at(board, catapults, 2, 0)
    enemies = _enemies(board, (1, 0))

    attacked = catapults.attack(enemies)

    assert set(attacked) == {HexCoord(q=1, r=0), HexCoord(q=2, r=-1), HexCoord(q=1, r=1)}
    assert enemies.enemies == []


def test_attack_with_no_catapults(board: Board) -> None:
    enemies = _enemies(board, (1, 0))
    assert CatapultSystem(board).attack(enemies) == []
    assert len(enemies.enemies) == 1


def test_sync_from_board(board: Board) -> None:
    catapults = CatapultSystem(board)
    _catapult_at(board, catapults, 0, 0)
    tile = board.tile_by_axial(0, 0)
    assert tile is not None
    tile.has_catapult = False
    other = board.tile_by_axial(1, 1)
    assert other is not None
    other.has_catapult = True

    catapults.sync_from_board()

    assert catapults.spots == {HexCoord(q=1, r=1)}
