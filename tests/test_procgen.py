import numpy as np
import pytest

from game_rng import GameRNG
from game.world.game_map import TILE_ID_FLOOR, TILE_ID_WALL
from game.world.procgen import generate_layout, maze_start


def test_seed_42_layout_is_reproducible():
    first = generate_layout(46, 30, GameRNG(seed=42))
    second = generate_layout(46, 30, GameRNG(seed=42))
    assert np.array_equal(first.tiles, second.tiles)
    assert np.array_equal(first.light, second.light)


def test_different_seeds_give_different_layouts():
    first = generate_layout(46, 30, GameRNG(seed=1))
    second = generate_layout(46, 30, GameRNG(seed=2))
    assert not np.array_equal(first.tiles, second.tiles)


@pytest.mark.parametrize("seed", [0, 42, 1337, 999999])
def test_every_floor_tile_is_connected(seed):
    game_map = generate_layout(46, 30, GameRNG(seed=seed))
    sx, sy = maze_start(46, 30)
    reachable = game_map.reachable_from(sx, sy)
    assert len(reachable) == game_map.floor_count


def test_small_map_is_a_perfect_maze():
    # 11x11 has no rooms and no lights: every odd cell plus one passage per tree edge.
    game_map = generate_layout(11, 11, GameRNG(seed=3))
    odd_cells = game_map.tiles[1::2, 1::2]
    assert np.all(odd_cells == TILE_ID_FLOOR)
    assert np.all(game_map.tiles[0::2, 0::2] == TILE_ID_WALL)
    assert game_map.floor_count == 25 + 24
    assert not np.any(game_map.light)


def test_light_field_bounds():
    game_map = generate_layout(46, 30, GameRNG(seed=42))
    assert np.all(game_map.light >= 0.0)
    assert np.all(game_map.light <= 1.0)
    assert np.all(game_map.light[game_map.tiles == TILE_ID_WALL] == 0.0)


def test_some_levels_are_lit():
    lit = [
        generate_layout(46, 30, GameRNG(seed=seed)).light.max() for seed in range(10)
    ]
    assert max(lit) == 1.0


def test_generation_starts_unseen_and_empty():
    game_map = generate_layout(46, 30, GameRNG(seed=42))
    assert not game_map.seen.any()
    assert not game_map.goal.any()
    assert not game_map.items.any()


def test_rooms_add_floor_beyond_the_maze():
    # The bare maze is 23*15 cells plus 344 passages; every room covers at
    # least one even/even wall cell, so rooms always add floor.
    game_map = generate_layout(46, 30, GameRNG(seed=42))
    assert game_map.floor_count > 23 * 15 + (23 * 15 - 1)


@pytest.mark.parametrize("size", [(2, 10), (10, 2), (0, 0)])
def test_too_small_map_raises(size):
    with pytest.raises(ValueError):
        generate_layout(size[0], size[1], GameRNG(seed=1))
