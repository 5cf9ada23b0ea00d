from game_rng import GameRNG
from game.ai.hound import Hound, advance_hound, advance_hounds, step_toward
from game.world.game_map import TILE_ID_FLOOR, GameMap


def build_map(rows):
    gm = GameMap(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch != "#":
                gm.tiles[y, x] = TILE_ID_FLOOR
    return gm


OPEN_ROOM = [
    "#######",
    "#.....#",
    "#.....#",
    "#.....#",
    "#######",
]


def manhattan(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def test_cooldown_ticks_down_without_moving_or_drawing():
    gm = build_map(OPEN_ROOM)
    rng = GameRNG(seed=1)
    hound = Hound(1, 1, cooldown=2)
    result = advance_hound(gm, hound, (5, 3), rng)
    assert result == Hound(1, 1, cooldown=1)
    assert rng.draws == 0


def test_nearby_hound_closes_distance():
    gm = build_map(OPEN_ROOM)
    hound = Hound(1, 1)
    target = (5, 3)
    result = advance_hound(gm, hound, target, GameRNG(seed=2))
    assert manhattan(result.position, target) == manhattan(hound.position, target) - 1
    assert result.cooldown == 0


def test_hound_respects_walls():
    gm = build_map([
        "#####",
        "#.#.#",
        "#.###",
        "#####",
    ])
    result = step_toward(gm, Hound(1, 1), (3, 1), GameRNG(seed=3))
    # The direct step is a wall; the only open neighbour is below.
    assert result.position == (1, 2)


def test_boxed_in_hound_stays_put():
    gm = build_map([
        "###",
        "#.#",
        "###",
    ])
    hound = Hound(1, 1)
    assert step_toward(gm, hound, (0, 0), GameRNG(seed=4)) is hound


def test_distant_hound_moves_only_on_wander_check():
    rows = ["#" * 30, "#" + "." * 28 + "#", "#" * 30]
    gm = build_map(rows)
    hound = Hound(1, 1)
    target = (28, 1)

    rng = GameRNG(seed=5)
    stays = advance_hound(gm, hound, target, rng, wander_chance=0.0)
    assert stays is hound
    assert rng.draws == 1

    moves = advance_hound(gm, hound, target, GameRNG(seed=5), wander_chance=1.0)
    assert moves.position == (2, 1)


def test_sense_radius_skips_the_wander_draw():
    gm = build_map(OPEN_ROOM)
    rng = GameRNG(seed=6)
    advance_hound(gm, Hound(1, 1), (2, 1), rng, wander_chance=0.0)
    # Only the shuffle of four directions was drawn.
    assert rng.draws == 3


def test_hounds_may_share_a_cell():
    gm = build_map(OPEN_ROOM)
    hounds = (Hound(1, 2), Hound(3, 2))
    moved = advance_hounds(gm, hounds, (2, 2), GameRNG(seed=7))
    assert [h.position for h in moved] == [(2, 2), (2, 2)]


def test_same_seed_same_trajectory():
    gm = build_map(OPEN_ROOM)

    def run(seed):
        rng = GameRNG(seed=seed)
        hounds = (Hound(1, 1), Hound(5, 1, cooldown=1))
        path = []
        for target in [(3, 3), (4, 3), (5, 3), (5, 2)]:
            hounds = advance_hounds(gm, hounds, target, rng)
            path.append(tuple(h.position for h in hounds))
        return path

    assert run(10) == run(10)
