# game/world/placement.py
"""Spawn, exit, Almond Water and hound placement on a generated map.

Placement samples from a pool of floor coordinates taken row by row.  Every
pick removes its coordinate from the pool, except the exit search which
samples with replacement and leaves the pool alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import structlog

from game_rng import GameRNG
from game.ai.hound import Hound
from game.world.game_map import ITEM_ALMOND_WATER, GameMap

log = structlog.get_logger()

GOAL_SAMPLES = 200
MIN_ITEMS = 5
FLOOR_PER_ITEM = 120
MIN_HOUNDS = 1
FLOOR_PER_HOUND = 800
MAX_HOUND_COOLDOWN = 2


@dataclass(frozen=True)
class Placement:
    """Where everything ended up for a freshly generated level."""
    player: Tuple[int, int]
    goal: Tuple[int, int]
    items: Tuple[Tuple[int, int], ...]
    hounds: Tuple[Hound, ...]


def manhattan(ax: int, ay: int, bx: int, by: int) -> int:
    return abs(ax - bx) + abs(ay - by)


def _pick(pool: List[Tuple[int, int]], rng: GameRNG) -> Tuple[int, int]:
    return pool.pop(rng.get_index(len(pool)))


def _find_goal(
    pool: List[Tuple[int, int]],
    spawn: Tuple[int, int],
    rng: GameRNG,
    samples: int,
) -> Tuple[int, int]:
    """Best of ``samples`` random candidates by distance; ties keep the first."""
    px, py = spawn
    best = spawn
    best_distance = -1
    for _ in range(samples):
        x, y = pool[rng.get_index(len(pool))]
        distance = manhattan(px, py, x, y)
        if distance > best_distance:
            best_distance = distance
            best = (x, y)
    log.debug("Exit chosen", goal=best, distance=best_distance, samples=samples)
    return best


def place_entities(
    game_map: GameMap, rng: GameRNG, goal_samples: int = GOAL_SAMPLES
) -> Placement:
    """Place the player, exit, items and hounds. Mutates ``game_map``."""
    pool = game_map.floor_positions()
    if len(pool) < 2:
        log.error("Not enough floor to place entities", floor=len(pool))
        raise ValueError("Placement needs at least two floor tiles.")

    spawn = _pick(pool, rng)
    game_map.seen[spawn[1], spawn[0]] = True

    goal = _find_goal(pool, spawn, rng, goal_samples)
    game_map.goal[goal[1], goal[0]] = True

    item_count = max(MIN_ITEMS, len(pool) // FLOOR_PER_ITEM)
    items: List[Tuple[int, int]] = []
    for _ in range(item_count):
        if not pool:
            log.warning("Floor pool exhausted while placing items", placed=len(items))
            break
        x, y = _pick(pool, rng)
        if game_map.goal[y, x]:
            continue
        game_map.items[y, x] = ITEM_ALMOND_WATER
        items.append((x, y))

    hound_count = max(MIN_HOUNDS, len(pool) // FLOOR_PER_HOUND)
    hounds: List[Hound] = []
    for _ in range(hound_count):
        if not pool:
            log.warning("Floor pool exhausted while placing hounds", placed=len(hounds))
            break
        x, y = _pick(pool, rng)
        hounds.append(Hound(x, y, rng.get_int(0, MAX_HOUND_COOLDOWN)))

    log.info(
        "Entities placed",
        player=spawn,
        goal=goal,
        items=len(items),
        hounds=len(hounds),
    )
    return Placement(
        player=spawn, goal=goal, items=tuple(items), hounds=tuple(hounds)
    )
