"""Hound pursuit AI.

Hounds take a greedy step toward a target each turn they act.  A hound
acts when its cooldown has run out and it either senses the target nearby
or passes a wander check.  Candidate steps are shuffled before a stable
sort by distance so ties break randomly.  There is no path planning: a
hound can get stuck behind walls, and hounds ignore each other entirely.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Sequence, Tuple

import structlog

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from game.world.game_map import GameMap
    from game_rng import GameRNG

log = structlog.get_logger()

SENSE_RADIUS = 10
WANDER_CHANCE = 0.3

_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True)
class Hound:
    x: int
    y: int
    cooldown: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y


def _distance(x: int, y: int, target: Tuple[int, int]) -> int:
    return abs(x - target[0]) + abs(y - target[1])


def step_toward(
    game_map: "GameMap",
    hound: Hound,
    target: Tuple[int, int],
    rng: "GameRNG",
) -> Hound:
    """Move one tile toward ``target`` if any neighbouring floor allows it."""
    candidates = rng.shuffled(_DIRECTIONS)
    candidates.sort(key=lambda d: _distance(hound.x + d[0], hound.y + d[1], target))
    for dx, dy in candidates:
        nx, ny = hound.x + dx, hound.y + dy
        if game_map.is_walkable(nx, ny):
            return replace(hound, x=nx, y=ny)
    log.debug("Hound boxed in", pos=hound.position)
    return hound


def advance_hound(
    game_map: "GameMap",
    hound: Hound,
    target: Tuple[int, int],
    rng: "GameRNG",
    sense_radius: int = SENSE_RADIUS,
    wander_chance: float = WANDER_CHANCE,
) -> Hound:
    """Resolve one turn for a single hound and return its new state."""
    if hound.cooldown > 0:
        return replace(hound, cooldown=hound.cooldown - 1)

    distance = _distance(hound.x, hound.y, target)
    if distance < sense_radius or rng.chance(wander_chance):
        return step_toward(game_map, hound, target, rng)
    return hound


def advance_hounds(
    game_map: "GameMap",
    hounds: Sequence[Hound],
    target: Tuple[int, int],
    rng: "GameRNG",
    sense_radius: int = SENSE_RADIUS,
    wander_chance: float = WANDER_CHANCE,
) -> Tuple[Hound, ...]:
    """Advance every hound in order; draws happen in the same order."""
    moved = tuple(
        advance_hound(game_map, hound, target, rng, sense_radius, wander_chance)
        for hound in hounds
    )
    log.debug(
        "Hounds processed",
        target=target,
        positions=[hound.position for hound in moved],
    )
    return moved
