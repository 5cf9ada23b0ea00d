# game/world/lighting.py
"""
Static light field and per-turn flicker.
Light sources are stamped once after carving with a Numba kernel; the
flicker pass is a pure transformation that returns a new light array.
"""

import math
from dataclasses import dataclass

import numba
import numpy as np
import structlog

from game_rng import GameRNG
from game.world.game_map import TILE_ID_FLOOR, GameMap

log = structlog.get_logger(__name__)

# --- Configuration Constants ---
LIGHT_RADIUS: int = 3
FLICKER_AMPLITUDE: float = 0.05
FLICKER_MIN: float = 0.1
FLICKER_MAX: float = 1.0


@dataclass(frozen=True)
class LightSource:
    """A fluorescent panel stamped onto the light field."""
    x: int
    y: int
    radius: int = LIGHT_RADIUS


@numba.njit(cache=True)
def _stamp_light(
    tiles: np.ndarray, light: np.ndarray, lx: int, ly: int, radius: int
) -> int:
    """Brighten floor cells around (lx, ly). Returns the number of cells raised."""
    height, width = tiles.shape
    raised = 0
    for dy in range(-radius, radius + 1):
        ny = ly + dy
        if ny < 0 or ny >= height:
            continue
        for dx in range(-radius, radius + 1):
            nx = lx + dx
            if nx < 0 or nx >= width:
                continue
            if tiles[ny, nx] != TILE_ID_FLOOR:
                continue
            d = math.sqrt(dx * dx + dy * dy)
            if d >= radius:
                continue
            value = min(max(1.0 - d / radius, 0.0), 1.0)
            if value > light[ny, nx]:
                light[ny, nx] = value
                raised += 1
    return raised


def apply_light_source(game_map: GameMap, source: LightSource) -> bool:
    """Stamp ``source`` onto the map. Sources on walls are ignored."""
    if not game_map.is_walkable(source.x, source.y):
        log.debug("Light source on wall skipped", pos=(source.x, source.y))
        return False
    raised = _stamp_light(
        game_map.tiles, game_map.light, source.x, source.y, source.radius
    )
    log.debug("Light source applied", pos=(source.x, source.y), raised=raised)
    return True


def advance_lighting(
    light: np.ndarray, rng: GameRNG, amplitude: float = FLICKER_AMPLITUDE
) -> np.ndarray:
    """Return a flickered copy of ``light``.

    Every lit cell (``light > 0``), in row-major order, consumes one draw and
    is nudged by up to ``amplitude / 2`` either way, clamped to
    ``[FLICKER_MIN, FLICKER_MAX]``. Unlit cells stay dark.
    """
    flickered = light.copy()
    lit = flickered > 0.0
    count = int(np.count_nonzero(lit))
    if count == 0:
        return flickered
    deltas = np.array([rng.next() - 0.5 for _ in range(count)], dtype=np.float64)
    flickered[lit] = np.clip(
        flickered[lit] + deltas * amplitude, FLICKER_MIN, FLICKER_MAX
    )
    return flickered
