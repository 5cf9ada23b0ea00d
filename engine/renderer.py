# engine/renderer.py
"""
Text renderer for session snapshots.
Cells the player has not seen stay blank unless ``reveal_all`` is set
(the minimap view); the core never decides what is safe to reveal.
"""
from typing import List

import numpy as np
import structlog

from game.constants import Outcome
from game.game_state import GameSnapshot
from game.world.game_map import ITEM_ALMOND_WATER, TILE_ID_WALL

log = structlog.get_logger()

GLYPH_UNSEEN = " "
GLYPH_WALL = "#"
GLYPH_FLOOR_DARK = "."
GLYPH_FLOOR_LIT = ":"
GLYPH_PLAYER = "@"
GLYPH_HOUND = "h"
GLYPH_EXIT = ">"
GLYPH_ALMOND_WATER = "!"

LIT_GLYPH_THRESHOLD = 0.4

_OUTCOME_LABELS = {
    Outcome.IN_PROGRESS: "",
    Outcome.WON: "ESCAPED",
    Outcome.LOST: "DEAD",
}


def _glyph_grid(snapshot: GameSnapshot, reveal_all: bool) -> np.ndarray:
    game_map = snapshot.game_map
    grid = np.full((game_map.height, game_map.width), GLYPH_FLOOR_DARK, dtype="<U1")
    grid[game_map.light > LIT_GLYPH_THRESHOLD] = GLYPH_FLOOR_LIT
    grid[game_map.tiles == TILE_ID_WALL] = GLYPH_WALL
    grid[game_map.items == ITEM_ALMOND_WATER] = GLYPH_ALMOND_WATER
    grid[game_map.goal] = GLYPH_EXIT
    for hx, hy in snapshot.hounds:
        grid[hy, hx] = GLYPH_HOUND
    px, py = snapshot.player
    grid[py, px] = GLYPH_PLAYER
    if not reveal_all:
        grid[~game_map.seen] = GLYPH_UNSEEN
    return grid


def render_text(snapshot: GameSnapshot, reveal_all: bool = False) -> str:
    """Render the whole map as lines of glyphs."""
    grid = _glyph_grid(snapshot, reveal_all)
    lines: List[str] = ["".join(row) for row in grid]
    log.debug("Rendered map", reveal_all=reveal_all, turn=snapshot.turn_count)
    return "\n".join(lines)


def render_status(snapshot: GameSnapshot) -> str:
    """One-line HUD: sanity, bottles, turn and outcome."""
    parts = [
        f"Sanity: {snapshot.sanity:3d}",
        f"Almond Water: {snapshot.inventory}",
        f"Turn: {snapshot.turn_count}",
    ]
    label = _OUTCOME_LABELS[snapshot.outcome]
    if label:
        parts.append(label)
    return " | ".join(parts)
