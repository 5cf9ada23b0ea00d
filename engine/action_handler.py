# engine/action_handler.py
"""
Translates player action dictionaries into Turn Engine calls.
Only movement and drinking reach the game state from here; anything else
is rejected without touching the session.
"""
from typing import Any, Dict, Tuple

import structlog

from game.constants import DIRECTIONS
from game.game_state import GameState

log = structlog.get_logger(__name__)


def _resolve_move_delta(action: Dict[str, Any]) -> Tuple[int, int] | None:
    """Read a move delta from either a named direction or dx/dy fields."""
    direction = action.get("direction")
    if direction is not None:
        delta = DIRECTIONS.get(str(direction).lower())
        if delta is None:
            log.warning("Unknown move direction", direction=direction)
        return delta
    if "dx" in action or "dy" in action:
        return action.get("dx", 0), action.get("dy", 0)
    log.warning("Move action without direction", action=action)
    return None


def process_player_action(action: Dict[str, Any], gs: GameState) -> bool:
    """
    Processes a player action dictionary and performs it.
    Returns True if the action changed the session, False if it was rejected.
    """
    if not isinstance(action, dict):
        log.warning("Rejected malformed action", action=action)
        return False

    action_type = action.get("type")
    log.debug(
        "ActionHandler: Processing action type",
        action_type=action_type,
        action_details=action,
    )

    match action_type:
        case "move":
            delta = _resolve_move_delta(action)
            if delta is None:
                return False
            return gs.apply_move(*delta)

        case "drink":
            return gs.consume_item()

        case _:
            log.warning("Unknown action type received", action_type=action_type)
            return False
