# engine/main_loop.py
from typing import Any, Self

import structlog

from game.constants import GameRules
from game.game_state import GameSnapshot, GameState, create_session
from game_rng import random_seed
from utils.seed_store import SeedStore

from . import action_handler

log = structlog.get_logger()


class MainLoop:
    """
    Owns the current session and routes intents to it.
    Starting a new session replaces the game state wholesale and stores the
    new seed; nothing else carries over between sessions.
    """

    def __init__(
        self: Self,
        map_width: int,
        map_height: int,
        rules: GameRules | None = None,
        seed_store: SeedStore | None = None,
        seed: int | None = None,
    ):
        self.map_width = map_width
        self.map_height = map_height
        self.rules = rules or GameRules()
        self.seed_store = seed_store
        self.reveal_all: bool = False

        if seed is None and seed_store is not None:
            seed = seed_store.load()
        self.game_state: GameState = self.new_session(seed)
        log.info("MainLoop initialized successfully", seed=self.game_state.seed)

    def new_session(self: Self, seed: int | None = None) -> GameState:
        """Discard the current session and generate a new one."""
        if seed is None:
            seed = random_seed()
        self.game_state = create_session(
            seed, self.map_width, self.map_height, self.rules
        )
        if self.seed_store is not None:
            self.seed_store.save(seed)
        return self.game_state

    def toggle_reveal_all(self: Self) -> bool:
        self.reveal_all = not self.reveal_all
        return self.reveal_all

    def handle_action(self: Self, action: dict[str, Any]) -> bool:
        """
        Routes an intent to the session.
        Returns True if the session changed (or was replaced), False otherwise.
        """
        if isinstance(action, dict) and action.get("type") == "new_session":
            seed = action.get("seed")
            if seed is not None and (
                isinstance(seed, bool) or not isinstance(seed, int)
            ):
                log.warning("Rejected new_session with bad seed", seed=seed)
                return False
            self.new_session(seed)
            return True

        gs = self.game_state
        try:
            acted = action_handler.process_player_action(action, gs)
        except Exception as e:
            log.error(
                "Exception during action processing",
                action=action,
                error=str(e),
                exc_info=True,
            )
            gs.add_message("An internal error occurred.", (255, 0, 0))
            return False

        if acted:
            log.debug("Action applied", action=action, turn=gs.turn_count)
        else:
            log.debug("Action had no effect", action=action)
        return acted

    def snapshot(self: Self) -> GameSnapshot:
        return self.game_state.snapshot()
