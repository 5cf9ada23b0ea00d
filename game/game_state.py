# game/game_state.py
from dataclasses import dataclass
from numbers import Integral
from typing import Tuple

import structlog

from game_rng import GameRNG, random_seed
from game.ai.hound import Hound, advance_hounds
from game.constants import (
    DEFAULT_MAP_HEIGHT,
    DEFAULT_MAP_WIDTH,
    DIRECTIONS,
    EndReason,
    GameRules,
    Outcome,
)
from game.world.game_map import ITEM_ALMOND_WATER, ITEM_NONE, TILE_ID_WALL, GameMap
from game.world.lighting import advance_lighting
from game.world.placement import Placement, place_entities
from game.world.procgen import generate_layout

log = structlog.get_logger()

MAX_MESSAGES = 50

COLOR_INFO = (255, 255, 255)
COLOR_GOOD = (0, 255, 0)
COLOR_WARN = (255, 255, 0)
COLOR_BAD = (255, 0, 0)

_UNIT_STEPS = frozenset(DIRECTIONS.values())


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a session handed to renderers after each action."""
    seed: int
    game_map: GameMap
    player: Tuple[int, int]
    hounds: Tuple[Tuple[int, int], ...]
    sanity: int
    inventory: int
    turn_count: int
    outcome: Outcome
    end_reason: EndReason | None
    messages: Tuple[str, ...]

    @property
    def width(self) -> int:
        return self.game_map.width

    @property
    def height(self) -> int:
        return self.game_map.height


def _frozen_map(game_map: GameMap) -> GameMap:
    clone = game_map.copy()
    for layer in (clone.tiles, clone.light, clone.seen, clone.items, clone.goal):
        layer.setflags(write=False)
    return clone


def _is_unit_step(dx, dy) -> bool:
    for value in (dx, dy):
        if isinstance(value, bool) or not isinstance(value, Integral):
            return False
    return (int(dx), int(dy)) in _UNIT_STEPS


class GameState:
    """One Level 0 session: map, player, hounds and the resources between them.

    The state owns its map and RNG stream.  ``apply_move`` and
    ``consume_item`` validate everything before touching state, so each call
    either resolves completely or leaves the session exactly as it was.
    Once the outcome is ``WON`` or ``LOST`` both calls are no-ops.
    """

    def __init__(
        self,
        game_map: GameMap,
        placement: Placement,
        rng: GameRNG,
        rules: GameRules | None = None,
    ):
        if not isinstance(game_map, GameMap):
            raise TypeError("GameState requires a valid GameMap instance.")
        if not game_map.is_walkable(*placement.player):
            raise ValueError("Player must start on a floor tile.")

        self.game_map: GameMap = game_map
        self.rng: GameRNG = rng
        self.rules: GameRules = rules or GameRules()
        self.seed: int = rng.initial_seed

        self._player: Tuple[int, int] = placement.player
        self._hounds: Tuple[Hound, ...] = tuple(placement.hounds)
        self.sanity: int = self.rules.max_sanity
        self.inventory: int = 0
        self.turn_count: int = 0
        self.outcome: Outcome = Outcome.IN_PROGRESS
        self.end_reason: EndReason | None = None
        self.message_log: list[tuple[str, tuple[int, int, int]]] = []

        self.add_message(
            "The fluorescent lights buzz over damp, yellowed carpet...", COLOR_WARN
        )
        self.add_message("Gather Almond Water and find the exit. Beware the Hounds!")
        log.info(
            "Game state initialized",
            seed=self.seed,
            map_size=f"{game_map.width}x{game_map.height}",
            player=self._player,
            hounds=len(self._hounds),
        )

    @property
    def map_width(self) -> int:
        return self.game_map.width

    @property
    def map_height(self) -> int:
        return self.game_map.height

    @property
    def player_position(self) -> Tuple[int, int]:
        return self._player

    @property
    def hounds(self) -> Tuple[Hound, ...]:
        return self._hounds

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.IN_PROGRESS

    def add_message(
        self, text: str, color: tuple[int, int, int] = COLOR_INFO
    ) -> None:
        """Adds a message to the game log."""
        self.message_log.append((text, color))
        if len(self.message_log) > MAX_MESSAGES:
            self.message_log = self.message_log[-MAX_MESSAGES:]
        log.debug("Message added", message=text)

    def _clamp_sanity(self, value: int) -> int:
        return max(0, min(self.rules.max_sanity, value))

    def _end(self, outcome: Outcome, reason: EndReason) -> None:
        self.outcome = outcome
        self.end_reason = reason
        log.info(
            "Session ended",
            outcome=outcome.value,
            reason=reason.value,
            turn=self.turn_count,
            sanity=self.sanity,
        )

    # --- Player actions ---
    def apply_move(self, dx: int, dy: int) -> bool:
        """Resolve one movement turn. Returns True if a turn was taken."""
        if self.is_over:
            log.debug("Move ignored: session over", outcome=self.outcome.value)
            return False
        if not _is_unit_step(dx, dy):
            log.debug("Move ignored: not a unit step", dx=dx, dy=dy)
            return False

        px, py = self._player
        nx, ny = self.game_map.clamp(px + int(dx), py + int(dy))
        if self.game_map.tiles[ny, nx] == TILE_ID_WALL:
            log.debug("Move blocked by wall", target=(nx, ny))
            return False

        self.game_map.seen[ny, nx] = True
        picked_up = False
        if self.game_map.items[ny, nx] == ITEM_ALMOND_WATER:
            self.game_map.items[ny, nx] = ITEM_NONE
            self.inventory += 1
            picked_up = True
            self.add_message("You picked up a bottle of Almond Water (+1).", COLOR_GOOD)

        if self.game_map.goal[ny, nx]:
            self._player = (nx, ny)
            self.turn_count += 1
            self.add_message("You found the exit! Press R to start over.", COLOR_GOOD)
            self._end(Outcome.WON, EndReason.EXIT_FOUND)
            return True

        self._player = (nx, ny)
        light = float(self.game_map.light[ny, nx])
        drain = (
            self.rules.lit_drain
            if light > self.rules.lit_threshold
            else self.rules.dark_drain
        )
        if drain >= self.rules.dark_drain and not picked_up:
            self.add_message(f"Unease seeps in from the dark (-{drain}).", COLOR_WARN)

        self._hounds = advance_hounds(
            self.game_map,
            self._hounds,
            self._player,
            self.rng,
            self.rules.hound_sense_radius,
            self.rules.hound_wander_chance,
        )
        if any(hound.position == self._player for hound in self._hounds):
            self.add_message("A Hound caught you... Press R to start over.", COLOR_BAD)
            self._end(Outcome.LOST, EndReason.CAUGHT)
            return True

        self.sanity = self._clamp_sanity(self.sanity - drain)
        if self.sanity <= 0:
            self.add_message("Your mind gives way... Press R to start over.", COLOR_BAD)
            self._end(Outcome.LOST, EndReason.SANITY_DEPLETED)
            return True

        self.turn_count += 1
        log.debug(
            "Turn resolved",
            turn=self.turn_count,
            player=self._player,
            light=light,
            drain=drain,
            sanity=self.sanity,
        )
        self.advance_lighting()
        return True

    def consume_item(self) -> bool:
        """Drink one bottle of Almond Water. Does not take a turn."""
        if self.is_over:
            log.debug("Drink ignored: session over", outcome=self.outcome.value)
            return False
        if self.inventory <= 0:
            log.debug("Drink ignored: no Almond Water")
            return False
        self.inventory -= 1
        self.sanity = self._clamp_sanity(self.sanity + self.rules.drink_restore)
        self.add_message(
            f"You drink the Almond Water. Your head clears (+{self.rules.drink_restore}).",
            COLOR_GOOD,
        )
        log.debug("Almond Water consumed", sanity=self.sanity, left=self.inventory)
        return True

    # --- Ambient ---
    def advance_lighting(self) -> None:
        """Flicker the lights for the next tick."""
        if not self.rules.flicker_enabled:
            return
        self.game_map.light = advance_lighting(
            self.game_map.light, self.rng, self.rules.flicker_amplitude
        )

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            seed=self.seed,
            game_map=_frozen_map(self.game_map),
            player=self._player,
            hounds=tuple(hound.position for hound in self._hounds),
            sanity=self.sanity,
            inventory=self.inventory,
            turn_count=self.turn_count,
            outcome=self.outcome,
            end_reason=self.end_reason,
            messages=tuple(text for text, _ in self.message_log),
        )


def create_session(
    seed: int | None = None,
    map_width: int = DEFAULT_MAP_WIDTH,
    map_height: int = DEFAULT_MAP_HEIGHT,
    rules: GameRules | None = None,
) -> GameState:
    """Generate a fresh level from ``seed`` and return its session."""
    rules = rules or GameRules()
    if seed is None:
        seed = random_seed()
    rng = GameRNG(seed=seed)
    log.info("Creating session", seed=seed, width=map_width, height=map_height)
    game_map = generate_layout(map_width, map_height, rng)
    placement = place_entities(game_map, rng, goal_samples=rules.goal_samples)
    return GameState(game_map, placement, rng, rules)
