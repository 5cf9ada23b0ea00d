from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping

import structlog

log = structlog.get_logger()

DEFAULT_MAP_WIDTH: int = 46
DEFAULT_MAP_HEIGHT: int = 30


class Outcome(Enum):
    """Session lifecycle; WON and LOST are terminal."""

    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class EndReason(Enum):
    """Why a session ended."""

    EXIT_FOUND = "exit_found"
    CAUGHT = "caught"
    SANITY_DEPLETED = "sanity_depleted"


# Unit steps accepted as movement intents.
DIRECTIONS: dict[str, tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


@dataclass(frozen=True)
class GameRules:
    """Tunable gameplay numbers; defaults reproduce the stock Level 0."""

    max_sanity: int = 100
    drink_restore: int = 35
    lit_threshold: float = 0.4
    lit_drain: int = 1
    dark_drain: int = 3
    hound_sense_radius: int = 10
    hound_wander_chance: float = 0.3
    goal_samples: int = 200
    flicker_amplitude: float = 0.05
    flicker_enabled: bool = True

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "GameRules":
        """Build rules from the ``rules`` section of the main config."""
        config = config or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            log.warning("Ignoring unknown rule keys", keys=unknown)
        values = {key: config[key] for key in known if key in config}
        return cls(**values)


__all__ = [
    "DEFAULT_MAP_WIDTH",
    "DEFAULT_MAP_HEIGHT",
    "DIRECTIONS",
    "EndReason",
    "GameRules",
    "Outcome",
]
