# utils/seed_store.py
"""Persist the last session seed between runs.

Only the integer seed is stored; replaying a seed regenerates the same level,
so nothing else about a session needs to survive a restart.
"""
from __future__ import annotations

import json
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)


class SeedStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> int | None:
        """Return the stored seed, or None if there is no usable one."""
        if not self.path.is_file():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Could not read seed file", path=str(self.path), error=str(e))
            return None
        seed = data.get("seed") if isinstance(data, dict) else None
        if isinstance(seed, bool) or not isinstance(seed, int):
            log.warning("Seed file holds no integer seed", path=str(self.path))
            return None
        log.debug("Seed loaded", seed=seed)
        return seed

    def save(self, seed: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump({"seed": int(seed)}, f, indent=2)
        log.debug("Seed saved", seed=seed, path=str(self.path))

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
