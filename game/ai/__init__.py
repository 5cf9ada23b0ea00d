"""AI package for the entities that roam Level 0.

Only hounds act on their own; their greedy pursuit rule lives in
:mod:`game.ai.hound`.
"""

from __future__ import annotations

from .hound import Hound, advance_hound, advance_hounds, step_toward

__all__ = ["Hound", "advance_hound", "advance_hounds", "step_toward"]
