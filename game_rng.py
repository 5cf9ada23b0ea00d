from __future__ import annotations

"""Deterministic GameRNG module.

Every random decision in a session (maze carving, rooms, light sources,
entity placement, hound tie-breaks and light flicker) is drawn from one
:class:`GameRNG` instance.  The generator is Mulberry32: a 32-bit state that
advances by a fixed increment and is mixed into a float in ``[0, 1)``.  Only
32-bit integer arithmetic is involved, so the sequence for a given seed is
identical on every platform.

The helpers document exactly how many draws they consume:

* ``get_float``, ``get_int``, ``get_index`` and ``chance`` use one draw each.
* ``shuffle`` uses ``len(seq) - 1`` draws (Fisher-Yates, last index first).
"""

import math
import random
from typing import Any, Dict, List, MutableSequence, Optional, Sequence

import structlog

log = structlog.get_logger()

_MASK_32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """Low 32 bits of ``a * b``."""
    return (a * b) & _MASK_32


def normalize_seed(seed: int) -> int:
    """Reduce ``seed`` to the unsigned 32-bit range used as generator state."""
    return int(seed) & _MASK_32


def random_seed() -> int:
    """A fresh seed for a new session when the caller has none."""
    return random.randint(0, 10**9 - 1)


# ---------------------------------------------------------------------------
# RNG implementation
# ---------------------------------------------------------------------------


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random_seed()
        self._state = normalize_seed(self.initial_seed)
        self.draws = 0

    # ------------------------------------------------------------------
    # core stream
    # ------------------------------------------------------------------
    def next(self) -> float:
        """Advance the state and return a float in ``[0, 1)``."""
        self._state = (self._state + _INCREMENT) & _MASK_32
        t = self._state
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK_32
        self.draws += 1
        return ((r ^ (r >> 14)) & _MASK_32) / _TWO_POW_32

    # ------------------------------------------------------------------
    # basic random helpers
    # ------------------------------------------------------------------
    def get_float(self, a: float = 0.0, b: float = 1.0) -> float:
        if a > b:
            raise ValueError("a <= b")
        return a + (b - a) * self.next()

    def get_int(self, a: int, b: int) -> int:
        """Inclusive integer in ``[a, b]``."""
        if a > b:
            raise ValueError("a <= b")
        return math.floor(self.next() * (b - a + 1)) + a

    def get_ints(self, a: int, b: int, count: int) -> List[int]:
        return [self.get_int(a, b) for _ in range(count)]

    def get_index(self, n: int) -> int:
        """Uniform index into a sequence of length ``n``."""
        if n <= 0:
            raise ValueError("n must be positive")
        return math.floor(self.next() * n)

    def chance(self, probability: float) -> bool:
        return self.next() < probability

    # ------------------------------------------------------------------
    # sequence utilities
    # ------------------------------------------------------------------
    def shuffle(self, seq: MutableSequence[Any]) -> None:
        """Shuffle ``seq`` in place."""
        for i in range(len(seq) - 1, 0, -1):
            j = math.floor(self.next() * (i + 1))
            seq[i], seq[j] = seq[j], seq[i]

    def shuffled(self, seq: Sequence[Any]) -> List[Any]:
        """Return a shuffled copy of ``seq``; the input is left untouched."""
        items = list(seq)
        self.shuffle(items)
        return items

    def choice(self, seq: Sequence[Any]) -> Any:
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[self.get_index(len(seq))]

    # ------------------------------------------------------------------
    # state management
    # ------------------------------------------------------------------
    def get_state(self) -> Dict[str, Any]:
        return {
            "state": self._state,
            "initial_seed": self.initial_seed,
            "draws": self.draws,
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        if "state" in state:
            self._state = int(state["state"]) & _MASK_32
        if "initial_seed" in state:
            self.initial_seed = state["initial_seed"]
        if "draws" in state:
            self.draws = int(state["draws"])

    def reset(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random_seed()
        self._state = normalize_seed(self.initial_seed)
        self.draws = 0
        log.debug("GameRNG reset", seed=self.initial_seed)


__all__ = ["GameRNG", "normalize_seed", "random_seed"]
