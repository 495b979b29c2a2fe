"""
Seeded RNG - Linear congruential generator shared by every peer.

Same seed + same sequence of calls = identical results on every peer.

This is NOT a cryptographic generator and its low bits are weak.
That is acceptable: the goal is a fair, reproducible deal, not
unpredictability. Changing the arithmetic in any way breaks
determinism across peers, so the constants below are fixed.
"""

from __future__ import annotations
from typing import Sequence, TypeVar

T = TypeVar("T")

MULTIPLIER = 1103515245
INCREMENT = 12345
MASK = 0x7FFFFFFF


class SeededRNG:
    """
    Deterministic pseudo-random sequence from a 32-bit seed.

    Usage:
        rng = SeededRNG(42)
        deck = rng.shuffle(deck)
        card = rng.pick(deck)
    """

    def __init__(self, seed: int):
        self.seed = seed & 0xFFFFFFFF
        self._state = self.seed

    def next(self) -> float:
        """Advance the generator and return a value in [0, 1]."""
        # Evaluated in IEEE doubles to match JavaScript peers bit for bit.
        value = float(self._state) * MULTIPLIER + INCREMENT
        self._state = int(value) & MASK
        return self._state / MASK

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """
        Return a shuffled copy of items (Fisher-Yates, last index down to 1).

        The input is not modified.
        """
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            # next() may return exactly 1.0 when the state hits MASK
            j = min(int(self.next() * (i + 1)), i)
            result[i], result[j] = result[j], result[i]
        return result

    def pick(self, items: Sequence[T]) -> T:
        """Pick one element."""
        if not items:
            raise ValueError("Cannot pick from an empty sequence")
        index = min(int(self.next() * len(items)), len(items) - 1)
        return items[index]

    def range(self, low: int, high: int) -> int:
        """Integer in [low, high], both ends inclusive."""
        if high < low:
            raise ValueError(f"Empty range: {low}..{high}")
        return min(int(self.next() * (high - low + 1)) + low, high)
