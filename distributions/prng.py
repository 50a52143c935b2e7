"""
Seeded xorshift generator over two 32-bit words.

Reproducibility is the whole point: two instances built from the same seed
return bit-identical streams. All arithmetic wraps at 2**32. Not suitable
for anything security-related, and not safe to share between runs.
"""

from __future__ import annotations

from core.config import PRNG_WARMUP

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0


class SeededRandom:
    """
    Usage:
        rng = SeededRandom(42)
        u = rng.next()   # float in [0, 1)
    """

    __slots__ = ("_s0", "_s1")

    def __init__(self, seed: int):
        self._s0 = seed & _MASK32
        self._s1 = (seed * 1812433253 + 1) & _MASK32
        # the second word is a linear function of the seed; mix before use
        for _ in range(PRNG_WARMUP):
            self.next()

    def next(self) -> float:
        x = self._s0
        y = self._s1
        self._s0 = y
        x ^= (x << 23) & _MASK32
        x ^= x >> 17
        x ^= y
        x ^= y >> 26
        self._s1 = x
        return y / _TWO_POW_32

    @property
    def state(self) -> tuple:
        return self._s0, self._s1
