"""Seeded linear congruential stream used by the synthetic generator.

The reference dataset depends on the exact sequence of draws, not only on
the seed, so the stream is an explicit object handed through generation
instead of ``random.Random``.
"""

from __future__ import annotations

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0x7FFFFFFF  # 2**31 - 1


class LinearCongruentialRandom:
    """Deterministic pseudo-random stream.

    Each call to :meth:`random` advances
    ``state = (state * 1103515245 + 12345) mod 2**31`` and returns
    ``state / (2**31 - 1)``.

    Examples
    --------
    >>> a = LinearCongruentialRandom(42)
    >>> b = LinearCongruentialRandom(42)
    >>> [a.random() for _ in range(3)] == [b.random() for _ in range(3)]
    True
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & LCG_MASK
        self.draws = 0

    @property
    def state(self) -> int:
        return self._state

    def random(self) -> float:
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK
        self.draws += 1
        return self._state / LCG_MASK

    def spread(self, low: float, width: float) -> float:
        """Draw once and map the value onto ``[low, low + width)``.

        Takes the width rather than the upper bound: ``1.05 - 0.95`` is not
        exactly ``0.1`` in binary floating point and would perturb the
        reference values.
        """
        return low + self.random() * width
