"""
Mersenne Twister random source.
"""

import random

from workstealing.random.base import Random

# Same bound PHP's mt_getrandmax() reports, fits a signed 32-bit int
MT_MAX_INT = 2**31 - 1


class MtRandom(Random):
    """
    Random source backed by a private `random.Random` (Mersenne Twister).

    Each instance owns its generator, so seeding one never disturbs another
    or the module-level `random` state.
    """

    def __init__(self, seed: int | None = None):
        self._rng = random.Random()
        self.seed(seed)

    def seed(self, seed: int | None = None) -> None:
        self._rng.seed(seed)

    def max_int(self) -> int:
        return MT_MAX_INT

    def next_int(self, max: int | None = None) -> int:
        if max is None:
            max = MT_MAX_INT
        elif max <= 0:
            raise ValueError(f"Maximum value must be positive (supplied: {max})")

        return self._rng.randrange(max)
