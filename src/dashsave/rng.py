from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional


@dataclass
class RandomProvider:
    """
    Thin wrapper around random.Random to make RNG deterministic and injectable
    for tests while avoiding global state.
    """

    seed: Optional[int] = None

    def __post_init__(self):
        self._rng = random.Random(self.seed)

    def randrange(self, stop: int) -> int:
        """Return a uniform integer N such that 0 <= N < stop."""
        if stop <= 0:
            raise ValueError("randrange() needs a positive bound")
        return self._rng.randrange(stop)
