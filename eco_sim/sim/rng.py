# eco_sim/sim/rng.py
import random


class RNG:
    """Seedable random source. Each simulation owns one and passes it to the engine."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def seed(self, s: int):
        self._rng.seed(s)

    def random(self) -> float:
        return self._rng.random()

    def randrange(self, start: int, stop: int | None = None) -> int:
        if stop is None:
            return self._rng.randrange(start)
        return self._rng.randrange(start, stop)
