import numbers
import numpy as np

_SEED_MASK = (1 << 64) - 1


class RandomSource:
    """
    Seeded source of uniform floats, owned by one sampling run.

    Wraps a numpy Generator (PCG64). Seeds are 64-bit integers; negative
    seeds are taken modulo 2**64 so that signed and unsigned spellings of the
    same bits give the same stream.
    """

    def __init__(self, seed: int):
        if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
            raise ValueError(f"seed must be an integer, got {seed!r}")
        self.seed = int(seed) & _SEED_MASK
        self._rng = np.random.default_rng(self.seed)

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._rng.random())

    def next_symmetric(self) -> float:
        """Uniform float in [-1, 1)."""
        return self.next_float() * 2.0 - 1.0
