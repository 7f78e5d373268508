"""Mining-time randomness.

All trucks in a run share one sampler, and draws happen in fixed truck
order, so a seeded sampler makes the whole run reproducible.
"""

import random
from typing import Optional, Protocol

from miningsim.models.config import MAX_MINING_TIME, MIN_MINING_TIME


class DurationSampler(Protocol):
    """Anything that can produce a mining duration in ticks."""

    def sample(self) -> int:
        ...


class MiningTimeSampler:
    """Uniform integer mining durations over an inclusive tick range.

    Args:
        seed: RNG seed. None seeds from the operating system's entropy
            source, so each run differs.
        low: Shortest duration in ticks (inclusive)
        high: Longest duration in ticks (inclusive)
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        low: int = MIN_MINING_TIME,
        high: int = MAX_MINING_TIME,
    ):
        if low < 1 or high < low:
            raise ValueError(f"Invalid mining time range [{low}, {high}]")
        self.seed = seed
        self.low = low
        self.high = high
        self._rng = random.Random(seed)

    def sample(self) -> int:
        """Draw the next mining duration."""
        return self._rng.randint(self.low, self.high)

    def __repr__(self) -> str:
        return f"MiningTimeSampler(seed={self.seed}, range=[{self.low}, {self.high}])"
