"""Shared fixtures for miningsim tests."""

import itertools

import pytest


class FixedSampler:
    """Deterministic stand-in for MiningTimeSampler.

    Cycles through the given durations forever.
    """

    def __init__(self, *durations: int):
        self.draws = 0
        self._values = itertools.cycle(durations)

    def sample(self) -> int:
        self.draws += 1
        return next(self._values)


@pytest.fixture
def fixed_sampler():
    """Sampler that always yields the shortest mining time (12 ticks)."""
    return FixedSampler(12)


@pytest.fixture
def make_sampler():
    """Factory for deterministic samplers over arbitrary durations."""
    return FixedSampler
