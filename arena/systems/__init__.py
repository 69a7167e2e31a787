"""Engine support systems."""

from arena.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG"]
