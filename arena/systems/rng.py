"""Domain-separated seeded RNG using xxhash.

Every draw is a pure function of (seed, domain, key, counter), so a given
seed reproduces the same spawn points, colours and names regardless of the
order in which sessions connect.

Formula: RNG_Value = Hash(WorldSeed, Domain, Key, Counter)
"""

from __future__ import annotations

import secrets
import struct

import xxhash

from arena.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator."""

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int | None = None) -> None:
        self._seed = secrets.randbits(63) if seed is None else seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, counter: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, key, counter)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, counter: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, counter) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, counter: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, counter)
        return low + int(f * (high - low + 1))

    def uniform(self, domain: Domain, key: int, counter: int, low: float, high: float) -> float:
        """Return a deterministic float in [low, high)."""
        return low + self.next_float(domain, key, counter) * (high - low)

    def token(self, domain: Domain, key: int, counter: int, length: int = 6) -> str:
        """Return a short lowercase base-36 token."""
        alphabet = "0123456789abcdefghijklmnopqrstuvwxyz"
        value = self._hash(domain, key, counter)
        chars: list[str] = []
        for _ in range(length):
            value, rem = divmod(value, 36)
            chars.append(alphabet[rem])
        return "".join(chars)
