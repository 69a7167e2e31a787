"""Immutable snapshot of every player, for init and gameUpdate messages."""

from __future__ import annotations

from dataclasses import dataclass

from arena.core.models import Player
from arena.core.registry import PlayerRegistry


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only copy of the registry at one instant.

    Players are copied so that later mutation cannot leak into a message
    that is still being serialized.
    """

    sequence: int
    players: tuple[Player, ...]

    @classmethod
    def from_registry(cls, registry: PlayerRegistry, sequence: int = 0) -> Snapshot:
        return cls(sequence=sequence, players=tuple(p.copy() for p in registry.all()))

    def ids(self) -> list[str]:
        return [p.id for p in self.players]

    def __len__(self) -> int:
        return len(self.players)
