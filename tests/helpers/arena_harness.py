"""ArenaHarness: test fixture for engine-level scenarios.

Builds a GameEngine with a fixed seed and a controllable clock, so cooldowns
and respawn points are reproducible.

Usage:
    arena = ArenaHarness()
    a = arena.join("alice", at=(100, 100))
    b = arena.join("bob", at=(120, 100))
    events = arena.attack(a, "punch")
    assert b.health == 75
"""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from arena.config import ArenaConfig
from arena.core.enums import CombatMode, OutboundType
from arena.core.events import GameEvent
from arena.core.models import Player
from arena.engine.game_engine import GameEngine


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 10_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class ArenaHarness:
    """Engine plus clock, with helpers for placing and driving players."""

    def __init__(self, mode: CombatMode | str = CombatMode.DAMAGE, seed: int = 7, **overrides) -> None:
        self.config = ArenaConfig.preset(mode, world_seed=seed, **overrides)
        self.clock = FakeClock()
        self.engine = GameEngine(self.config, clock=self.clock)

    @property
    def registry(self):
        return self.engine.registry

    def join(self, name: str | None = None, at: tuple[float, float] | None = None) -> Player:
        player, _events = self.engine.join(name)
        if at is not None:
            self.place(player, *at)
        return player

    @staticmethod
    def place(player: Player, x: float, y: float) -> None:
        player.x, player.y = x, y

    def attack(self, player: Player, attack_type: str | None = None) -> list[GameEvent]:
        return self.engine.combat.resolve(player, attack_type)

    def in_bounds(self, player: Player) -> bool:
        half = player.size / 2
        return (
            half <= player.x <= self.config.map_width - half
            and half <= player.y <= self.config.map_height - half
        )


def of_type(events: list[GameEvent], kind: OutboundType) -> list[GameEvent]:
    return [e for e in events if e.type == kind]


def types(events: list[GameEvent]) -> list[OutboundType]:
    return [e.type for e in events]
