"""Attack strategy pattern.

Abstract AttackStrategy with one concrete subclass per combat model.
To add a new model:
  1. Create a new AttackStrategy subclass.
  2. Register it in ATTACK_STRATEGIES.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from arena.core.enums import CombatMode

if TYPE_CHECKING:
    from arena.actions.combat import CombatResolver
    from arena.config import AttackSpec
    from arena.core.models import Player
    from arena.core.events import GameEvent


class AttackStrategy(ABC):
    """Decides who an attack hits and what each hit does.

    Targets are visited in registry order and each hit is applied before the
    next target is considered.
    """

    @property
    @abstractmethod
    def mode(self) -> CombatMode:
        """The CombatMode this strategy implements."""

    @abstractmethod
    def strike(self, resolver: CombatResolver, attacker: Player, spec: AttackSpec) -> list[GameEvent]:
        """Apply the attack to every target in reach and return the events."""


class DamageStrategy(AttackStrategy):
    """Typed attacks deal fixed damage to every player inside the attack radius."""

    @property
    def mode(self) -> CombatMode:
        return CombatMode.DAMAGE

    def strike(self, resolver: CombatResolver, attacker: Player, spec: AttackSpec) -> list[GameEvent]:
        reach = resolver.config.attack_range + spec.range_bonus
        events: list[GameEvent] = []
        for target in resolver.registry.all():
            if target.id == attacker.id:
                continue
            if attacker.distance_to(target) < reach:
                events.append(resolver.apply_damage(attacker, target, spec.damage))
        return events


class ProximityKillStrategy(AttackStrategy):
    """Any attack instantly kills every player within touching distance plus kill_distance."""

    @property
    def mode(self) -> CombatMode:
        return CombatMode.PROXIMITY

    def strike(self, resolver: CombatResolver, attacker: Player, spec: AttackSpec) -> list[GameEvent]:
        events: list[GameEvent] = []
        for target in resolver.registry.all():
            if target.id == attacker.id:
                continue
            reach = resolver.config.kill_distance + (attacker.size + target.size) / 2
            if attacker.distance_to(target) < reach:
                events.append(resolver.kill(attacker, target))
        return events


ATTACK_STRATEGIES: dict[CombatMode, AttackStrategy] = {
    CombatMode.DAMAGE: DamageStrategy(),
    CombatMode.PROXIMITY: ProximityKillStrategy(),
}


def get_attack_strategy(mode: CombatMode) -> AttackStrategy:
    """Look up the strategy for a combat mode."""
    try:
        return ATTACK_STRATEGIES[mode]
    except KeyError:
        raise ValueError(f"no attack strategy registered for {mode!r}") from None
