"""Player actions: movement clamping and combat resolution."""

from arena.actions.combat import CombatResolver
from arena.actions.move import MovementValidator, clamp_position
from arena.actions.strategies import AttackStrategy, DamageStrategy, ProximityKillStrategy

__all__ = [
    "AttackStrategy",
    "CombatResolver",
    "DamageStrategy",
    "MovementValidator",
    "ProximityKillStrategy",
    "clamp_position",
]
