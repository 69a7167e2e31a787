"""CombatResolver: validates and resolves attack actions.

The combat model (typed damage or proximity kill) is a strategy picked from
configuration; cooldowns, attack animation state, damage application and the
kill transition are shared by both.

Concurrent kills are not merged: if two attacks land lethal hits on the same
victim, each one runs a full kill transition in processing order, and the
second one hits the already-respawned player.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from arena.actions.move import clamp_position
from arena.actions.strategies import get_attack_strategy
from arena.core.enums import OutboundType
from arena.core.events import GameEvent
from arena.protocol.schemas import (
    KillerSchema,
    PlayerAttackedPayload,
    PlayerDamagedPayload,
    PlayerKilledPayload,
    VictimSchema,
)

if TYPE_CHECKING:
    from arena.config import ArenaConfig, AttackSpec
    from arena.core.models import Player
    from arena.core.registry import PlayerRegistry

logger = logging.getLogger(__name__)

DEFAULT_ATTACK = "punch"


class CombatResolver:
    """Resolves ATTACK messages against the registry."""

    __slots__ = ("_config", "_registry", "_clock", "_strategy")

    def __init__(
        self,
        config: ArenaConfig,
        registry: PlayerRegistry,
        clock: Callable[[], float],
    ) -> None:
        self._config = config
        self._registry = registry
        self._clock = clock
        self._strategy = get_attack_strategy(config.combat_mode)

    @property
    def config(self) -> ArenaConfig:
        return self._config

    @property
    def registry(self) -> PlayerRegistry:
        return self._registry

    def resolve(self, attacker: Player, attack_type: str | None = None) -> list[GameEvent]:
        """Run one attack. Returns no events if the attack is not allowed."""
        name = attack_type or DEFAULT_ATTACK
        spec = self._config.attack(name)
        if spec is None:
            logger.warning("Player %s sent unknown attack type %r", attacker.id, name)
            return []

        now = self._clock()
        if self.on_cooldown(attacker, spec, now):
            logger.debug("Player %s %s dropped, on cooldown", attacker.id, spec.name)
            return []

        attacker.last_attack_at[spec.name] = now
        attacker.is_attacking = True
        attacker.attack_type = spec.name
        attacker.attack_timer = spec.animation_ms

        events = self._strategy.strike(self, attacker, spec)
        if not events:
            logger.debug("Player %s %s hit nobody", attacker.id, spec.name)
        events.append(GameEvent(
            OutboundType.PLAYER_ATTACKED,
            PlayerAttackedPayload(id=attacker.id, attack_type=spec.name, x=attacker.x, y=attacker.y),
        ))
        return events

    @staticmethod
    def on_cooldown(attacker: Player, spec: AttackSpec, now: float) -> bool:
        last = attacker.last_attack_at.get(spec.name)
        return last is not None and now - last < spec.cooldown_ms

    def apply_damage(self, attacker: Player, target: Player, damage: int) -> GameEvent:
        """Damage *target*; a lethal hit becomes a kill transition instead."""
        target.health -= damage
        if target.health <= 0:
            return self.kill(attacker, target)
        logger.debug(
            "Player %s hits %s for %d [HP: %d/%d]",
            attacker.id, target.id, damage, target.health, target.max_health,
        )
        return GameEvent(
            OutboundType.PLAYER_DAMAGED,
            PlayerDamagedPayload(id=target.id, health=target.health, max_health=target.max_health),
        )

    def kill(self, killer: Player, victim: Player) -> GameEvent:
        """Reward the killer and respawn the victim in one step."""
        cfg = self._config

        killer.size = min(cfg.max_player_size, killer.size + cfg.kill_size_gain)
        # A bigger body must still fit inside the map
        fitted = clamp_position(killer.size, killer.x, killer.y, cfg.map_width, cfg.map_height)
        killer.x, killer.y = fitted.x, fitted.y
        killer.points += cfg.kill_points
        killer.kills += 1
        killer.health = min(killer.max_health, killer.health + cfg.kill_heal)

        victim.size = cfg.min_player_size
        victim.health = victim.max_health
        victim.deaths += 1
        spawn = self._registry.random_position(victim)
        victim.x, victim.y = spawn.x, spawn.y
        victim.clear_attack()

        logger.info(
            "%s (%s) killed %s (%s); killer kills=%d size=%.0f, victim respawned at %s",
            killer.name, killer.id, victim.name, victim.id, killer.kills, killer.size, spawn,
        )
        return GameEvent(
            OutboundType.PLAYER_KILLED,
            PlayerKilledPayload(
                killer=KillerSchema(
                    id=killer.id, name=killer.name, size=killer.size,
                    points=killer.points, kills=killer.kills, health=killer.health,
                ),
                victim=VictimSchema(
                    id=victim.id, name=victim.name, x=victim.x, y=victim.y,
                    size=victim.size, health=victim.health, deaths=victim.deaths,
                ),
            ),
        )
