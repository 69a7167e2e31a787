"""GameEngine: the authoritative owner of arena state.

Every inbound message and every tick runs to completion (validate, mutate,
build outbound events) without yielding, so no locking is needed as long as
the engine is only driven from one event loop.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, assert_never

from arena.actions.combat import CombatResolver
from arena.actions.move import MovementValidator
from arena.core.enums import OutboundType
from arena.core.events import GameEvent
from arena.core.registry import PlayerRegistry
from arena.core.snapshot import Snapshot
from arena.protocol.schemas import (
    AttackMessage,
    GameUpdatePayload,
    InitPayload,
    JoinMessage,
    MoveMessage,
    PlayerLeftPayload,
    PlayerMovedPayload,
    PlayerRenamedPayload,
    PlayerSchema,
    PlayerStateSchema,
    RenameMessage,
)
from arena.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from arena.config import ArenaConfig
    from arena.core.models import Player
    from arena.protocol.schemas import InboundMessage

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameEngine:
    """Single-writer game state: registry, movement and combat behind one API."""

    __slots__ = ("_config", "_rng", "_registry", "_movement", "_combat", "_snapshot_seq")

    def __init__(
        self,
        config: ArenaConfig,
        rng: DeterministicRNG | None = None,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        self._config = config
        self._rng = rng or DeterministicRNG(config.world_seed)
        self._registry = PlayerRegistry(config, self._rng)
        self._movement = MovementValidator(config)
        self._combat = CombatResolver(config, self._registry, clock)
        self._snapshot_seq = 0
        logger.info("GameEngine ready (mode=%s, seed=%d)", config.combat_mode.value, self._rng.seed)

    @property
    def config(self) -> ArenaConfig:
        return self._config

    @property
    def registry(self) -> PlayerRegistry:
        return self._registry

    @property
    def combat(self) -> CombatResolver:
        return self._combat

    # -- session lifecycle --

    def join(self, requested_name: str | None = None) -> tuple[Player, list[GameEvent]]:
        """Spawn a player. The init reply goes to the new player only."""
        player = self._registry.add(requested_name)
        events = [
            self.init_event(player),
            GameEvent(OutboundType.PLAYER_JOINED, PlayerSchema.from_player(player), exclude=player.id),
        ]
        return player, events

    def leave(self, player_id: str) -> list[GameEvent]:
        """Remove a player. Safe to call more than once."""
        if self._registry.remove(player_id) is None:
            return []
        return [GameEvent(OutboundType.PLAYER_LEFT, PlayerLeftPayload(id=player_id))]

    def init_event(self, player: Player) -> GameEvent:
        snapshot = Snapshot.from_registry(self._registry, self._snapshot_seq)
        payload = InitPayload(
            player_id=player.id,
            players=[PlayerSchema.from_player(p) for p in snapshot.players],
        )
        return GameEvent(OutboundType.INIT, payload, only=player.id)

    # -- actions --

    def dispatch(self, player_id: str, message: InboundMessage) -> list[GameEvent]:
        """Apply one message from a joined player."""
        player = self._registry.get(player_id)
        if player is None:
            logger.debug("Dropping %s from unknown player %s", message.type, player_id)
            return []

        match message:
            case JoinMessage():
                logger.debug("Player %s sent join twice, ignored", player_id)
                return []
            case MoveMessage(data=data):
                return self.move(player, data.x, data.y, data.facing)
            case AttackMessage(data=data):
                return self._combat.resolve(player, data.attack_type)
            case RenameMessage(data=data):
                return self.rename(player, data.new_name)
            case _:
                assert_never(message)

    def move(self, player: Player, x: float, y: float, facing: float | None = None) -> list[GameEvent]:
        applied = self._movement.apply_move(player, x, y, facing)
        payload = PlayerMovedPayload(id=player.id, x=applied.x, y=applied.y, facing=player.facing)
        return [GameEvent(OutboundType.PLAYER_MOVED, payload, exclude=player.id)]

    def rename(self, player: Player, new_name: str | None) -> list[GameEvent]:
        old_name = self._registry.rename(player, new_name)
        payload = PlayerRenamedPayload(id=player.id, old_name=old_name, new_name=player.name)
        return [GameEvent(OutboundType.PLAYER_RENAMED, payload)]

    # -- ticks --

    def decay_attack_timers(self, elapsed_ms: float) -> int:
        """Advance attack animations; returns how many finished this tick."""
        finished = 0
        for player in self._registry.all():
            if not player.is_attacking:
                continue
            player.attack_timer -= elapsed_ms
            if player.attack_timer <= 0:
                player.clear_attack()
                finished += 1
        return finished

    def snapshot(self) -> Snapshot:
        self._snapshot_seq += 1
        return Snapshot.from_registry(self._registry, self._snapshot_seq)

    def snapshot_event(self) -> GameEvent | None:
        """Full-state gameUpdate, or None when nobody is connected."""
        if len(self._registry) == 0:
            return None
        snapshot = self.snapshot()
        payload = GameUpdatePayload(players=[PlayerStateSchema.from_player(p) for p in snapshot.players])
        return GameEvent(OutboundType.GAME_UPDATE, payload)
