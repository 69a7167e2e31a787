"""PlayerRegistry: the single owner of all player state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from arena.core.enums import Domain, NameStyle
from arena.core.models import PLAYER_COLORS, Player, Vector2

if TYPE_CHECKING:
    from arena.config import ArenaConfig
    from arena.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class PlayerRegistry:
    """The single source of truth for who is in the arena.

    Iteration follows join order, which keeps snapshots and multi-target
    hit resolution deterministic.
    """

    __slots__ = ("_config", "_rng", "_players", "_next_seq")

    def __init__(self, config: ArenaConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng
        self._players: dict[str, Player] = {}
        self._next_seq: int = 1

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def add(self, requested_name: str | None = None) -> Player:
        """Create a freshly spawned player and register it."""
        cfg = self._config
        seq = self._next_seq
        self._next_seq += 1

        player = Player(
            id=f"player_{seq}",
            seq=seq,
            name="",
            x=0.0,
            y=0.0,
            size=cfg.min_player_size,
            health=cfg.max_health,
            max_health=cfg.max_health,
            color=PLAYER_COLORS[self._rng.next_int(Domain.COLOR, seq, 0, 0, len(PLAYER_COLORS) - 1)],
        )
        player.name = self.clean_name(requested_name) or self.default_name(player)
        spawn = self.random_position(player)
        player.x, player.y = spawn.x, spawn.y

        self._players[player.id] = player
        logger.info("Player %s (%s) joined at %s (%d total)", player.name, player.id, spawn, len(self._players))
        return player

    def remove(self, player_id: str) -> Player | None:
        """Remove a player. Removing an unknown id is a no-op."""
        player = self._players.pop(player_id, None)
        if player is not None:
            logger.info("Player %s (%s) left (%d total)", player.name, player.id, len(self._players))
        return player

    def get(self, player_id: str) -> Player | None:
        return self._players.get(player_id)

    def all(self) -> list[Player]:
        return list(self._players.values())

    def ids(self) -> list[str]:
        return list(self._players.keys())

    def rename(self, player: Player, requested_name: str | None) -> str:
        """Apply a new display name and return the old one."""
        old_name = player.name
        player.name = self.clean_name(requested_name) or self.default_name(player)
        logger.info("Player %s renamed to %s", old_name, player.name)
        return old_name

    def clean_name(self, requested_name: str | None) -> str:
        """Strip, drop non-printable characters, and cap the length."""
        if not requested_name:
            return ""
        name = "".join(ch for ch in requested_name if ch.isprintable()).strip()
        return name[: self._config.max_name_length].strip()

    def default_name(self, player: Player) -> str:
        if self._config.name_style == NameStyle.RANDOM:
            return "Player#" + self._rng.token(Domain.NAME, player.seq, 0)
        return f"Player {player.seq}"

    def random_position(self, player: Player) -> Vector2:
        """Uniform point inside the map inset by half the maximum player size.

        The RNG counter is the player's death count, so each respawn of the
        same player draws a fresh point.
        """
        cfg = self._config
        margin = cfg.spawn_margin
        x = self._rng.uniform(Domain.SPAWN_X, player.seq, player.deaths, margin, cfg.map_width - margin)
        y = self._rng.uniform(Domain.SPAWN_Y, player.seq, player.deaths, margin, cfg.map_height - margin)
        return Vector2(x, y)
