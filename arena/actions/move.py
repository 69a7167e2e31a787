"""MovementValidator: clamps and applies absolute position requests.

Moves are trusted but bounds-checked: there is no velocity or speed limit,
and a request is never rejected, only clamped into the map.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from arena.core.models import Vector2

if TYPE_CHECKING:
    from arena.config import ArenaConfig
    from arena.core.models import Player

logger = logging.getLogger(__name__)


def clamp_position(size: float, x: float, y: float, width: float, height: float) -> Vector2:
    """Clamp each axis independently into ``[size/2, dim - size/2]``."""
    half = size / 2
    return Vector2(
        max(half, min(width - half, x)),
        max(half, min(height - half, y)),
    )


class MovementValidator:
    """Applies move requests to players."""

    __slots__ = ("_config",)

    def __init__(self, config: ArenaConfig) -> None:
        self._config = config

    def apply_move(self, player: Player, x: float, y: float, facing: float | None = None) -> Vector2:
        cfg = self._config
        applied = clamp_position(player.size, x, y, cfg.map_width, cfg.map_height)
        if applied.x != x or applied.y != y:
            logger.debug("Player %s move to (%.1f, %.1f) clamped to %s", player.id, x, y, applied)
        player.x, player.y = applied.x, applied.y
        if facing in (-1, 1):
            player.facing = int(facing)
        return applied
