"""Core data models and the player registry."""

from arena.core.enums import CombatMode, Domain, InboundType, NameStyle, OutboundType
from arena.core.events import GameEvent
from arena.core.models import Player, Vector2
from arena.core.registry import PlayerRegistry
from arena.core.snapshot import Snapshot

__all__ = [
    "CombatMode",
    "Domain",
    "GameEvent",
    "InboundType",
    "NameStyle",
    "OutboundType",
    "Player",
    "PlayerRegistry",
    "Snapshot",
    "Vector2",
]
