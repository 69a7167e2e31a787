"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class CombatMode(str, Enum):
    """Which attack model the combat resolver runs."""

    DAMAGE = "damage"          # Typed attacks with cooldowns and damage
    PROXIMITY = "proximity"    # Any attack instantly kills everyone in reach


@unique
class NameStyle(str, Enum):
    """How default display names are generated."""

    COUNTER = "counter"    # "Player 7"
    RANDOM = "random"      # "Player#k3x9qa"


@unique
class InboundType(str, Enum):
    """Message tags a client may send."""

    JOIN = "join"
    MOVE = "move"
    ATTACK = "attack"
    RENAME = "rename"


@unique
class OutboundType(str, Enum):
    """Message tags the server sends."""

    INIT = "init"
    PLAYER_JOINED = "playerJoined"
    PLAYER_LEFT = "playerLeft"
    PLAYER_MOVED = "playerMoved"
    PLAYER_ATTACKED = "playerAttacked"
    PLAYER_DAMAGED = "playerDamaged"
    PLAYER_KILLED = "playerKilled"
    PLAYER_RENAMED = "playerRenamed"
    GAME_UPDATE = "gameUpdate"


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    SPAWN_X = 0
    SPAWN_Y = 1
    COLOR = 2
    NAME = 3
