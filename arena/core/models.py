"""Core data models: Vector2, Player."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

# Palette players are coloured from
PLAYER_COLORS: tuple[str, ...] = (
    "#ff6b35", "#4ecdc4", "#45b7d1", "#96ceb4", "#feca57", "#ff9ff3", "#54a0ff",
)


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D float coordinate."""

    x: float = 0.0
    y: float = 0.0

    def distance(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f})"


@dataclass(slots=True)
class Player:
    """Authoritative state of one joined session.

    Owned by the PlayerRegistry; everything else refers to a player by id.
    """

    id: str
    seq: int
    name: str
    x: float
    y: float
    size: float
    health: int
    max_health: int
    color: str = PLAYER_COLORS[0]
    facing: int = 1

    # --- Progress ---
    kills: int = 0
    deaths: int = 0
    points: int = 0

    # --- Attack state ---
    is_attacking: bool = False
    attack_type: str | None = None
    attack_timer: float = 0.0                                     # ms of animation left
    last_attack_at: dict[str, float] = field(default_factory=dict)  # attack name -> clock ms

    @property
    def pos(self) -> Vector2:
        return Vector2(self.x, self.y)

    def distance_to(self, other: Player) -> float:
        return self.pos.distance(other.pos)

    def clear_attack(self) -> None:
        self.is_attacking = False
        self.attack_type = None
        self.attack_timer = 0.0

    def copy(self) -> Player:
        return Player(
            id=self.id, seq=self.seq, name=self.name,
            x=self.x, y=self.y, size=self.size,
            health=self.health, max_health=self.max_health,
            color=self.color, facing=self.facing,
            kills=self.kills, deaths=self.deaths, points=self.points,
            is_attacking=self.is_attacking, attack_type=self.attack_type,
            attack_timer=self.attack_timer,
            last_attack_at=dict(self.last_attack_at),
        )

    def __repr__(self) -> str:
        return f"Player({self.id}, {self.name!r}, at {self.pos}, hp={self.health}/{self.max_health})"
