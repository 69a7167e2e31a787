"""Pydantic models for every message on the wire.

Field names are snake_case in Python and camelCase on the wire
(``max_health`` <-> ``maxHealth``).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from arena.core.models import Player


class WireModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


# --- Inbound ---

class JoinData(WireModel):
    name: str | None = None


class MoveData(WireModel):
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    facing: float | None = None


class AttackData(WireModel):
    attack_type: str | None = None
    x: float | None = Field(None, allow_inf_nan=False)
    y: float | None = Field(None, allow_inf_nan=False)


class RenameData(WireModel):
    new_name: str | None = None


class JoinMessage(WireModel):
    type: Literal["join"]
    data: JoinData = Field(default_factory=JoinData)


class MoveMessage(WireModel):
    type: Literal["move"]
    data: MoveData


class AttackMessage(WireModel):
    type: Literal["attack"]
    data: AttackData = Field(default_factory=AttackData)


class RenameMessage(WireModel):
    type: Literal["rename"]
    data: RenameData = Field(default_factory=RenameData)


InboundMessage = Annotated[
    Union[JoinMessage, MoveMessage, AttackMessage, RenameMessage],
    Field(discriminator="type"),
]


# --- Outbound: player views ---

class PlayerSchema(WireModel):
    """Full public view, sent in init and playerJoined."""

    id: str
    name: str
    x: float
    y: float
    size: float
    health: int
    max_health: int
    kills: int
    deaths: int
    points: int
    color: str
    facing: int
    is_attacking: bool = False
    attack_type: str | None = None

    @classmethod
    def from_player(cls, p: Player) -> PlayerSchema:
        return cls(
            id=p.id, name=p.name, x=p.x, y=p.y, size=p.size,
            health=p.health, max_health=p.max_health,
            kills=p.kills, deaths=p.deaths, points=p.points,
            color=p.color, facing=p.facing,
            is_attacking=p.is_attacking, attack_type=p.attack_type,
        )


class PlayerStateSchema(WireModel):
    """Per-player entry of the periodic gameUpdate."""

    id: str
    x: float
    y: float
    size: float
    health: int
    kills: int
    deaths: int
    points: int
    facing: int
    is_attacking: bool
    attack_type: str | None = None

    @classmethod
    def from_player(cls, p: Player) -> PlayerStateSchema:
        return cls(
            id=p.id, x=p.x, y=p.y, size=p.size, health=p.health,
            kills=p.kills, deaths=p.deaths, points=p.points, facing=p.facing,
            is_attacking=p.is_attacking, attack_type=p.attack_type,
        )


class KillerSchema(WireModel):
    id: str
    name: str
    size: float
    points: int
    kills: int
    health: int


class VictimSchema(WireModel):
    id: str
    name: str
    x: float
    y: float
    size: float
    health: int
    deaths: int


# --- Outbound payloads ---

class InitPayload(WireModel):
    player_id: str
    players: list[PlayerSchema]


class PlayerLeftPayload(WireModel):
    id: str


class PlayerMovedPayload(WireModel):
    id: str
    x: float
    y: float
    facing: int


class PlayerAttackedPayload(WireModel):
    id: str
    attack_type: str
    x: float
    y: float


class PlayerDamagedPayload(WireModel):
    id: str
    health: int
    max_health: int


class PlayerKilledPayload(WireModel):
    killer: KillerSchema
    victim: VictimSchema


class PlayerRenamedPayload(WireModel):
    id: str
    old_name: str
    new_name: str


class GameUpdatePayload(WireModel):
    players: list[PlayerStateSchema]
