"""Outbound events produced by the engine for the gateway to fan out."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from arena.core.enums import OutboundType


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single outbound message and who should receive it.

    ``only`` restricts delivery to one player; ``exclude`` skips one player.
    With neither set the event goes to every open session.
    """

    type: OutboundType
    payload: BaseModel
    exclude: str | None = None
    only: str | None = None

    def __repr__(self) -> str:
        target = f" only={self.only}" if self.only else f" exclude={self.exclude}" if self.exclude else ""
        return f"GameEvent({self.type.value}{target})"
