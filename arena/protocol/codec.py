"""Text frame codec: JSON ``{type, data}`` envelopes in both directions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from arena.protocol.schemas import InboundMessage

if TYPE_CHECKING:
    from arena.core.events import GameEvent

_INBOUND_ADAPTER: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


class ProtocolError(ValueError):
    """An inbound frame that cannot be turned into a message."""


def decode_frame(raw: str | bytes, max_bytes: int | None = None) -> InboundMessage:
    """Parse and validate one inbound frame.

    Raises ProtocolError for oversized frames, invalid JSON, unknown message
    types, and payloads that fail validation.
    """
    if max_bytes is not None and len(raw) > max_bytes:
        raise ProtocolError(f"frame of {len(raw)} bytes exceeds limit of {max_bytes}")
    try:
        obj: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProtocolError(f"invalid JSON: {exc}") from exc
    if not isinstance(obj, dict):
        raise ProtocolError(f"expected a JSON object, got {type(obj).__name__}")
    try:
        return _INBOUND_ADAPTER.validate_python(obj)
    except ValidationError as exc:
        raise ProtocolError(
            f"invalid {obj.get('type')!r} message: {exc.error_count()} error(s): {exc.errors()[0]['msg']}"
        ) from exc


def encode_message(msg_type: str, data: dict[str, Any]) -> str:
    return json.dumps({"type": msg_type, "data": data}, separators=(",", ":"))


def encode_event(event: GameEvent) -> str:
    """Serialize an event once; the same text goes to every recipient."""
    return encode_message(event.type.value, event.payload.model_dump(by_alias=True))
