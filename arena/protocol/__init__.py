"""Wire protocol: message schemas and the JSON frame codec."""

from arena.protocol.codec import ProtocolError, decode_frame, encode_event, encode_message
from arena.protocol.schemas import InboundMessage

__all__ = ["InboundMessage", "ProtocolError", "decode_frame", "encode_event", "encode_message"]
