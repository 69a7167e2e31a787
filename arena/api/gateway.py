"""SessionGateway: connections in, events out.

Owns every open session and the session <-> player mapping. Inbound frames
are decoded, dispatched to the engine and the resulting events fanned out.
Fan-out never blocks: each session has a bounded outbound queue drained by
its own sender task, and a session whose queue is full (or whose write
failed) is marked closed and removed by its connection handler.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from arena.protocol.codec import ProtocolError, decode_frame, encode_event
from arena.protocol.schemas import JoinMessage

if TYPE_CHECKING:
    from arena.core.events import GameEvent
    from arena.engine.game_engine import GameEngine

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Session:
    """Transport-side state of one connection. Holds no game state."""

    session_id: int
    queue: asyncio.Queue[str]
    closed: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def is_open(self) -> bool:
        return not self.closed.is_set()


class SessionGateway:
    """Routes frames between sessions and the GameEngine."""

    def __init__(self, engine: GameEngine) -> None:
        self._engine = engine
        self._queue_size = engine.config.outbound_queue_size
        self._max_frame_bytes = engine.config.max_frame_bytes
        self._session_ids = itertools.count(1)
        self._sessions: dict[int, Session] = {}
        self._session_to_player: dict[int, str] = {}
        self._player_to_session: dict[str, int] = {}

    @property
    def engine(self) -> GameEngine:
        return self._engine

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def session(self, session_id: int) -> Session | None:
        return self._sessions.get(session_id)

    def player_id_for(self, session_id: int) -> str | None:
        return self._session_to_player.get(session_id)

    def session_id_for(self, player_id: str) -> int | None:
        return self._player_to_session.get(player_id)

    # -- lifecycle --

    def open_session(self) -> Session:
        session = Session(session_id=next(self._session_ids), queue=asyncio.Queue(maxsize=self._queue_size))
        self._sessions[session.session_id] = session
        logger.debug("Session %d opened (%d open)", session.session_id, len(self._sessions))
        return session

    def close_session(self, session_id: int) -> None:
        """Forget a session and remove its player. Idempotent."""
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.closed.set()
            logger.debug("Session %d closed (%d open)", session_id, len(self._sessions))
        player_id = self._session_to_player.pop(session_id, None)
        if player_id is None:
            return
        self._player_to_session.pop(player_id, None)
        self.publish(self._engine.leave(player_id))

    def mark_failed(self, session: Session, reason: str) -> None:
        """Schedule a session for removal by its connection handler."""
        if session.is_open:
            logger.warning("Session %d dropped: %s", session.session_id, reason)
            session.closed.set()

    # -- inbound --

    def handle_frame(self, session_id: int, raw: str | bytes) -> None:
        """Decode one frame and apply it. Bad frames are logged and dropped."""
        session = self._sessions.get(session_id)
        if session is None or not session.is_open:
            return
        try:
            message = decode_frame(raw, self._max_frame_bytes)
        except ProtocolError as exc:
            logger.warning("Session %d sent a malformed frame: %s", session_id, exc)
            return

        player_id = self._session_to_player.get(session_id)
        if isinstance(message, JoinMessage) and player_id is None:
            player, events = self._engine.join(message.data.name)
            self._session_to_player[session_id] = player.id
            self._player_to_session[player.id] = session_id
            self.publish(events)
            return
        if player_id is None:
            logger.debug("Session %d sent %s before joining, ignored", session_id, message.type)
            return
        self.publish(self._engine.dispatch(player_id, message))

    # -- outbound --

    def publish(self, events: list[GameEvent]) -> None:
        for event in events:
            text = encode_event(event)
            if event.only is not None:
                target = self._player_to_session.get(event.only)
                if target is not None:
                    self.send_to(target, text)
                continue
            exclude = self._player_to_session.get(event.exclude) if event.exclude else None
            self.broadcast(text, exclude_session=exclude)

    def broadcast(self, text: str, exclude_session: int | None = None) -> int:
        """Queue *text* for every open session except one. Returns the number reached."""
        delivered = 0
        for session in list(self._sessions.values()):
            if session.session_id == exclude_session:
                continue
            if self._offer(session, text):
                delivered += 1
        return delivered

    def send_to(self, session_id: int, text: str) -> bool:
        session = self._sessions.get(session_id)
        if session is None:
            return False
        return self._offer(session, text)

    def _offer(self, session: Session, text: str) -> bool:
        if not session.is_open:
            return False
        try:
            session.queue.put_nowait(text)
        except asyncio.QueueFull:
            self.mark_failed(session, f"outbound queue full ({self._queue_size} messages)")
            return False
        return True
