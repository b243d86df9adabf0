"""Room-keyed WebSocket relay.

Clients join a room by password and exchange opaque game snapshots. The
relay stores the latest snapshot per room and rebroadcasts every update
to all members, sender included. It never interprets a snapshot beyond
the optional ``version`` check in strict mode.

Protocol (JSON text frames):

    -> {"type": "joinRoom", "password": str}
    <- {"type": "roomJoined", "password": str, "state": object | null}
    -> {"type": "state", "state": object}
    <- {"type": "state", "state": object}
    <- {"type": "error", "message": str}

Architecture Note:
    All bookkeeping runs on the event loop that serves the sockets, so the
    registry needs no locks. Without strict mode the last snapshot wins.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

from fastapi import WebSocket, WebSocketDisconnect

from wizardchess.metrics import RELAY_CLIENTS, RELAY_MESSAGES, RELAY_REJECTIONS, RELAY_ROOMS
from wizardchess.utils.exceptions import (
    NETWORK_ERRORS,
    PARSE_ERRORS,
    RelayError,
    RoomFullError,
    StaleSnapshotError,
    log_and_continue,
)

logger = logging.getLogger(__name__)

SEND_ERRORS = NETWORK_ERRORS + (RuntimeError, WebSocketDisconnect)


@dataclass(eq=False)
class RelayClient:
    """A connected socket and the room it has joined."""

    websocket: WebSocket
    room_key: Optional[str] = None

    async def send_text(self, payload: str) -> None:
        await self.websocket.send_text(payload)


@dataclass
class Room:
    """One relay room: its members and latest snapshot."""

    password: str
    clients: Set[RelayClient] = field(default_factory=set)
    state: Optional[Dict[str, Any]] = None

    @property
    def version(self) -> Optional[int]:
        if isinstance(self.state, dict):
            value = self.state.get("version")
            if isinstance(value, int):
                return value
        return None


def room_key(message: Dict[str, Any]) -> str:
    """A non-string password maps to the public room ``""``."""
    password = message.get("password")
    return password if isinstance(password, str) else ""


class RoomRegistry:
    """In-memory rooms keyed by password."""

    def __init__(self, strict_snapshots: bool = False, max_clients_per_room: int = 0):
        self.strict_snapshots = strict_snapshots
        self.max_clients_per_room = max_clients_per_room
        self.rooms: Dict[str, Room] = {}

    # =========================================================================
    # Bookkeeping
    # =========================================================================

    def room_of(self, client: RelayClient) -> Optional[Room]:
        if client.room_key is None:
            return None
        return self.rooms.get(client.room_key)

    @property
    def client_count(self) -> int:
        return sum(len(room.clients) for room in self.rooms.values())

    def join(self, client: RelayClient, password: str) -> Room:
        """Add ``client`` to the room for ``password``, creating it if needed.

        A client already in another room leaves it first.

        Raises:
            RoomFullError: if the room is at ``max_clients_per_room``
        """
        room = self.rooms.get(password)
        if room is not None and client in room.clients:
            return room
        if (
            room is not None
            and self.max_clients_per_room
            and len(room.clients) >= self.max_clients_per_room
        ):
            raise RoomFullError(f"Room is full ({self.max_clients_per_room} clients)")

        self.leave(client)
        if room is None:
            room = Room(password=password)
            self.rooms[password] = room
            logger.info(f"Created room password={password!r}")
        room.clients.add(client)
        client.room_key = password
        self._update_gauges()
        logger.info(f"Room {password!r} now has {len(room.clients)} client(s)")
        return room

    def leave(self, client: RelayClient) -> None:
        key = client.room_key
        if key is None:
            return
        client.room_key = None
        room = self.rooms.get(key)
        if room is not None:
            room.clients.discard(client)
            if not room.clients:
                del self.rooms[key]
                logger.info(f"Room {key!r} is empty and was deleted")
        self._update_gauges()

    def store_state(self, client: RelayClient, state: Any) -> Optional[Room]:
        """Record ``state`` as the latest snapshot of ``client``'s room.

        Returns None if the client has not joined a room.

        Raises:
            StaleSnapshotError: in strict mode, if ``state.version`` does not
                advance past the stored snapshot's version
        """
        room = self.room_of(client)
        if room is None:
            return None
        if self.strict_snapshots:
            incoming = state.get("version") if isinstance(state, dict) else None
            if not isinstance(incoming, int):
                raise StaleSnapshotError("Snapshot has no version")
            stored = room.version
            if stored is not None and incoming <= stored:
                raise StaleSnapshotError(f"Stale snapshot version {incoming} (room is at {stored})")
        room.state = state
        return room

    def _update_gauges(self) -> None:
        RELAY_ROOMS.set(len(self.rooms))
        RELAY_CLIENTS.set(self.client_count)

    # =========================================================================
    # Messaging
    # =========================================================================

    async def send(self, client: RelayClient, message: Dict[str, Any]) -> bool:
        try:
            await client.send_text(json.dumps(message))
            return True
        except SEND_ERRORS as e:
            log_and_continue(e, "relay_send", logger)
            return False

    async def broadcast(self, room: Room, message: Dict[str, Any]) -> int:
        payload = json.dumps(message)
        delivered = 0
        for client in list(room.clients):
            try:
                await client.send_text(payload)
                delivered += 1
            except SEND_ERRORS as e:
                log_and_continue(e, "relay_broadcast", logger)
        return delivered

    async def handle_text(self, client: RelayClient, raw: str) -> None:
        try:
            message = json.loads(raw)
            if not isinstance(message, dict):
                raise TypeError(f"expected a JSON object, got {type(message).__name__}")
        except PARSE_ERRORS as e:
            RELAY_MESSAGES.labels(type="invalid").inc()
            log_and_continue(e, "relay_parse", logger)
            return

        msg_type = message.get("type")
        if msg_type == "joinRoom":
            RELAY_MESSAGES.labels(type="joinRoom").inc()
            await self._handle_join(client, message)
        elif msg_type == "state":
            RELAY_MESSAGES.labels(type="state").inc()
            await self._handle_state(client, message)
        else:
            RELAY_MESSAGES.labels(type="unknown").inc()
            logger.info(f"Unknown message type: {msg_type!r}")

    async def _handle_join(self, client: RelayClient, message: Dict[str, Any]) -> None:
        password = room_key(message)
        try:
            room = self.join(client, password)
        except RelayError as e:
            RELAY_REJECTIONS.labels(reason="room_full").inc()
            logger.warning(f"Join rejected for room {password!r}: {e}")
            await self.send(client, {"type": "error", "message": str(e)})
            return
        await self.send(client, {"type": "roomJoined", "password": password, "state": room.state})

    async def _handle_state(self, client: RelayClient, message: Dict[str, Any]) -> None:
        state = message.get("state")
        try:
            room = self.store_state(client, state)
        except StaleSnapshotError as e:
            RELAY_REJECTIONS.labels(reason="stale_snapshot").inc()
            logger.warning(f"Snapshot rejected: {e}")
            await self.send(client, {"type": "error", "message": str(e)})
            return
        if room is None:
            logger.warning("Got state but client is not in a room")
            return
        await self.broadcast(room, {"type": "state", "state": state})

    async def serve(self, websocket: WebSocket) -> None:
        """Run one client connection until it disconnects."""
        await websocket.accept()
        client = RelayClient(websocket=websocket)
        logger.info("Client connected")
        try:
            while True:
                raw = await websocket.receive_text()
                await self.handle_text(client, raw)
        except WebSocketDisconnect:
            logger.info("Client disconnected")
        finally:
            self.leave(client)
