from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass, field

from fastapi import WebSocket

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Connection:
    """One client socket plus its outbound queue.

    `push` is synchronous so game code running inside a tick can hand frames
    over without awaiting; `pump` drains them to the socket in order.
    """

    websocket: WebSocket
    queue: asyncio.Queue[dict[str, object]] = field(default_factory=asyncio.Queue)

    def push(self, payload: dict[str, object]) -> None:
        self.queue.put_nowait(payload)

    async def pump(self) -> None:
        while True:
            payload = await self.queue.get()
            try:
                await self.websocket.send_json(payload)
            except Exception:
                logger.debug("Dropping frame for closed socket: %s", payload)
                return


class RealmWebSocketHub:
    """In-process WebSocket fan-out keyed by realm name.

    Contract:
      - register a socket with `connect(realm, websocket)`.
      - `broadcast(realm, payload)` enqueues on every connection in the realm,
        so it stays ordered with frames pushed by the game itself.
    """

    def __init__(self) -> None:
        self._by_realm: dict[str, set[Connection]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, realm: str, websocket: WebSocket) -> Connection:
        await websocket.accept()
        conn = Connection(websocket=websocket)
        async with self._lock:
            self._by_realm[realm].add(conn)
        return conn

    async def disconnect(self, realm: str, conn: Connection) -> None:
        async with self._lock:
            conns = self._by_realm.get(realm)
            if not conns:
                return
            conns.discard(conn)
            if not conns:
                self._by_realm.pop(realm, None)

    async def broadcast(self, realm: str, payload: dict[str, object]) -> None:
        async with self._lock:
            conns = list(self._by_realm.get(realm, set()))

        for conn in conns:
            conn.push(payload)


hub = RealmWebSocketHub()
