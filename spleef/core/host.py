"""Services the spleef plugin consumes from its host server.

These are structural protocols: the bundled local host in
`spleef.infra.local_host` satisfies them, and so can an adapter around a
real game server.
"""

from __future__ import annotations

from typing import Protocol

from spleef.core.events import Event
from spleef.core.vectors import BlockPos, BlockType, Vec3, WorldType


class Participant(Protocol):
    name: str
    position: Vec3

    def teleport(self, position: Vec3) -> None: ...


class World(Protocol):
    dimensions: BlockPos
    spawn_point: Vec3

    def set_block(self, pos: BlockPos, block: BlockType) -> None: ...

    def get_block(self, pos: BlockPos) -> BlockType: ...


class Realm(Protocol):
    name: str
    world: World | None
    on_player_joined: Event[Participant]
    on_player_left: Event[Participant]

    def generate_world(self, dimensions: BlockPos, world_type: WorldType) -> World: ...


class Chat(Protocol):
    def send_server_message_to(self, realm: Realm, text: str) -> None: ...


class Server(Protocol):
    chat: Chat
    on_server_tick: Event[float]

    def get_or_create_realm(self, name: str) -> Realm: ...
