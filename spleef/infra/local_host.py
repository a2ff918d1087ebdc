"""In-process implementation of the host contract.

Enough of a game server to run spleef without one: sparse block worlds,
realms with join/leave events, chat fan-out to realm members, and a tick
stream that the web app (or a test) drives.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from spleef.core.events import Event, EventHandlingResult
from spleef.core.host import Participant
from spleef.core.vectors import BlockPos, BlockType, Vec3, WorldType

logger = logging.getLogger(__name__)

Sink = Callable[[dict[str, object]], None]


@dataclass(eq=False, slots=True)
class LocalPlayer:
    name: str
    position: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    # Receives outbound frames (chat, teleports) for this player's client, if any.
    sink: Sink | None = None

    def teleport(self, position: Vec3) -> None:
        self.position = position
        self._push({"type": "teleport", "x": position.x, "y": position.y, "z": position.z})

    def move_to(self, position: Vec3) -> None:
        self.position = position

    def receive_message(self, text: str) -> None:
        self._push({"type": "chat", "text": text})

    def _push(self, payload: dict[str, object]) -> None:
        if self.sink is not None:
            self.sink(payload)


@dataclass(slots=True)
class LocalWorld:
    dimensions: BlockPos
    world_type: WorldType = WorldType.hollow
    spawn_point: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    blocks: dict[BlockPos, BlockType] = field(default_factory=dict)

    def contains(self, pos: BlockPos) -> bool:
        d = self.dimensions
        return 0 <= pos.x < d.x and 0 <= pos.y < d.y and 0 <= pos.z < d.z

    def set_block(self, pos: BlockPos, block: BlockType) -> None:
        if not self.contains(pos):
            raise ValueError(f"Block {pos} is outside world of size {self.dimensions}")
        if block is BlockType.air:
            self.blocks.pop(pos, None)
        else:
            self.blocks[pos] = block

    def get_block(self, pos: BlockPos) -> BlockType:
        if not self.contains(pos):
            raise ValueError(f"Block {pos} is outside world of size {self.dimensions}")
        return self.blocks.get(pos, BlockType.air)


class LocalRealm:
    def __init__(self, name: str) -> None:
        self.name = name
        self.world: LocalWorld | None = None
        self.members: list[LocalPlayer] = []
        self.on_player_joined: Event[Participant] = Event()
        self.on_player_left: Event[Participant] = Event()

    def generate_world(self, dimensions: BlockPos, world_type: WorldType) -> LocalWorld:
        # Hollow worlds start empty; whoever owns the realm fills them.
        self.world = LocalWorld(dimensions=dimensions, world_type=world_type)
        return self.world

    def member_names(self) -> list[str]:
        return [p.name for p in self.members]

    def join(self, player: LocalPlayer) -> EventHandlingResult:
        if player in self.members:
            return EventHandlingResult.continue_
        self.members.append(player)
        if self.world is not None:
            player.position = self.world.spawn_point
        return self.on_player_joined.emit(player)

    def leave(self, player: LocalPlayer) -> EventHandlingResult:
        if player not in self.members:
            return EventHandlingResult.continue_
        self.members.remove(player)
        return self.on_player_left.emit(player)


class LocalChat:
    def __init__(self) -> None:
        # (realm name, text) for every server message, in send order.
        self.history: list[tuple[str, str]] = []

    def send_server_message_to(self, realm: LocalRealm, text: str) -> None:
        logger.debug("[%s] %s", realm.name, text)
        self.history.append((realm.name, text))
        for member in list(realm.members):
            member.receive_message(text)

    def messages_for(self, realm_name: str) -> list[str]:
        return [text for name, text in self.history if name == realm_name]


class LocalServer:
    def __init__(self) -> None:
        self.chat = LocalChat()
        self.on_server_tick: Event[float] = Event()
        self._realms: dict[str, LocalRealm] = {}

    def get_or_create_realm(self, name: str) -> LocalRealm:
        realm = self._realms.get(name)
        if realm is None:
            realm = LocalRealm(name)
            self._realms[name] = realm
            logger.info("Created realm %s", name)
        return realm

    def get_realm(self, name: str) -> LocalRealm | None:
        return self._realms.get(name)

    def tick(self, delta: float) -> EventHandlingResult:
        return self.on_server_tick.emit(delta)
