from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from spleef.fsm import RoundPhase
from spleef.plugin import RoundSnapshot


class MoveFrame(BaseModel):
    """Client -> server: the player's current position."""

    type: Literal["move"]
    x: float
    y: float
    z: float


class RealmStatus(BaseModel):
    realm: str
    phase: RoundPhase
    min_players: int = Field(..., ge=1)
    start_pending: bool
    members: list[str] = Field(default_factory=list)
    waiting: list[str] = Field(default_factory=list)
    active: list[str] = Field(default_factory=list)

    @classmethod
    def from_snapshot(
        cls, *, realm: str, min_players: int, members: list[str], snapshot: RoundSnapshot
    ) -> "RealmStatus":
        return cls(
            realm=realm,
            phase=snapshot.phase,
            min_players=min_players,
            start_pending=snapshot.start_pending,
            members=members,
            waiting=list(snapshot.waiting),
            active=list(snapshot.active),
        )
