from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum


@dataclass(frozen=True, slots=True)
class Vec3:
    """A position in world space."""

    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class BlockPos:
    """Integer block coordinates. Also used for world dimensions."""

    x: int
    y: int
    z: int


class BlockType(IntEnum):
    # Classic block ids.
    air = 0
    grass = 2
    black_rock = 7


class WorldType(StrEnum):
    hollow = "hollow"
