from __future__ import annotations

import logging
import random

from spleef.config import SpleefConfig
from spleef.core.host import Realm, World
from spleef.core.vectors import BlockPos, BlockType, Vec3, WorldType

logger = logging.getLogger(__name__)


class ArenaBuilder:
    """Lays out the spleef arena inside a realm's world.

    The world is a hollow cuboid: a grass floor one block below the top and
    black rock walls on the four vertical sides. Only the floor is ever
    rebuilt; it regrows at the start of every round.
    """

    def __init__(self, realm: Realm, config: SpleefConfig) -> None:
        self.realm = realm
        self.config = config

    @property
    def world(self) -> World:
        if self.realm.world is None:
            raise RuntimeError("Spleef world not generated. Call build_world() first.")
        return self.realm.world

    def build_world(self) -> World:
        size = self.config.xz_dimensions
        world = self.realm.generate_world(BlockPos(size, self.config.height, size), WorldType.hollow)
        world.spawn_point = Vec3(size // 2, 2, size // 2)

        self.rebuild_floor()
        self.build_boundary()
        logger.info("Built %sx%sx%s spleef arena in realm %s", size, self.config.height, size, self.realm.name)
        return world

    def rebuild_floor(self) -> None:
        world = self.world
        size = self.config.xz_dimensions
        y = self.config.floor_y
        for x in range(size):
            for z in range(size):
                world.set_block(BlockPos(x, y, z), BlockType.grass)

    def build_boundary(self) -> None:
        world = self.world
        size = self.config.xz_dimensions
        edge = size - 1
        for i in range(size):
            for y in range(self.config.height):
                world.set_block(BlockPos(i, y, 0), BlockType.black_rock)
                world.set_block(BlockPos(0, y, i), BlockType.black_rock)
                world.set_block(BlockPos(i, y, edge), BlockType.black_rock)
                world.set_block(BlockPos(edge, y, i), BlockType.black_rock)

    def random_spawn_point(self, rng: random.Random) -> Vec3:
        # Stay one block inside the walls on every side.
        hi = self.config.xz_dimensions - 2
        return Vec3(rng.randint(1, hi), self.config.height, rng.randint(1, hi))
