"""Solid and liquid grids sharing a chunk size and a tile -> world transform."""

from __future__ import annotations

from dataclasses import dataclass

from tiles.cells import LiquidCell, SolidCell
from tiles.constants import DEFAULT_CHUNK_SIZE, DEFAULT_TILE_SIZE
from tiles.coords import Point
from tiles.grid import Grid

# Demo scene: dirt block 10 wide, 5 deep, with a grass row on top.
DEMO_WIDTH = 10
DEMO_DEPTH = 5
DIRT_INDEX = 0
GRASS_INDEX = 1


@dataclass
class WorldTiles:
    solid: Grid[SolidCell]
    liquid: Grid[LiquidCell]
    tile_size: float = DEFAULT_TILE_SIZE
    origin: tuple[float, float] = (0.0, 0.0)

    @classmethod
    def new(cls, chunk_size: int = DEFAULT_CHUNK_SIZE, tile_size: float = DEFAULT_TILE_SIZE) -> WorldTiles:
        return cls(
            solid=Grid(SolidCell, chunk_size),
            liquid=Grid(LiquidCell, chunk_size, track_writes=True),
            tile_size=tile_size,
        )

    @property
    def chunk_size(self) -> int:
        return self.solid.chunk_size

    def world_to_point(self, x: float, y: float) -> Point:
        """Nearest tile to a world position."""
        ox, oy = self.origin
        return int(round((x - ox) / self.tile_size)), int(round((y - oy) / self.tile_size))

    def point_to_world(self, point: Point) -> tuple[float, float]:
        ox, oy = self.origin
        return ox + point[0] * self.tile_size, oy + point[1] * self.tile_size

    def clear(self) -> None:
        self.solid.clear()
        self.liquid.clear()


def build_demo_scene(world: WorldTiles) -> None:
    for column in range(DEMO_WIDTH):
        world.solid.set((column, DEMO_DEPTH), SolidCell.from_index(GRASS_INDEX))
    for row in range(DEMO_DEPTH):
        for column in range(DEMO_WIDTH):
            world.solid.set((column, row), SolidCell.from_index(DIRT_INDEX))
