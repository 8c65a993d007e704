"""Tiles: chunked sparse grids, cell payloads, and the liquid stepper."""

from tiles.cells import Direction, LiquidCell, SolidCell
from tiles.chunk import Chunk
from tiles.constants import DEFAULT_CHUNK_SIZE, EMPTY_EPSILON
from tiles.editor import EditorState
from tiles.grid import Grid
from tiles.liquid import StepStats, step, total_amount
from tiles.world import WorldTiles, build_demo_scene

__all__ = [
    "Chunk",
    "DEFAULT_CHUNK_SIZE",
    "Direction",
    "EMPTY_EPSILON",
    "EditorState",
    "Grid",
    "LiquidCell",
    "SolidCell",
    "StepStats",
    "WorldTiles",
    "build_demo_scene",
    "step",
    "total_amount",
]
