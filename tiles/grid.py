"""
Infinite sparse 2D grid of cells, stored as lazily created chunks keyed by chunk coord.

Dirty tracking has two levels: the grid lists chunk coords written since the last
clear_modified(), each chunk lists its inner coords. Both lists may hold duplicates
until deduplicate_modified(). Any call that hands out a mutable cell (get_or_create,
get_mut) records it as modified even if the caller only reads it.

With track_writes=True the grid also collects every written point in a set that a
simulation drains with take_written(); this is independent of the renderer's dirty lists.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Generic, Iterator, Mapping

from tiles import coords
from tiles.cells import T
from tiles.chunk import Chunk
from tiles.constants import DEFAULT_CHUNK_SIZE
from tiles.coords import ChunkCoord, InnerCoord, Point


class Grid(Generic[T]):
    __slots__ = ("chunk_size", "factory", "track_writes", "_chunks", "_modified", "_written")

    def __init__(
        self,
        factory: Callable[[], T],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        track_writes: bool = False,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self.factory = factory
        self.track_writes = track_writes
        self._chunks: dict[ChunkCoord, Chunk[T]] = {}
        self._modified: list[ChunkCoord] = []
        self._written: set[Point] = set()

    # -- coordinate helpers --------------------------------------------------

    def point_to_chunk_coord(self, point: Point) -> ChunkCoord:
        return coords.point_to_chunk_coord(self.chunk_size, point)

    def point_to_inner_coord(self, point: Point) -> InnerCoord:
        return coords.point_to_inner_coord(self.chunk_size, point)

    def split_coord(self, point: Point) -> tuple[ChunkCoord, InnerCoord]:
        return coords.split_coord(self.chunk_size, point)

    def chunk_coord_to_corner(self, chunk_coord: ChunkCoord) -> Point:
        return coords.chunk_coord_to_corner(self.chunk_size, chunk_coord)

    def combine_coord(self, chunk_coord: ChunkCoord, inner_coord: InnerCoord) -> Point:
        return coords.combine_coord(self.chunk_size, chunk_coord, inner_coord)

    # -- access --------------------------------------------------------------

    @property
    def chunks(self) -> Mapping[ChunkCoord, Chunk[T]]:
        return MappingProxyType(self._chunks)

    def _record_write(self, point: Point) -> None:
        if self.track_writes:
            self._written.add(point)

    def get(self, point: Point) -> T | None:
        """None if the owning chunk was never created; the cell (maybe default) otherwise."""
        chunk_coord, inner = self.split_coord(point)
        chunk = self._chunks.get(chunk_coord)
        if chunk is None:
            return None
        return chunk.get(inner)

    def get_mut(self, point: Point) -> T | None:
        """Like get(), but marks the cell modified when its chunk exists."""
        chunk_coord, inner = self.split_coord(point)
        chunk = self._chunks.get(chunk_coord)
        if chunk is None:
            return None
        self._modified.append(chunk_coord)
        self._record_write(point)
        return chunk.touch(inner)

    def get_chunk_or_create(self, chunk_coord: ChunkCoord) -> Chunk[T]:
        self._modified.append(chunk_coord)
        chunk = self._chunks.get(chunk_coord)
        if chunk is None:
            chunk = Chunk(self.chunk_size, self.factory)
            self._chunks[chunk_coord] = chunk
        return chunk

    def get_or_create(self, point: Point) -> T:
        chunk_coord, inner = self.split_coord(point)
        self._record_write(point)
        return self.get_chunk_or_create(chunk_coord).touch(inner)

    def set(self, point: Point, cell: T) -> None:
        chunk_coord, inner = self.split_coord(point)
        self._record_write(point)
        self.get_chunk_or_create(chunk_coord).set(inner, cell)

    def take_written(self) -> set[Point]:
        """Points written since the previous call (empty unless track_writes)."""
        written, self._written = self._written, set()
        return written

    def clear(self) -> None:
        """Drop every chunk and all dirty state."""
        self._chunks.clear()
        self._modified.clear()
        self._written.clear()

    # -- iteration -----------------------------------------------------------

    def indexed_chunks(self) -> Iterator[tuple[ChunkCoord, Chunk[T]]]:
        """All allocated chunks, in no particular order."""
        yield from self._chunks.items()

    def indexed_cells(self) -> Iterator[tuple[Point, T]]:
        for chunk_coord, chunk in self._chunks.items():
            for inner, cell in chunk.indexed_cells():
                yield self.combine_coord(chunk_coord, inner), cell

    def modified_chunks(self) -> tuple[ChunkCoord, ...]:
        return tuple(self._modified)

    def modified_cells(self) -> Iterator[tuple[Point, T]]:
        """Dirty cells of dirty chunks. Call deduplicate_modified() first to see each once."""
        for chunk_coord in self._modified:
            chunk = self._chunks.get(chunk_coord)
            if chunk is None:
                continue
            for inner in chunk.modified_cells():
                yield self.combine_coord(chunk_coord, inner), chunk.get(inner)

    # -- dirty bookkeeping ---------------------------------------------------

    def deduplicate_modified(self) -> None:
        self._modified = sorted(set(self._modified))
        for chunk_coord in self._modified:
            chunk = self._chunks.get(chunk_coord)
            if chunk is not None:
                chunk.deduplicate_modified()

    def clear_modified(self) -> None:
        for chunk_coord in self._modified:
            chunk = self._chunks.get(chunk_coord)
            if chunk is not None:
                chunk.clear_modified()
        self._modified.clear()
