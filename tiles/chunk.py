"""Fixed-size square block of cells; the unit of lazy allocation and dirty tracking."""

from __future__ import annotations

from typing import Callable, Generic, Iterator

import numpy as np

from tiles.cells import T
from tiles.coords import InnerCoord


class Chunk(Generic[T]):
    """N x N cells in a numpy object array plus inner coords touched since the last clear."""

    __slots__ = ("size", "cells", "modified")

    def __init__(self, size: int, factory: Callable[[], T]) -> None:
        self.size = size
        self.cells = np.empty((size, size), dtype=object)
        for idx in np.ndindex(size, size):
            self.cells[idx] = factory()
        self.modified: list[InnerCoord] = []

    def _check(self, inner: InnerCoord) -> None:
        # numpy would wrap negative indices silently.
        ix, iy = inner
        if not (0 <= ix < self.size and 0 <= iy < self.size):
            raise IndexError(f"inner coord {inner} outside chunk of size {self.size}")

    def get(self, inner: InnerCoord) -> T:
        self._check(inner)
        return self.cells[inner]

    def set(self, inner: InnerCoord, cell: T) -> None:
        self._check(inner)
        self.cells[inner] = cell
        self.modified.append(inner)

    def touch(self, inner: InnerCoord) -> T:
        """Mark inner as modified and return the live cell for mutation."""
        self._check(inner)
        self.modified.append(inner)
        return self.cells[inner]

    def indexed_cells(self) -> Iterator[tuple[InnerCoord, T]]:
        for ix, iy in np.ndindex(self.size, self.size):
            yield (ix, iy), self.cells[ix, iy]

    def modified_cells(self) -> tuple[InnerCoord, ...]:
        return tuple(self.modified)

    def deduplicate_modified(self) -> None:
        self.modified = sorted(set(self.modified))

    def clear_modified(self) -> None:
        self.modified.clear()
