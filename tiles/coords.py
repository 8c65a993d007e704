"""
Point <-> (chunk coord, inner coord) mapping. Python's // and % round toward negative
infinity for a positive divisor, so negative points land in the chunk below with a
non-negative inner offset: for N=16, -1 -> chunk -1 inner 15, -17 -> chunk -2 inner 15.
"""

Point = tuple[int, int]
ChunkCoord = tuple[int, int]
InnerCoord = tuple[int, int]


def point_to_chunk_coord(chunk_size: int, point: Point) -> ChunkCoord:
    x, y = point
    return x // chunk_size, y // chunk_size


def point_to_inner_coord(chunk_size: int, point: Point) -> InnerCoord:
    x, y = point
    return x % chunk_size, y % chunk_size


def split_coord(chunk_size: int, point: Point) -> tuple[ChunkCoord, InnerCoord]:
    x, y = point
    cx, ix = divmod(x, chunk_size)
    cy, iy = divmod(y, chunk_size)
    return (cx, cy), (ix, iy)


def chunk_coord_to_corner(chunk_size: int, chunk_coord: ChunkCoord) -> Point:
    """Point of the chunk's origin cell."""
    cx, cy = chunk_coord
    return cx * chunk_size, cy * chunk_size


def combine_coord(chunk_size: int, chunk_coord: ChunkCoord, inner_coord: InnerCoord) -> Point:
    cx, cy = chunk_coord
    ix, iy = inner_coord
    return cx * chunk_size + ix, cy * chunk_size + iy
