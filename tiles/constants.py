"""Tile world constants. Chunk size is fixed per grid; liquid values drive the stepper."""

DEFAULT_CHUNK_SIZE = 16
DEFAULT_TILE_SIZE = 16.0  # world units per tile

# Liquid cells at or below this amount are empty and skipped by the stepper.
EMPTY_EPSILON = 0.01
# Per-tick velocity retention (viscous loss).
DAMPING = 0.9
# Added to the Down gradient, subtracted from Up.
GRAVITY_BIAS = 0.1

# Neighbor offsets (dx, dy) indexed by Direction: right, down, left, up. y points up.
DIRECTION_OFFSETS = ((1, 0), (0, -1), (-1, 0), (0, 1))
