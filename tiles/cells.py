"""Cell payloads stored in a Grid: solid tiles (optional visual index) and liquid tiles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol, TypeVar

import numpy as np

from tiles.constants import DIRECTION_OFFSETS, EMPTY_EPSILON


class Direction(IntEnum):
    RIGHT = 0
    DOWN = 1
    LEFT = 2
    UP = 3

    @property
    def offset(self) -> tuple[int, int]:
        return DIRECTION_OFFSETS[self]

    def neighbor(self, point: tuple[int, int]) -> tuple[int, int]:
        dx, dy = DIRECTION_OFFSETS[self]
        return point[0] + dx, point[1] + dy


class Tile(Protocol):
    def is_empty(self) -> bool: ...


T = TypeVar("T", bound=Tile)


@dataclass
class SolidCell:
    """index None = no solid material; otherwise the atlas frame to draw."""

    index: int | None = None

    @classmethod
    def from_index(cls, index: int) -> SolidCell:
        if index < 0:
            raise ValueError(f"solid visual index must be non-negative, got {index}")
        return cls(index)

    def needs_visual(self) -> bool:
        return self.index is not None

    def is_empty(self) -> bool:
        return self.index is None


def _zero_velocity() -> np.ndarray:
    return np.zeros(len(Direction), dtype=np.float64)


@dataclass(eq=False)
class LiquidCell:
    """Fluid amount (about 0-1, may transiently exceed 1) and outward velocity per Direction."""

    amount: float = 0.0
    velocity: np.ndarray = field(default_factory=_zero_velocity)

    def is_empty(self) -> bool:
        return self.amount <= EMPTY_EPSILON

    def __str__(self) -> str:
        # Half rounds up, so 0.25 shows as 0.3.
        return f"{math.floor(self.amount * 10.0 + 0.5) / 10.0}"
