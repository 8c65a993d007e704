"""
Liquid stepper: one explicit tick of amount + 4-direction velocity over a sparse grid.

Every non-empty cell, read from the start-of-tick grid:
  velocity *= damping
  force = max(amount - neighbor_amount + gravity bias (down +, up -), 0)
  velocity += force * dt, zeroed toward solid neighbors
  outflow = min(sum(velocity), amount), split across directions by velocity share.
New velocities and amount deltas are collected first and written back after the pass,
so neighbor reads never see values from the same tick. Outflow never exceeds the cell's
amount and each unit lands on exactly one neighbor; receivers are not capped (amount
may exceed 1).

Only points written since the previous tick are visited. A cell holding more than
epsilon was either active last tick or received flow, and both paths write it, so the
pass stays bounded by the active cells and their neighbors instead of the allocated grid.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from tiles.cells import Direction, LiquidCell, SolidCell
from tiles.constants import DAMPING, EMPTY_EPSILON, GRAVITY_BIAS
from tiles.coords import Point
from tiles.grid import Grid

logger = logging.getLogger(__name__)

# Gravity sign per Direction: right, down, left, up.
_GRAVITY_SIGN = np.array([0.0, 1.0, 0.0, -1.0], dtype=np.float64)


@dataclass
class StepStats:
    active_cells: int = 0
    total_outflow: float = 0.0


def _amount(liquid: Grid[LiquidCell], point: Point) -> float:
    cell = liquid.get(point)
    return 0.0 if cell is None else cell.amount


def _is_solid(solid: Grid[SolidCell], point: Point) -> bool:
    cell = solid.get(point)
    return cell is not None and cell.needs_visual()


def active_cells(liquid: Grid[LiquidCell], epsilon: float = EMPTY_EPSILON) -> Iterator[tuple[Point, LiquidCell]]:
    """Full scan of allocated chunks; for diagnostics, the stepper does not use it."""
    for point, cell in liquid.indexed_cells():
        if cell.amount > epsilon:
            yield point, cell


def total_amount(liquid: Grid[LiquidCell]) -> float:
    return float(sum(cell.amount for _, cell in liquid.indexed_cells()))


def step(
    liquid: Grid[LiquidCell],
    solid: Grid[SolidCell],
    dt: float,
    enabled: bool = True,
    *,
    damping: float = DAMPING,
    gravity: float = GRAVITY_BIAS,
    epsilon: float = EMPTY_EPSILON,
) -> StepStats:
    """Advance liquid by dt. enabled=False leaves the grid untouched (paused)."""
    stats = StepStats()
    if not enabled:
        return stats
    if not liquid.track_writes:
        raise ValueError("liquid grid must be created with track_writes=True")

    velocities: dict[Point, np.ndarray] = {}
    deltas: dict[Point, float] = defaultdict(float)
    bias = gravity * _GRAVITY_SIGN
    for point in liquid.take_written():
        cell = liquid.get(point)
        if cell is None or cell.amount <= epsilon:
            continue
        stats.active_cells += 1
        amount = cell.amount
        neighbors = [d.neighbor(point) for d in Direction]

        velocity = cell.velocity * damping
        force = np.array([amount - _amount(liquid, n) for n in neighbors], dtype=np.float64)
        force += bias
        np.maximum(force, 0.0, out=force)
        velocity += force * dt
        for direction, neighbor in zip(Direction, neighbors):
            if _is_solid(solid, neighbor):
                velocity[direction] = 0.0
        velocities[point] = velocity

        outward = np.maximum(velocity, 0.0)
        total_velocity = float(outward.sum())
        if total_velocity == 0.0:
            continue
        flow_rate = min(total_velocity, amount)

        total_outflow = 0.0
        for direction, neighbor in zip(Direction, neighbors):
            share = outward[direction]
            if share <= 0.0:
                continue
            flow = flow_rate * float(share / total_velocity)
            deltas[neighbor] += flow
            total_outflow += flow
        deltas[point] -= total_outflow
        stats.total_outflow += total_outflow

    for point, velocity in velocities.items():
        liquid.get_or_create(point).velocity = velocity
    for point, delta in deltas.items():
        liquid.get_or_create(point).amount += delta

    liquid.deduplicate_modified()
    logger.debug("liquid step dt=%.4f active=%d outflow=%.4f", dt, stats.active_cells, stats.total_outflow)
    return stats
