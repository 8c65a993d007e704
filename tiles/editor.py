"""
Editor state owned by the input layer: run/pause gate, single-step request, and whether
painting targets liquid or solid tiles. Passed to the stepper as a plain bool.
"""

from __future__ import annotations

import logging

from tiles.cells import LiquidCell, SolidCell
from tiles.coords import Point
from tiles.world import WorldTiles

logger = logging.getLogger(__name__)

PAINT_SOLID_INDEX = 0
PAINT_LIQUID_AMOUNT = 1.0


class EditorState:
    def __init__(self, liquid_mode: bool = False, simulating: bool = False) -> None:
        self.liquid_mode = liquid_mode
        self.simulating = simulating
        self._step_requested = False

    def toggle_liquid_mode(self) -> None:
        self.liquid_mode = not self.liquid_mode
        logger.info("liquid %s", "enabled" if self.liquid_mode else "disabled")

    def toggle_simulation(self) -> None:
        self.simulating = not self.simulating
        logger.info("liquid simulation %s", "enabled" if self.simulating else "disabled")

    def request_step(self) -> None:
        self._step_requested = True

    def should_step(self) -> bool:
        """True while simulating, or once after request_step()."""
        requested = self._step_requested
        self._step_requested = False
        return self.simulating or requested

    def paint(self, world: WorldTiles, point: Point, erase: bool = False) -> None:
        if self.liquid_mode:
            cell = world.liquid.get_or_create(point)
            cell.amount = 0.0 if erase else PAINT_LIQUID_AMOUNT
            cell.velocity[:] = 0.0
        else:
            cell = world.solid.get_or_create(point)
            cell.index = None if erase else PAINT_SOLID_INDEX

    def apply_buttons(self, world: WorldTiles, point: Point, left: bool, right: bool) -> None:
        """Left paints, right erases; the erase is applied last so it wins when both are held."""
        if left:
            self.paint(world, point)
        if right:
            self.paint(world, point, erase=True)

    def clear(self, world: WorldTiles) -> None:
        logger.info("clear")
        world.clear()
