"""UI: tile view and status panel."""

from ui.tile_view import TileView
from ui.hud import Hud
from ui.colors import liquid_color, solid_color

__all__ = ["TileView", "Hud", "liquid_color", "solid_color"]
