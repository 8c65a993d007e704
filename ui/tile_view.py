"""
Grid view: keeps one drawable per visible tile and refreshes only tiles the grids marked
modified since the last frame, then clears the grids' dirty lists. World y points up;
the world origin sits at the center of the view rect.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
import pygame

from tiles.cells import LiquidCell, SolidCell
from tiles.coords import Point
from tiles.grid import Grid
from tiles.world import WorldTiles
from ui.colors import liquid_colors, solid_color

BACKGROUND = (0, 0, 0)
BORDER_COLOR = (80, 80, 80)
BORDER_PX = 1
LABEL_COLOR = (255, 255, 255)
LABEL_FONT_SIZE = 14


@dataclass
class TileSprite:
    color: tuple[int, int, int]
    label: str | None = None


def _solid_sprites(cells: list[tuple[Point, SolidCell]]) -> dict[Point, TileSprite | None]:
    return {p: TileSprite(solid_color(c.index)) if c.needs_visual() else None for p, c in cells}


def _liquid_sprites(cells: list[tuple[Point, LiquidCell]]) -> dict[Point, TileSprite | None]:
    if not cells:
        return {}
    rgb = liquid_colors(np.array([c.amount for _, c in cells], dtype=np.float64))
    out: dict[Point, TileSprite | None] = {}
    for (p, c), color in zip(cells, rgb):
        out[p] = None if c.is_empty() else TileSprite(tuple(int(v) for v in color), str(c))
    return out


def _apply(sprites: dict[Point, TileSprite], updates: dict[Point, TileSprite | None]) -> None:
    for p, sprite in updates.items():
        if sprite is None:
            sprites.pop(p, None)
        else:
            sprites[p] = sprite


def _consume_modified(grid: Grid, sprites: dict[Point, TileSprite], build: Callable) -> int:
    grid.deduplicate_modified()
    cells = list(grid.modified_cells())
    _apply(sprites, build(cells))
    grid.clear_modified()
    return len(cells)


class TileView:
    """Drawables for solid and liquid tiles, kept in step with the grids' dirty lists."""

    def __init__(self, show_amounts: bool = True) -> None:
        self.show_amounts = show_amounts
        self.solid_sprites: dict[Point, TileSprite] = {}
        self.liquid_sprites: dict[Point, TileSprite] = {}
        self._font = None

    def sync(self, world: WorldTiles) -> int:
        """Refresh drawables for dirty tiles of both grids; returns tiles visited."""
        n = _consume_modified(world.solid, self.solid_sprites, _solid_sprites)
        n += _consume_modified(world.liquid, self.liquid_sprites, _liquid_sprites)
        return n

    def rebuild(self, world: WorldTiles) -> None:
        """Drop every drawable and rebuild from all allocated chunks."""
        self.solid_sprites.clear()
        self.liquid_sprites.clear()
        _apply(self.solid_sprites, _solid_sprites(list(world.solid.indexed_cells())))
        _apply(self.liquid_sprites, _liquid_sprites(list(world.liquid.indexed_cells())))
        world.solid.clear_modified()
        world.liquid.clear_modified()

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, LABEL_FONT_SIZE)
        return self._font

    def draw(self, surface: pygame.Surface, rect: pygame.Rect, world: WorldTiles) -> None:
        surface.fill(BACKGROUND, rect)
        size = max(1, int(round(world.tile_size)))
        half = size / 2.0
        prev_clip = surface.get_clip()
        surface.set_clip(rect)
        for point, sprite in self.solid_sprites.items():
            sx, sy = world_to_screen(rect, world.point_to_world(point))
            pygame.draw.rect(surface, sprite.color, (int(sx - half), int(sy - half), size, size))
        font = self._ensure_font() if self.show_amounts else None
        for point, sprite in self.liquid_sprites.items():
            sx, sy = world_to_screen(rect, world.point_to_world(point))
            pygame.draw.rect(surface, sprite.color, (int(sx - half), int(sy - half), size, size))
            if font is not None and sprite.label:
                text = font.render(sprite.label, True, LABEL_COLOR)
                surface.blit(text, text.get_rect(center=(int(sx), int(sy))))
        surface.set_clip(prev_clip)
        pygame.draw.rect(surface, BORDER_COLOR, rect, BORDER_PX)


def world_to_screen(rect: pygame.Rect, pos: tuple[float, float]) -> tuple[float, float]:
    return rect.centerx + pos[0], rect.centery - pos[1]


def screen_to_world(rect: pygame.Rect, pos: tuple[int, int]) -> tuple[float, float]:
    return float(pos[0] - rect.centerx), float(rect.centery - pos[1])
