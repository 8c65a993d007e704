"""Right panel: tick count, simulation state, paint mode, liquid total and key help."""

import pygame

FONT_SIZE = 16
LABEL_COLOR = (200, 200, 200)
ACTIVE_COLOR = (120, 200, 120)
PAUSED_COLOR = (200, 140, 90)
PANEL_BG = (20, 20, 24)

KEY_HELP = (
    ("Space", "run / pause"),
    ("N", "single step"),
    ("L", "liquid / solid mode"),
    ("C", "clear world"),
    ("LMB / RMB", "paint / erase"),
    ("Esc", "quit"),
)


class Hud:
    def __init__(self, rect: pygame.Rect) -> None:
        self.rect = rect
        self._font = None

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def draw(
        self,
        surface: pygame.Surface,
        *,
        tick_count: int,
        simulating: bool,
        liquid_mode: bool,
        total_liquid: float,
        active_cells: int,
        chunk_counts: tuple[int, int],
        cursor: tuple[int, int] | None = None,
    ) -> None:
        font = self._ensure_font()
        surface.fill(PANEL_BG, self.rect)
        x, y = self.rect.x + 8, self.rect.y + 6
        line_h = 18

        def line(text: str, color=LABEL_COLOR) -> None:
            nonlocal y
            surface.blit(font.render(text, True, color), (x, y))
            y += line_h

        line(f"Tick: {tick_count}")
        line("Simulation: running" if simulating else "Simulation: paused", ACTIVE_COLOR if simulating else PAUSED_COLOR)
        line(f"Paint: {'liquid' if liquid_mode else 'solid'}")
        line(f"Liquid total: {total_liquid:.3f}")
        line(f"Active cells: {active_cells}")
        line(f"Chunks: solid {chunk_counts[0]}, liquid {chunk_counts[1]}")
        if cursor is not None:
            line(f"Cursor: {cursor[0]}, {cursor[1]}")
        y += line_h // 2
        for key, desc in KEY_HELP:
            line(f"{key}: {desc}")
