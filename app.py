"""
App shell: display, input and main loop. The liquid simulation is tick-driven from elapsed
time and tick_rate (independent of frame rate); each tick advances by a fixed dt. Editor
writes land before the tick, the view consumes dirty tiles after it.
"""

import argparse
import logging

import pygame

import config
from tiles import EditorState, WorldTiles, build_demo_scene, step, total_amount
from ui.hud import Hud
from ui.tile_view import TileView, screen_to_world

TITLE = "Tiles"
BACKGROUND = (0, 0, 0)
HUD_WIDTH = 240

logger = logging.getLogger(__name__)


def run(cfg: dict) -> None:
    width, height = cfg["window"]["width"], cfg["window"]["height"]
    pygame.init()
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()

    world = WorldTiles.new(chunk_size=int(cfg["chunk_size"]), tile_size=float(cfg["tile_size"]))
    if cfg.get("demo_scene", True):
        build_demo_scene(world)
    editor = EditorState()

    view_rect = pygame.Rect(0, 0, width - HUD_WIDTH, height)
    hud = Hud(pygame.Rect(width - HUD_WIDTH, 0, HUD_WIDTH, height))
    view = TileView(show_amounts=bool(cfg.get("show_amounts", True)))
    view.rebuild(world)

    liquid_params = cfg["liquid"]
    dt = float(cfg["dt"])
    tick_rate = max(1, min(120, int(cfg["tick_rate"])))
    max_ticks_per_frame = max(4, tick_rate // 10)
    tick_accum = 0.0
    total_ticks = 0
    active_cells = 0
    running = True

    logger.info("world ready: chunk_size=%d tile_size=%.1f dt=%.3f tick_rate=%d",
                world.chunk_size, world.tile_size, dt, tick_rate)

    while running:
        dt_s = clock.tick(60) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    editor.toggle_simulation()
                elif event.key == pygame.K_n:
                    editor.request_step()
                elif event.key == pygame.K_l:
                    editor.toggle_liquid_mode()
                elif event.key == pygame.K_c:
                    editor.clear(world)
                    view.rebuild(world)

        mouse_pos = pygame.mouse.get_pos()
        cursor = None
        if view_rect.collidepoint(mouse_pos):
            cursor = world.world_to_point(*screen_to_world(view_rect, mouse_pos))
            left, _, right = pygame.mouse.get_pressed()
            editor.apply_buttons(world, cursor, left, right)

        # Paused: one gated call per frame, which only runs after a step request.
        gate = editor.should_step()
        if editor.simulating:
            tick_accum += dt_s * tick_rate
            num_ticks = min(int(tick_accum), max_ticks_per_frame)
            tick_accum -= num_ticks
            tick_accum = min(tick_accum, max_ticks_per_frame)  # prevent unbounded backlog
        else:
            tick_accum = 0.0
            num_ticks = 1
        for _ in range(num_ticks):
            stats = step(
                world.liquid,
                world.solid,
                dt,
                gate,
                damping=liquid_params["damping"],
                gravity=liquid_params["gravity"],
                epsilon=liquid_params["epsilon"],
            )
            if gate:
                total_ticks += 1
                active_cells = stats.active_cells

        view.sync(world)

        screen.fill(BACKGROUND)
        view.draw(screen, view_rect, world)
        hud.draw(
            screen,
            tick_count=total_ticks,
            simulating=editor.simulating,
            liquid_mode=editor.liquid_mode,
            total_liquid=total_amount(world.liquid),
            active_cells=active_cells,
            chunk_counts=(len(world.solid.chunks), len(world.liquid.chunks)),
            cursor=cursor,
        )
        pygame.display.flip()

    pygame.quit()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Tile world editor with liquid simulation")
    parser.add_argument("--config", default=None, help="Config name under configs/ or path to a .json file")
    parser.add_argument("--chunk-size", type=int, default=None, help="Override chunk size")
    parser.add_argument("--no-demo", action="store_true", help="Start with an empty world")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--save-config", metavar="NAME", default=None, help="Write the effective config to configs/NAME.json and exit")
    parser.add_argument("--list-configs", action="store_true", help="List saved configs and exit")
    args = parser.parse_args(argv)

    cfg = config.load_config(config.resolve_config(args.config) if args.config else None)
    if args.chunk_size is not None:
        cfg["chunk_size"] = args.chunk_size
    if args.no_demo:
        cfg["demo_scene"] = False
    if args.log_level:
        cfg["log_level"] = args.log_level

    level = getattr(logging, str(cfg["log_level"]).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.list_configs:
        for name in config.list_configs():
            print(name)
        return
    if args.save_config:
        path = config.save_config(cfg, args.save_config)
        logger.info("saved config to %s", path)
        return
    run(cfg)


if __name__ == "__main__":
    main()
