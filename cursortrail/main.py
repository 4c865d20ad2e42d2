"""Entry point and demo loop.

Usage:
    python -m cursortrail.main                        # Two terminal panes
    python -m cursortrail.main --settings trail.json  # Load trail profile
    python -m cursortrail.main --verbose              # Debug logging
"""
from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace

import pygame

from .config import (
    FPS, TITLE, PANE_PADDING,
    CELL_WIDTH, CELL_HEIGHT, DemoConfig, load_settings,
)
from .core.ecs import Entity
from .core.events import TrailStartedEvent
from .core.world import World
from .entities.cursors import CursorBounds, CursorTrail, create_cursor
from .systems.trail_system import CursorTrailSystem
from .ui.input import InputHandler, InputAction
from .ui.renderer import Renderer
from .ui.terminal import TerminalPane

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Type to move the cursor. Ctrl+W deletes a word, Tab switches pane."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cursor trail demo")
    parser.add_argument(
        "--settings", "-s",
        type=str,
        default=None,
        help="Path to a JSON trail settings profile"
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=FPS,
        help=f"Frame rate cap (default: {FPS})"
    )
    parser.add_argument(
        "--panes",
        type=int,
        default=2,
        choices=[1, 2, 3],
        help="Number of terminal panes (default: 2)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def create_panes(world: World, config: DemoConfig) -> list[tuple[TerminalPane, Entity]]:
    """Lay out side-by-side panes, each with its own cursor entity."""
    count = config.pane_count
    pane_width = (config.screen_width - PANE_PADDING * (count + 1)) // count
    pane_height = config.screen_height - PANE_PADDING * 2 - 24

    panes = []
    for i in range(count):
        pane = TerminalPane(
            x=PANE_PADDING + i * (pane_width + PANE_PADDING),
            y=PANE_PADDING,
            columns=pane_width // CELL_WIDTH,
            rows=pane_height // CELL_HEIGHT,
        )
        if i == 0:
            pane.insert_text(WELCOME_TEXT)
            pane.newline()

        # Each cursor gets its own copy of the settings
        entity = create_cursor(world, f"pane-{i + 1}", pane.cursor_rect(), replace(config.trail))
        panes.append((pane, entity))
    return panes


def sync_cursor_bounds(world: World, panes: list[tuple[TerminalPane, Entity]]) -> None:
    """Copy each pane's cursor cell into its cursor entity."""
    em = world.entity_manager
    for pane, entity in panes:
        bounds = em.get_component(entity, CursorBounds)
        if bounds:
            bounds.move_to(pane.cursor_rect())


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = DemoConfig(fps=args.fps, pane_count=args.panes)
    if args.settings:
        try:
            config.trail = load_settings(args.settings)
        except ValueError as e:
            logger.error("%s", e)
            return 1

    pygame.init()
    screen = pygame.display.set_mode((config.screen_width, config.screen_height), pygame.RESIZABLE)
    pygame.display.set_caption(TITLE)
    pygame.key.set_repeat(300, 35)
    clock = pygame.time.Clock()

    world = World()
    world.add_system(CursorTrailSystem(world.event_bus))

    panes = create_panes(world, config)
    active = 0

    renderer = Renderer(screen)
    input_handler = InputHandler()

    def on_trail_started(event: TrailStartedEvent) -> None:
        entity = world.get_entity(event.entity_id)
        logger.debug("Trail on %s from %.0f px away", entity.name if entity else "?", event.distance)

    world.event_bus.subscribe(TrailStartedEvent, on_trail_started)

    def active_pane() -> TerminalPane:
        return panes[active][0]

    def next_pane() -> None:
        nonlocal active
        active = (active + 1) % len(panes)

    trails_enabled = config.trail.enabled

    def toggle_trails() -> None:
        nonlocal trails_enabled
        trails_enabled = not trails_enabled
        for _, trail in world.entity_manager.get_all_components(CursorTrail):
            trail.settings.enabled = trails_enabled
        logger.info("Trails %s", "enabled" if trails_enabled else "disabled")

    input_handler.register_callback(InputAction.TYPE_TEXT, lambda text: active_pane().insert_text(text))
    input_handler.register_callback(InputAction.BACKSPACE, lambda: active_pane().backspace())
    input_handler.register_callback(InputAction.DELETE_WORD, lambda: active_pane().delete_word())
    input_handler.register_callback(InputAction.NEWLINE, lambda: active_pane().newline())
    input_handler.register_callback(InputAction.MOVE_LEFT, lambda: active_pane().move(-1, 0))
    input_handler.register_callback(InputAction.MOVE_RIGHT, lambda: active_pane().move(1, 0))
    input_handler.register_callback(InputAction.MOVE_UP, lambda: active_pane().move(0, -1))
    input_handler.register_callback(InputAction.MOVE_DOWN, lambda: active_pane().move(0, 1))
    input_handler.register_callback(InputAction.HOME, lambda: active_pane().home())
    input_handler.register_callback(InputAction.END, lambda: active_pane().end())
    input_handler.register_callback(InputAction.NEXT_PANE, next_pane)
    input_handler.register_callback(InputAction.TOGGLE_TRAIL, toggle_trails)
    input_handler.register_callback(InputAction.PAUSE, world.toggle_pause)

    pygame.key.start_text_input()
    running = True
    while running:
        events = pygame.event.get()
        for event in events:
            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                renderer.handle_resize(screen)

        running = input_handler.process_events(events)

        sync_cursor_bounds(world, panes)
        world.update(pygame.time.get_ticks())

        renderer.render(world, panes, active, clock.get_fps())
        pygame.display.flip()
        clock.tick(config.fps)

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
