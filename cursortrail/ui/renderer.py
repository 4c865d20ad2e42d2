"""Main rendering logic for the demo terminal."""
from __future__ import annotations
from typing import TYPE_CHECKING
import pygame

from ..config import COLORS, FONT_SIZE, RENDER_EPSILON, TrailSettings
from ..entities.cursors import CursorBounds, CursorTrail

if TYPE_CHECKING:
    from ..animation.trail_animator import TrailAnimator
    from ..core.ecs import Entity
    from ..core.world import World
    from .terminal import TerminalPane


def trail_rgba(settings: TrailSettings, opacity: float) -> tuple[int, int, int, int]:
    """Trail color with alpha scaled by the animator's opacity."""
    alpha = int(settings.max_alpha * opacity)
    alpha = max(0, min(255, alpha))
    r, g, b = settings.color
    return (r, g, b, alpha)


def draw_trail(surface: pygame.Surface, animator: TrailAnimator, settings: TrailSettings) -> bool:
    """Draw an animator's trail polygon onto an alpha surface.

    Returns:
        True if anything was drawn
    """
    if not animator.needs_render:
        return False

    color = trail_rgba(settings, animator.opacity)
    if color[3] <= int(255 * RENDER_EPSILON):
        return False

    points = [p.to_tuple() for p in animator.trail_polygon()]
    pygame.draw.polygon(surface, color, points)
    return True


class Renderer:
    """Draws terminal panes, cursors, and their trails."""

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen

        pygame.font.init()
        self.font = pygame.font.Font(None, FONT_SIZE)
        self.font_small = pygame.font.Font(None, 16)

        # Trails are composited through one reusable alpha layer
        self._overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        self.show_stats = True

    def handle_resize(self, new_screen: pygame.Surface) -> None:
        """Handle window resize."""
        self.screen = new_screen
        self._overlay = pygame.Surface(new_screen.get_size(), pygame.SRCALPHA)

    def render(
        self,
        world: World,
        panes: list[tuple[TerminalPane, Entity]],
        active_index: int,
        fps: float,
    ) -> None:
        """Render one frame."""
        self.screen.fill(COLORS['background'])
        self._overlay.fill((0, 0, 0, 0))

        em = world.entity_manager
        drawn = 0

        for i, (pane, entity) in enumerate(panes):
            self._render_pane(pane, active=(i == active_index))

            trail = em.get_component(entity, CursorTrail)
            if trail and draw_trail(self._overlay, trail.animator, trail.settings):
                drawn += 1

        # Trails go under the cursor block
        self.screen.blit(self._overlay, (0, 0))

        for pane, entity in panes:
            bounds = em.get_component(entity, CursorBounds)
            if bounds and bounds.visible:
                pygame.draw.rect(self.screen, COLORS['cursor'], bounds.rect.to_tuple())

        if self.show_stats:
            self._render_stats(world, fps, drawn)

    def _render_pane(self, pane: TerminalPane, active: bool) -> None:
        """Render pane background, border and text."""
        rect = pane.bounds().to_tuple()
        pygame.draw.rect(self.screen, COLORS['pane_bg'], rect)
        border = COLORS['pane_border_active'] if active else COLORS['pane_border']
        pygame.draw.rect(self.screen, border, rect, 1)

        for row, line in enumerate(pane.lines):
            if not line:
                continue
            # Monospace grid: render cell by cell so glyphs line up with the cursor
            for col, ch in enumerate(line[:pane.columns]):
                if ch == " ":
                    continue
                glyph = self.font.render(ch, True, COLORS['text'])
                self.screen.blit(glyph, (
                    pane.x + col * pane.cell_width,
                    pane.y + row * pane.cell_height + 2,
                ))

    def _render_stats(self, world: World, fps: float, trails_drawn: int) -> None:
        """Render frame stats in the corner."""
        paused = " (paused)" if world.paused else ""
        text = f"{fps:.0f} fps  t={world.now_ms}ms  trails={trails_drawn}{paused}"
        surf = self.font_small.render(text, True, COLORS['pane_border_active'])
        self.screen.blit(surf, (8, self.screen.get_height() - 18))
