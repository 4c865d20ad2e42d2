"""Cursor components and factory."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..core.ecs import Component, Entity
from ..animation.geometry import Rect
from ..animation.trail_animator import TrailAnimator
from ..config import TrailSettings

if TYPE_CHECKING:
    from ..core.world import World


@dataclass
class CursorBounds(Component):
    """Where the cursor is this frame, in screen pixels."""
    rect: Rect = field(default_factory=Rect)
    visible: bool = True

    def move_to(self, rect: Rect) -> None:
        self.rect = rect


@dataclass
class CursorTrail(Component):
    """Trail animation attached to a cursor."""
    animator: TrailAnimator = field(default_factory=TrailAnimator)
    settings: TrailSettings = field(default_factory=TrailSettings)
    was_rendering: bool = False  # needs_render seen on the previous frame

    def apply_settings(self, settings: TrailSettings) -> None:
        """Swap in new settings; tunables take effect on the next frame."""
        settings.validate()
        self.settings = settings
        settings.apply_to(self.animator)


def create_cursor(
    world: World,
    name: str,
    rect: Rect,
    settings: TrailSettings | None = None,
) -> Entity:
    """Create a cursor entity with bounds and a trail.

    Args:
        world: The world to add the cursor to
        name: Cursor name (e.g. the pane it belongs to)
        rect: Initial cursor bounds
        settings: Trail settings, defaults if omitted
    """
    settings = settings or TrailSettings()
    settings.validate()

    animator = TrailAnimator(
        animation_speed=settings.animation_speed,
        fade_speed=settings.fade_speed,
        trail_width=settings.trail_width,
    )

    entity = world.create_entity(name)
    em = world.entity_manager
    em.add_component(entity, CursorBounds(rect=rect))
    em.add_component(entity, CursorTrail(animator=animator, settings=settings))
    return entity
