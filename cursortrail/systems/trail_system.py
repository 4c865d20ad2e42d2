"""Trail system - feeds cursor bounds to each cursor's animator every frame."""
from __future__ import annotations
import logging

from ..core.ecs import System, EntityManager, Entity
from ..core.events import EventBus, TrailStartedEvent, TrailFinishedEvent, CursorResetEvent
from ..core.system_priority import SystemPriority
from ..entities.cursors import CursorBounds, CursorTrail

logger = logging.getLogger(__name__)


class CursorTrailSystem(System):
    """Advances every cursor trail with the frame clock.

    Each cursor owns its own animator, so panes animate independently.
    Hidden cursors and disabled trails are reset so they start from rest
    when they come back.
    """

    priority = SystemPriority.TRAIL

    def __init__(self, event_bus: EventBus) -> None:
        self.event_bus = event_bus

    def update(self, now_ms: int, entity_manager: EntityManager) -> None:
        """Update trail state for all cursors."""
        for entity, trail in entity_manager.get_all_components(CursorTrail):
            bounds = entity_manager.get_component(entity, CursorBounds)

            if bounds is None or not bounds.visible or not trail.settings.enabled:
                self._reset_trail(entity, trail)
                continue

            trail.animator.update(bounds.rect, now_ms)
            self._publish_transitions(entity, trail)

    def _reset_trail(self, entity: Entity, trail: CursorTrail) -> None:
        if not trail.animator.state.initialized:
            return
        trail.animator.reset()
        trail.was_rendering = False
        logger.debug("Trail reset for %s", entity.name)
        self.event_bus.publish(CursorResetEvent(entity_id=entity.id))

    def _publish_transitions(self, entity: Entity, trail: CursorTrail) -> None:
        """Announce a trail appearing or fading out."""
        rendering = trail.animator.needs_render
        if rendering and not trail.was_rendering:
            distance = trail.animator.state.trail_distance
            logger.debug("Trail started for %s (%.1f px)", entity.name, distance)
            self.event_bus.publish(TrailStartedEvent(entity_id=entity.id, distance=distance))
        elif trail.was_rendering and not rendering:
            logger.debug("Trail finished for %s", entity.name)
            self.event_bus.publish(TrailFinishedEvent(entity_id=entity.id))
        trail.was_rendering = rendering

    def on_entity_destroyed(self, entity: Entity, entity_manager: EntityManager) -> None:
        trail = entity_manager.get_component(entity, CursorTrail)
        if trail and trail.was_rendering:
            self.event_bus.publish(TrailFinishedEvent(entity_id=entity.id))
