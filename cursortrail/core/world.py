"""World state container."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .ecs import EntityManager, System, Entity
from .events import EventBus

if TYPE_CHECKING:
    from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass
class FrameClock:
    """Monotonic millisecond clock driving the animation.

    Never runs backwards; a stale reading keeps the current time.
    """
    now_ms: int = 0
    frame: int = 0

    def advance(self, dt_ms: int) -> None:
        """Move the clock forward by dt_ms milliseconds."""
        self.now_ms += max(0, dt_ms)
        self.frame += 1

    def sync(self, now_ms: int) -> None:
        """Set the clock from an external timer reading (e.g. pygame ticks)."""
        if now_ms < self.now_ms:
            logger.warning("Clock went backwards (%d < %d), holding", now_ms, self.now_ms)
        else:
            self.now_ms = now_ms
        self.frame += 1


class World:
    """Main world state container. Coordinates entities, systems, and events."""

    def __init__(self) -> None:
        self.entity_manager = EntityManager()
        self.event_bus = EventBus()
        self.clock = FrameClock()
        self._systems: list[System] = []
        self._paused: bool = False

    def add_system(self, system: System) -> None:
        """Add a system to the world."""
        self._systems.append(system)
        self._systems.sort(key=lambda s: s.priority)

    def remove_system(self, system: System) -> None:
        self._systems.remove(system)

    def create_entity(self, name: str = "") -> Entity:
        return self.entity_manager.create_entity(name)

    def destroy_entity(self, entity: Entity) -> None:
        """Destroy an entity, letting systems clean up first."""
        for system in self._systems:
            system.on_entity_destroyed(entity, self.entity_manager)
        self.entity_manager.destroy_entity(entity)

    def update(self, now_ms: int) -> None:
        """Run one frame at the given timer reading."""
        self.clock.sync(now_ms)
        self._run_systems()

    def step(self, dt_ms: int) -> None:
        """Run one frame dt_ms after the previous one."""
        self.clock.advance(dt_ms)
        self._run_systems()

    def _run_systems(self) -> None:
        if self._paused:
            return

        for system in self._systems:
            system.update(self.clock.now_ms, self.entity_manager)

        # Process any queued events
        self.event_bus.process_queue()

    def pause(self) -> None:
        self._paused = True

    def unpause(self) -> None:
        self._paused = False

    def toggle_pause(self) -> None:
        """Toggle pause state."""
        self._paused = not self._paused

    @property
    def paused(self) -> bool:
        """Check if animation is paused."""
        return self._paused

    @property
    def now_ms(self) -> int:
        return self.clock.now_ms

    def get_entity(self, entity_id: UUID) -> Entity | None:
        """Get an entity by ID."""
        return self.entity_manager.get_entity(entity_id)
