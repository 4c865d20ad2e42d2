"""Frame-driven entity/system core."""
from .ecs import Entity, Component, System, EntityManager
from .world import World, FrameClock
from .events import EventBus, Event
from .system_priority import SystemPriority

__all__ = [
    'Entity', 'Component', 'System', 'EntityManager',
    'World', 'FrameClock', 'EventBus', 'Event',
    'SystemPriority',
]
