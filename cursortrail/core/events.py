"""Event bus for decoupled communication between systems and the renderer."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
from uuid import UUID


@dataclass
class Event:
    """Base class for all events."""
    pass


@dataclass
class TrailStartedEvent(Event):
    """Fired when a cursor's trail becomes visible."""
    entity_id: UUID
    distance: float  # Trail-to-cursor distance when it appeared


@dataclass
class TrailFinishedEvent(Event):
    """Fired when a cursor's trail has faded out."""
    entity_id: UUID


@dataclass
class CursorResetEvent(Event):
    """Fired when a cursor's trail state is cleared (hidden cursor, trail disabled)."""
    entity_id: UUID


EventHandler = Callable[[Event], None]


class EventBus:
    """Central event bus for publishing and subscribing to events."""

    def __init__(self) -> None:
        self._handlers: dict[type[Event], list[EventHandler]] = {}
        self._queued_events: list[Event] = []
        self._processing: bool = False

    def subscribe(self, event_type: type[Event], handler: EventHandler) -> None:
        """Subscribe a handler to an event type (and its subclasses)."""
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: type[Event], handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        If called during event processing, the event is queued.
        """
        if self._processing:
            self._queued_events.append(event)
            return

        self._dispatch(event)

    def _dispatch(self, event: Event) -> None:
        for registered_type, handlers in list(self._handlers.items()):
            if isinstance(event, registered_type):
                for handler in list(handlers):
                    handler(event)

    def process_queue(self) -> None:
        """Deliver events queued during dispatch."""
        self._processing = True
        try:
            while self._queued_events:
                current_queue = self._queued_events
                self._queued_events = []
                for event in current_queue:
                    self._dispatch(event)
        finally:
            self._processing = False

    def clear(self) -> None:
        """Clear all handlers and queued events."""
        self._handlers.clear()
        self._queued_events.clear()
