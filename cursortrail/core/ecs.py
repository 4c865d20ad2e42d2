"""Entity-Component-System base classes."""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TypeVar, Iterator
from uuid import UUID, uuid4


@dataclass
class Component:
    """Base class for all components. Components are pure data containers."""
    pass


C = TypeVar('C', bound=Component)


@dataclass
class Entity:
    """A unique identifier grouping components, e.g. one terminal pane's cursor."""
    id: UUID = field(default_factory=uuid4)
    name: str = ""

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entity):
            return self.id == other.id
        return False


class EntityManager:
    """Stores entities and their components, indexed by component type."""

    def __init__(self) -> None:
        self._entities: dict[UUID, Entity] = {}
        self._components: dict[type[Component], dict[UUID, Component]] = {}

    def create_entity(self, name: str = "") -> Entity:
        """Create and register a new entity."""
        entity = Entity(name=name)
        self._entities[entity.id] = entity
        return entity

    def destroy_entity(self, entity: Entity) -> None:
        """Remove an entity along with every component attached to it."""
        if self._entities.pop(entity.id, None) is None:
            return
        for by_entity in self._components.values():
            by_entity.pop(entity.id, None)

    def add_component(self, entity: Entity, component: Component) -> None:
        """Attach a component, replacing any existing one of the same type."""
        self._components.setdefault(type(component), {})[entity.id] = component

    def remove_component(self, entity: Entity, component_type: type[Component]) -> None:
        self._components.get(component_type, {}).pop(entity.id, None)

    def get_component(self, entity: Entity, component_type: type[C]) -> C | None:
        """Get a specific component from an entity."""
        return self._components.get(component_type, {}).get(entity.id)  # type: ignore

    def has_component(self, entity: Entity, component_type: type[Component]) -> bool:
        return entity.id in self._components.get(component_type, {})

    def get_all_components(self, component_type: type[C]) -> Iterator[tuple[Entity, C]]:
        """Get all components of a specific type with their entities."""
        for entity_id, component in list(self._components.get(component_type, {}).items()):
            entity = self._entities.get(entity_id)
            if entity:
                yield entity, component  # type: ignore

    def get_entity(self, entity_id: UUID) -> Entity | None:
        return self._entities.get(entity_id)

    def get_entity_by_name(self, name: str) -> Entity | None:
        """Get the first entity with a specific name."""
        for entity in self._entities.values():
            if entity.name == name:
                return entity
        return None

    @property
    def entity_count(self) -> int:
        return len(self._entities)


class System(ABC):
    """Base class for all systems. Systems contain logic that operates on components."""

    priority: int = 0  # Lower numbers run first

    @abstractmethod
    def update(self, now_ms: int, entity_manager: EntityManager) -> None:
        """Update the system. Called once per frame.

        Args:
            now_ms: Frame clock in milliseconds
            entity_manager: The entity manager to query for entities/components
        """
        pass

    def on_entity_destroyed(self, entity: Entity, entity_manager: EntityManager) -> None:
        """Called before an entity is destroyed. Override for cleanup."""
        pass
