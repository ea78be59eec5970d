"""A minimal entity-component registry and a handle type for its entities."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Type, TypeVar

from truerpg.event import Event

T = TypeVar("T")


class Registry:
    """Stores components per entity, at most one component of each type.

    ``on_construct(kind)`` and ``on_destroy(kind)`` return events that are
    called with ``(registry, entity_id)`` when a component of that type is
    added or is about to be removed.
    """

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._alive: Set[int] = set()
        self._pools: Dict[type, Dict[int, Any]] = {}
        self._constructed: Dict[type, Event] = {}
        self._destroyed: Dict[type, Event] = {}

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._alive

    def __len__(self) -> int:
        return len(self._alive)

    def _check(self, entity_id: int) -> None:
        if entity_id not in self._alive:
            raise KeyError(f"no such entity: {entity_id!r}")

    def create(self) -> int:
        """Create a new entity and return its id."""
        entity_id = next(self._ids)
        self._alive.add(entity_id)
        return entity_id

    def destroy(self, entity_id: int) -> None:
        """Remove every component of the entity, then the entity itself."""
        self._check(entity_id)
        for kind in list(self._pools):
            if entity_id in self._pools[kind]:
                self.remove(entity_id, kind)
        self._alive.discard(entity_id)

    def emplace(self, entity_id: int, component: T) -> T:
        """Attach ``component`` to the entity and return it."""
        self._check(entity_id)
        kind = type(component)
        pool = self._pools.setdefault(kind, {})
        if entity_id in pool:
            raise ValueError(f"entity {entity_id} already has a {kind.__name__}")
        pool[entity_id] = component
        if kind in self._constructed:
            self._constructed[kind](self, entity_id)
        return component

    def get(self, entity_id: int, kind: Type[T]) -> T:
        """The entity's component of type ``kind``."""
        self._check(entity_id)
        try:
            return self._pools[kind][entity_id]
        except KeyError:
            raise KeyError(f"entity {entity_id} has no {kind.__name__}") from None

    def has(self, entity_id: int, kind: type) -> bool:
        return entity_id in self._pools.get(kind, {})

    def remove(self, entity_id: int, kind: type) -> None:
        """Detach the entity's component of type ``kind`` if it has one."""
        pool = self._pools.get(kind)
        if pool is None or entity_id not in pool:
            return
        if kind in self._destroyed:
            self._destroyed[kind](self, entity_id)
        pool.pop(entity_id, None)

    def view(self, kind: type) -> List[int]:
        """Ids of all entities that have a component of type ``kind``."""
        return list(self._pools.get(kind, {}))

    def on_construct(self, kind: type) -> Event:
        return self._constructed.setdefault(kind, Event())

    def on_destroy(self, kind: type) -> Event:
        return self._destroyed.setdefault(kind, Event())


@dataclass(frozen=True)
class Entity:
    """A handle to one entity of a registry; the default handle is null."""

    id: Optional[int] = None
    registry: Optional[Registry] = field(default=None, repr=False)

    def _registry(self) -> Registry:
        if self.id is None or self.registry is None:
            raise ValueError("null entity has no components")
        return self.registry

    def add_component(self, component: T) -> T:
        return self._registry().emplace(self.id, component)

    def get_component(self, kind: Type[T]) -> T:
        return self._registry().get(self.id, kind)

    def has_component(self, kind: type) -> bool:
        return self._registry().has(self.id, kind)

    def remove_component(self, kind: type) -> None:
        self._registry().remove(self.id, kind)

    def __bool__(self) -> bool:
        return self.id is not None

    def __iter__(self) -> Iterator[Any]:
        yield self.id
        yield self.registry