"""Base class for behaviour attached to an entity."""

from __future__ import annotations

from typing import Type, TypeVar

from truerpg.ecs import Entity

T = TypeVar("T")


class Script:
    """Per-entity behaviour; the script system sets :attr:`entity` before ``on_create``."""

    entity: Entity = Entity()

    def get_component(self, kind: Type[T]) -> T:
        """The component of type ``kind`` of the entity the script runs on."""
        return self.entity.get_component(kind)

    def on_create(self) -> None:
        """Called once, before the first update."""

    def on_update(self, delta_time: float) -> None:
        """Called every frame with the seconds since the previous frame."""

    def on_destroy(self) -> None:
        """Called once when the script is torn down."""