"""Moves rigid bodies and stops them before they overlap rectangle colliders."""

from __future__ import annotations

from truerpg.components import RectColliderComponent, RigidbodyComponent, TransformComponent
from truerpg.ecs import Registry
from truerpg.rect import Rect
from truerpg.vector import Vec2


def rects_collide(a: Rect, b: Rect) -> bool:
    """Whether the rectangles overlap; touching edges do not count."""
    return (
        a.left < b.left + b.width
        and a.left + a.width > b.left
        and a.bottom < b.bottom + b.height
        and a.bottom + a.height > b.bottom
    )


def _collider_rect(position: Vec2, collider: RectColliderComponent) -> Rect:
    return Rect(
        position.x + collider.offset.x,
        position.y + collider.offset.y,
        collider.size.x,
        collider.size.y,
    )


class PhysicsSystem:
    """Applies velocities, cancelling a move that would hit another collider."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def update(self, delta_time: float) -> None:
        registry = self.registry
        for entity_id in registry.view(RigidbodyComponent):
            rigidbody = registry.get(entity_id, RigidbodyComponent)
            transform = registry.get(entity_id, TransformComponent)
            next_pos = transform.position + rigidbody.velocity * delta_time

            if registry.has(entity_id, RectColliderComponent):
                collider = registry.get(entity_id, RectColliderComponent)
                for other_id in registry.view(RectColliderComponent):
                    if other_id == entity_id:
                        continue
                    other_transform = registry.get(other_id, TransformComponent)
                    other_collider = registry.get(other_id, RectColliderComponent)
                    if rects_collide(
                        _collider_rect(next_pos, collider),
                        _collider_rect(other_transform.position, other_collider),
                    ):
                        next_pos = transform.position
            transform.position = next_pos