"""Parent-child links between entities and transforms that follow them."""

from __future__ import annotations

from truerpg.components import HierarchyComponent, NameComponent, TransformComponent
from truerpg.ecs import Entity


def add_child(parent: Entity, child: Entity) -> None:
    """Make ``child`` the first child of ``parent``."""
    parent_hierarchy = parent.get_component(HierarchyComponent)
    child_hierarchy = child.get_component(HierarchyComponent)

    first_child = parent_hierarchy.first_child
    if first_child:
        first_child.get_component(HierarchyComponent).prev = child
    child_hierarchy.next = first_child
    parent_hierarchy.first_child = child
    parent_hierarchy.children += 1
    child_hierarchy.parent = parent


def find(parent: Entity, name: str) -> Entity:
    """The first descendant named ``name``, searched depth first; a null entity if none."""
    current = parent.get_component(HierarchyComponent).first_child
    while current:
        if current.get_component(NameComponent).name == name:
            return current
        found = find(current, name)
        if found:
            return found
        current = current.get_component(HierarchyComponent).next
    return Entity()


def compute_transform(entity: Entity) -> TransformComponent:
    """The entity's transform with every ancestor's position and scale applied."""
    own = entity.get_component(TransformComponent)
    position, scale = own.position, own.scale
    current = entity.get_component(HierarchyComponent).parent
    while current:
        transform = current.get_component(TransformComponent)
        position = position + transform.position
        scale = scale * transform.scale
        current = current.get_component(HierarchyComponent).parent
    return TransformComponent(position=position, origin=own.origin, scale=scale)