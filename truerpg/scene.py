"""A scene: a registry of entities and the systems that run them."""

from __future__ import annotations

from typing import Any

from truerpg.audio import AudioDevice
from truerpg.audio_system import AudioSystem
from truerpg.components import HierarchyComponent, NameComponent, TransformComponent
from truerpg.ecs import Entity, Registry
from truerpg.physics import PhysicsSystem
from truerpg.render_system import RenderSystem
from truerpg.script_system import ScriptSystem

DEFAULT_NAME = "Entity"


class Scene:
    """Owns the entities of a game and updates scripts, physics, rendering and audio.

    The mixing device is created but not started; call
    ``scene.audio_device.start()`` to play the mix.
    """

    def __init__(self, window: Any) -> None:
        self.window = window
        self.registry = Registry()
        self.audio_device = AudioDevice()
        self.script_system = ScriptSystem(self.registry)
        self.physics_system = PhysicsSystem(self.registry)
        self.render_system = RenderSystem(self.registry, window)
        self.audio_system = AudioSystem(self.registry, self.audio_device)

    def create_entity(self, name: str = "") -> Entity:
        """Create an entity with a transform, a hierarchy link and a name."""
        entity = Entity(self.registry.create(), self.registry)
        entity.add_component(TransformComponent())
        entity.add_component(HierarchyComponent())
        entity.add_component(NameComponent(name or DEFAULT_NAME))
        return entity

    def destroy_entity(self, entity: Entity) -> None:
        """Tear down the entity's script, then remove the entity."""
        self.script_system.destroy_script(entity.id)
        self.registry.destroy(entity.id)

    def update(self, delta_time: float) -> None:
        """Advance the scene by ``delta_time`` seconds and draw it."""
        self.script_system.update(delta_time)
        self.physics_system.update(delta_time)
        self.render_system.draw()
        self.audio_system.update()

    def destroy(self) -> None:
        """Tear down scripts, rendering and audio."""
        self.script_system.destroy()
        self.render_system.destroy()
        self.audio_system.destroy()
        self.audio_device.close()