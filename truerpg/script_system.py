"""Creates, updates and tears down the scripts bound to entities."""

from __future__ import annotations

from truerpg.components import NativeScriptComponent
from truerpg.ecs import Entity, Registry


class ScriptSystem:
    """Runs every :class:`NativeScriptComponent` of a registry."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def update(self, delta_time: float) -> None:
        """Create scripts that do not exist yet, then update all of them."""
        for entity_id in self.registry.view(NativeScriptComponent):
            component = self.registry.get(entity_id, NativeScriptComponent)
            if component.instance is None:
                script = component.instantiate()
                script.entity = Entity(entity_id, self.registry)
                script.on_create()
            component.instance.on_update(delta_time)

    def destroy_script(self, entity_id: int) -> None:
        """Tear down the entity's script, if it has a live one."""
        if not self.registry.has(entity_id, NativeScriptComponent):
            return
        component = self.registry.get(entity_id, NativeScriptComponent)
        if component.instance is not None:
            component.instance.on_destroy()
            component.release()

    def destroy(self) -> None:
        """Tear down every live script."""
        for entity_id in self.registry.view(NativeScriptComponent):
            self.destroy_script(entity_id)