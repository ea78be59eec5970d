"""Keeps a greeting pinned to the top of the view with shifting colours."""

from __future__ import annotations

import math

from truerpg.components import CameraComponent, TextRendererComponent, TransformComponent
from truerpg.ecs import Entity
from truerpg.script import Script
from truerpg.vector import Vec2


class TextScript(Script):
    """Places the entity's text at the top of the camera and cycles its colour."""

    def __init__(self, camera_entity: Entity) -> None:
        self.camera_entity = camera_entity
        self._time = 0.0

    def on_update(self, delta_time: float) -> None:
        self._time += delta_time
        t = self._time

        transform = self.get_component(TransformComponent)
        camera = self.camera_entity.get_component(CameraComponent)
        transform.position = Vec2(0.0, camera.height() / 2)
        transform.scale = Vec2(1 / camera.zoom, 1 / camera.zoom)

        renderer = self.get_component(TextRendererComponent)
        renderer.color = (
            (math.sin(t) + 1) / 2,
            (math.sin(2 * t + 1) + 1) / 2,
            (math.sin(0.5 * t) + 2) / 2,
            1.0,
        )