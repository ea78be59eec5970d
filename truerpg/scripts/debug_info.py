"""Shows frames per second and the player's tile position."""

from __future__ import annotations

import time
from typing import Callable, Optional

from truerpg.components import (
    CameraComponent,
    HierarchyComponent,
    TextRendererComponent,
    TransformComponent,
)
from truerpg.ecs import Entity
from truerpg.script import Script
from truerpg.vector import Vec2

TILE_PIXELS = 64


class DebugInfoScript(Script):
    """Writes FPS and the parent entity's position into the entity's text.

    The text sits in the bottom-left corner of the camera. :attr:`clock`
    returns the current time in seconds.
    """

    def __init__(self, camera_entity: Entity) -> None:
        self.camera_entity = camera_entity
        self.clock: Callable[[], float] = time.perf_counter
        self.fps = 0
        self._frame_count = 0
        self._last_time: Optional[float] = None

    def on_update(self, delta_time: float) -> None:
        now = self.clock()
        if self._last_time is None:
            self._last_time = now
        self._frame_count += 1
        if now - self._last_time >= 1.0:
            self.fps = self._frame_count
            self._frame_count = 0
            self._last_time = now

        transform = self.get_component(TransformComponent)
        camera = self.camera_entity.get_component(CameraComponent)
        transform.position = Vec2(-camera.width() / 2, -camera.height() / 2)
        transform.scale = Vec2(1 / camera.zoom, 1 / camera.zoom)

        player = self.get_component(HierarchyComponent).parent
        position = player.get_component(TransformComponent).position

        renderer = self.get_component(TextRendererComponent)
        renderer.text = (
            f"FPS: {self.fps}"
            f"\nx: {position.x / TILE_PIXELS:.6f} y: {position.y / TILE_PIXELS:.6f}"
        )