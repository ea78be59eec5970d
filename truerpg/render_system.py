"""Draws the world map, sprites and texts of a scene through its camera."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Tuple

from truerpg.components import (
    AutoOrderComponent,
    CameraComponent,
    HorizontalAlign,
    SpriteRendererComponent,
    TextRendererComponent,
    TransformComponent,
    VerticalAlign,
    WorldMapComponent,
)
from truerpg.ecs import Entity, Registry
from truerpg.hierarchy import compute_transform
from truerpg.sprite_batch import SpriteBatch, SpriteBatchError
from truerpg.text import Text
from truerpg.texture import Sprite
from truerpg.vector import Vec2

MAX_SPRITES = 30000

logger = logging.getLogger(__name__)


def _to_byte(channel: float) -> int:
    return max(0, min(255, round(channel * 255)))


class RenderSystem:
    """Renders every visible component of a registry onto a window.

    Nothing is drawn while the registry has no camera. When several cameras
    exist, the last one found is used.
    """

    def __init__(self, registry: Registry, window: Any) -> None:
        self.registry = registry
        self.window = window
        self.batch = SpriteBatch(MAX_SPRITES)
        self.viewport: Tuple[int, int] = (window.width, window.height)
        window.on_resize.add(self.resize)

    def draw(self) -> int:
        """Render one frame; return how many sprites reached the window."""
        camera: Optional[CameraComponent] = None
        camera_transform: Optional[TransformComponent] = None
        for entity_id in self.registry.view(CameraComponent):
            camera = self.registry.get(entity_id, CameraComponent)
            camera_transform = compute_transform(Entity(entity_id, self.registry))
        if camera is None or camera_transform is None:
            return 0

        target = self.window.surface
        target.fill(tuple(_to_byte(channel) for channel in camera.background))

        width, height = self._camera_size(camera)
        self.batch.set_camera(camera_transform.position, width, height)
        self.batch.begin()
        self._draw_world_maps(camera_transform.position)
        self._draw_sprites()
        self._draw_texts()
        return self.batch.end(target)

    def destroy(self) -> None:
        """Release the batch and stop listening to window resizes."""
        self.batch.destroy()
        self.window.on_resize.remove(self.resize)

    def resize(self, width: int, height: int) -> None:
        """Follow the window's new framebuffer size."""
        self.viewport = (width, height)

    def _camera_size(self, camera: CameraComponent) -> Tuple[float, float]:
        if camera.window is not None:
            return camera.width(), camera.height()
        return float(self.window.width) / camera.zoom, float(self.window.height) / camera.zoom

    def _submit(self, sprite: Sprite, layer: int, order: int = 0) -> None:
        try:
            self.batch.draw(sprite, layer, order)
        except SpriteBatchError as exc:
            logger.error("%s", exc)

    def _draw_world_maps(self, camera_position: Vec2) -> None:
        for entity_id in self.registry.view(WorldMapComponent):
            world_map = self.registry.get(entity_id, WorldMapComponent)
            generator = world_map.generator
            if generator is None:
                continue
            transform = compute_transform(Entity(entity_id, self.registry))
            tile_size = float(world_map.tile_size)
            current_x = math.floor(camera_position.x / (tile_size * transform.scale.x))
            current_y = math.floor(camera_position.y / (tile_size * transform.scale.y))
            radius = world_map.render_radius

            for y in range(current_y + radius - 1, current_y - radius, -1):
                for x in range(current_x - radius + 1, current_x + radius):
                    cell = Vec2(x, y) * tile_size * transform.scale
                    tiles = generator.generate_tiles(x, y)
                    for tile in tiles:
                        sprite = Sprite(tile.texture)
                        sprite.texture_rect = tile.texture_rect
                        sprite.position = cell
                        sprite.scale = transform.scale
                        self._submit(sprite, world_map.tile_layer)
                    for obj in generator.generate_objects(x, y, tiles):
                        sprite = Sprite(obj.texture)
                        sprite.texture_rect = obj.texture_rect
                        sprite.position = cell
                        sprite.origin = obj.origin
                        sprite.scale = transform.scale
                        order = -int(sprite.position.y) - obj.order_pivot
                        self._submit(sprite, world_map.object_layer, order)

    def _draw_sprites(self) -> None:
        for entity_id in self.registry.view(SpriteRendererComponent):
            renderer = self.registry.get(entity_id, SpriteRendererComponent)
            transform = compute_transform(Entity(entity_id, self.registry))

            sprite = Sprite(renderer.texture)
            sprite.texture_rect = renderer.texture_rect
            sprite.color = renderer.color
            sprite.position = transform.position
            sprite.origin = transform.origin
            sprite.scale = transform.scale

            order = renderer.order
            if self.registry.has(entity_id, AutoOrderComponent):
                pivot = self.registry.get(entity_id, AutoOrderComponent).order_pivot
                order = -int(transform.position.y) - pivot
            self._submit(sprite, renderer.layer, order)

    def _draw_texts(self) -> None:
        for entity_id in self.registry.view(TextRendererComponent):
            renderer = self.registry.get(entity_id, TextRendererComponent)
            transform = compute_transform(Entity(entity_id, self.registry))

            text = Text(renderer.font, renderer.text)
            text.color = renderer.color
            text.position = transform.position

            bounds = text.local_bounds()
            origin = transform.origin
            if renderer.horizontal_align is HorizontalAlign.CENTER:
                origin += Vec2(bounds.width / 2, 0.0)
            elif renderer.horizontal_align is HorizontalAlign.RIGHT:
                origin += Vec2(bounds.width, 0.0)
            if renderer.vertical_align is VerticalAlign.CENTER:
                origin += Vec2(0.0, bounds.height / 2)
            elif renderer.vertical_align is VerticalAlign.TOP:
                origin += Vec2(0.0, bounds.height)
            text.origin = origin
            text.scale = transform.scale

            try:
                text.draw(self.batch, renderer.layer, renderer.order)
            except SpriteBatchError as exc:
                logger.error("%s", exc)