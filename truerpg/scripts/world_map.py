"""Noise-generated terrain for the endless world map."""

from __future__ import annotations

import math
from typing import Any, List, Optional

import numpy as np

from truerpg.components import (
    MapObject,
    Tile,
    TransformComponent,
    WorldMapComponent,
    WorldMapGenerator,
)
from truerpg.ecs import Entity
from truerpg.noise import OpenSimplexNoise
from truerpg.rect import Rect
from truerpg.script import Script
from truerpg.texture import Texture
from truerpg.vector import Vec2
from truerpg.window import Window

DEBUG_SEED = 2
RENDER_MARGIN = 3

# Thresholds compared in single precision.
_DIRT_LEVEL = float(np.float32(0.3))
_GRASS_LEVEL = float(np.float32(-0.2))
_WOODS_LEVEL = float(np.float32(-0.15))


def _remainder(value: float, divisor: int) -> float:
    """Remainder of the truncated ``value * 10000``, keeping the dividend's sign."""
    return math.fmod(int(value * 10000), divisor)


class NoiseMapGenerator(WorldMapGenerator):
    """Lays out sand, grass and dirt from simplex noise, with trees and bushes on grass."""

    def __init__(self, texture: Texture, player: Entity) -> None:
        self.noise = OpenSimplexNoise(DEBUG_SEED, 2, 2.0, 0.5, 32.0)
        self.texture = texture
        self.player = player
        self.sand_tile = Tile(texture, Rect(192, 4224, 32, 32))
        self.grass_tile = Tile(texture, Rect(96, 4224, 32, 32))
        self.dirt_tile = Tile(texture, Rect(160, 4224, 32, 32))
        self.mushroom_tile = Tile(texture, Rect(0, 4000, 32, 32))
        self.tree_object = MapObject(texture, Rect(64, 4160, 64, 64), Vec2(16, -8), 20)
        self.bush_object = MapObject(texture, Rect(32, 4064, 32, 32), Vec2(0.0, 0.0), 4)

    def generate_tiles(self, x: int, y: int) -> List[Tile]:
        value = self.noise.get_noise(x, y)
        if value > _DIRT_LEVEL:
            return [self.dirt_tile]
        if value > _GRASS_LEVEL:
            if _remainder(value, 83) == 1:
                return [self.grass_tile, self.mushroom_tile]
            return [self.grass_tile]
        return [self.sand_tile]

    def generate_objects(self, x: int, y: int, tiles: List[Tile]) -> List[MapObject]:
        value = self.noise.get_noise(x, y)
        if _WOODS_LEVEL < value < _DIRT_LEVEL and len(tiles) == 1:
            if _remainder(value, 11) == 1:
                return [self.tree_object]
            if _remainder(value, 31) == 1:
                return [self.bush_object]
        return []


class WorldMapScript(Script):
    """Installs the noise generator and sizes the render radius to the window.

    :attr:`window` is the window to fit; the current window is used when it
    is ``None``.
    """

    def __init__(self, texture: Texture, player: Entity) -> None:
        self.generator = NoiseMapGenerator(texture, player)
        self.window: Optional[Any] = None
        self._world_map: Optional[WorldMapComponent] = None
        self._transform: Optional[TransformComponent] = None

    def on_create(self) -> None:
        self._world_map = self.get_component(WorldMapComponent)
        self._transform = self.get_component(TransformComponent)
        self._world_map.generator = self.generator

    def on_update(self, delta_time: float) -> None:
        window = self.window if self.window is not None else Window.instance()
        radius = max(window.width, window.height) // 2
        scale = max(self._transform.scale.x, self._transform.scale.y)
        self._world_map.render_radius = int(
            radius / (scale * self._world_map.tile_size) + RENDER_MARGIN
        )