import pygame
import pytest

from truerpg.components import (
    HierarchyComponent,
    NameComponent,
    TransformComponent,
    WorldMapComponent,
)
from truerpg.ecs import Entity, Registry
from truerpg.rect import Rect
from truerpg.scripts.world_map import NoiseMapGenerator, WorldMapScript
from truerpg.texture import Texture
from truerpg.vector import Vec2


class FakeWindow:
    def __init__(self, width, height):
        self.width = width
        self.height = height


@pytest.fixture
def texture():
    return Texture(pygame.Surface((64, 64)), "base.png")


@pytest.fixture
def generator(texture):
    return NoiseMapGenerator(texture, Entity())


GRID = [(x, y) for x in range(-12, 12) for y in range(-12, 12)]


def test_tiles_are_known_kinds(generator):
    allowed = [
        [generator.dirt_tile],
        [generator.grass_tile],
        [generator.grass_tile, generator.mushroom_tile],
        [generator.sand_tile],
    ]
    for x, y in GRID:
        assert generator.generate_tiles(x, y) in allowed


def test_tile_rects_follow_atlas(generator):
    assert generator.sand_tile.texture_rect == Rect(192, 4224, 32, 32)
    assert generator.grass_tile.texture_rect == Rect(96, 4224, 32, 32)
    assert generator.tree_object.order_pivot == 20


def test_objects_only_on_plain_grass(generator):
    for x, y in GRID:
        tiles = generator.generate_tiles(x, y)
        objects = generator.generate_objects(x, y, tiles)
        if objects:
            assert tiles == [generator.grass_tile]
            assert objects in ([generator.tree_object], [generator.bush_object])


def test_no_objects_when_cell_has_two_tiles(generator):
    two = [generator.grass_tile, generator.mushroom_tile]
    for x, y in GRID:
        assert generator.generate_objects(x, y, two) == []


def test_generation_is_deterministic(texture, generator):
    other = NoiseMapGenerator(texture, Entity())
    for x, y in GRID[:50]:
        assert generator.generate_tiles(x, y) == other.generate_tiles(x, y)


def test_script_installs_generator_and_sizes_radius(texture):
    registry = Registry()
    entity = Entity(registry.create(), registry)
    entity.add_component(TransformComponent(scale=Vec2(2.0, 2.0)))
    entity.add_component(HierarchyComponent())
    entity.add_component(NameComponent("worldMap"))
    world_map = entity.add_component(WorldMapComponent())

    script = WorldMapScript(texture, Entity())
    script.entity = entity
    script.window = FakeWindow(1280, 720)
    script.on_create()
    assert world_map.generator is script.generator

    script.on_update(0.016)
    assert world_map.render_radius == 13


def test_radius_grows_with_window(texture):
    registry = Registry()
    entity = Entity(registry.create(), registry)
    entity.add_component(TransformComponent(scale=Vec2(2.0, 2.0)))
    world_map = entity.add_component(WorldMapComponent())
    script = WorldMapScript(texture, Entity())
    script.entity = entity
    script.on_create()

    script.window = FakeWindow(640, 480)
    script.on_update(0.0)
    small = world_map.render_radius
    script.window = FakeWindow(2560, 1440)
    script.on_update(0.0)
    assert world_map.render_radius > small