import pygame
import pytest

from truerpg.rect import Rect
from truerpg.sprite_batch import MAX_TEXTURES, SpriteBatch, SpriteBatchError
from truerpg.texture import Sprite, Texture
from truerpg.vector import Vec2


def make_texture(color=(255, 255, 255), size=(4, 4)):
    surface = pygame.Surface(size)
    surface.fill(color)
    return Texture(surface, "solid.png")


def make_sprite(texture, position=Vec2()):
    sprite = Sprite(texture)
    sprite.position = position
    return sprite


def test_draw_emits_quad_corners():
    texture = make_texture()
    sprite = make_sprite(texture, Vec2(10, 20))
    sprite.origin = Vec2(1, 1)
    sprite.scale = Vec2(2, 2)
    batch = SpriteBatch()
    batch.begin()
    batch.draw(sprite)
    bl, br, tr, tl = (v.position for v in batch.vertices())
    assert bl == Vec2(8, 18)
    assert br - bl == Vec2(texture.width * 2, 0)
    assert tr - bl == Vec2(texture.width * 2, texture.height * 2)
    assert tl - bl == Vec2(0, texture.height * 2)


def test_texture_ids_are_shared():
    first, second = make_texture(), make_texture()
    batch = SpriteBatch()
    batch.begin()
    batch.draw(make_sprite(first))
    batch.draw(make_sprite(second))
    batch.draw(make_sprite(first))
    assert [v.tex_id for v in batch.vertices()[::4]] == [0, 1, 0]
    assert batch.textures == (first, second)


def test_orders_sort_within_layer():
    texture = make_texture()
    batch = SpriteBatch()
    batch.begin()
    batch.draw(make_sprite(texture, Vec2(1, 0)), order=5)
    batch.draw(make_sprite(texture, Vec2(2, 0)), order=1)
    batch.draw(make_sprite(texture, Vec2(3, 0)), order=5)
    xs = [v.position.x for v in batch.vertices()[::4]]
    assert xs == [2, 1, 3]


def test_layers_draw_in_ascending_order():
    texture = make_texture()
    batch = SpriteBatch()
    batch.begin()
    batch.draw(make_sprite(texture, Vec2(1, 0)), layer=2, order=-100)
    batch.draw(make_sprite(texture, Vec2(2, 0)), layer=1, order=100)
    xs = [v.position.x for v in batch.vertices()[::4]]
    assert xs == [2, 1]


def test_tex_coords_stay_inside_texture():
    batch = SpriteBatch()
    batch.begin()
    batch.draw(make_sprite(make_texture()))
    for vertex in batch.vertices():
        assert 0.0 < vertex.tex_coord.x < 1.0
        assert 0.0 < vertex.tex_coord.y < 1.0


def test_negative_height_flips_tex_coords():
    texture = make_texture(size=(8, 8))
    sprite = make_sprite(texture)
    sprite.texture_rect = Rect(0, 8, 8, -8)
    batch = SpriteBatch()
    batch.begin()
    batch.draw(sprite)
    bl, _, _, tl = batch.vertices()
    assert tl.tex_coord.y < bl.tex_coord.y
    assert tl.position.y > bl.position.y


def test_sprite_limit_raises():
    texture = make_texture()
    batch = SpriteBatch(1)
    batch.begin()
    batch.draw(make_sprite(texture))
    with pytest.raises(SpriteBatchError):
        batch.draw(make_sprite(texture))
    assert len(batch) == 1


def test_texture_limit_raises():
    batch = SpriteBatch()
    batch.begin()
    for _ in range(MAX_TEXTURES):
        batch.draw(make_sprite(make_texture()))
    with pytest.raises(SpriteBatchError):
        batch.draw(make_sprite(make_texture()))
    assert len(batch.textures) == MAX_TEXTURES


def test_begin_clears_previous_frame():
    batch = SpriteBatch()
    batch.begin()
    batch.draw(make_sprite(make_texture()))
    batch.begin()
    assert batch.vertices() == []
    assert len(batch) == 0


def test_end_renders_sprite_at_bottom_left():
    batch = SpriteBatch()
    batch.set_camera(Vec2(4, 4), 8, 8)
    batch.begin()
    batch.draw(make_sprite(make_texture((255, 0, 0))))
    target = pygame.Surface((8, 8))
    target.fill((0, 0, 0))
    assert batch.end(target) == 1
    assert tuple(target.get_at((1, 6)))[:3] == (255, 0, 0)
    assert tuple(target.get_at((6, 1)))[:3] == (0, 0, 0)


def test_end_applies_color_tint():
    sprite = make_sprite(make_texture((255, 255, 255)))
    sprite.color = (0.0, 0.0, 1.0, 1.0)
    batch = SpriteBatch()
    batch.set_camera(Vec2(2, 2), 4, 4)
    batch.begin()
    batch.draw(sprite)
    target = pygame.Surface((4, 4))
    target.fill((0, 0, 0))
    batch.end(target)
    assert tuple(target.get_at((2, 2)))[:3] == (0, 0, 255)


def test_destroy_drops_sprites():
    batch = SpriteBatch()
    batch.begin()
    batch.draw(make_sprite(make_texture()))
    batch.destroy()
    assert batch.vertices() == []