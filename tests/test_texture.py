import pygame
import pytest

from truerpg.rect import Rect
from truerpg.texture import Sprite, Texture, TextureError
from truerpg.vector import Vec2


def make_texture(width=32, height=16):
    return Texture(pygame.Surface((width, height)), "memory.png")


def test_texture_takes_size_and_path_from_surface():
    texture = make_texture(32, 16)
    assert (texture.width, texture.height) == (32, 16)
    assert texture.path == "memory.png"
    assert texture.id > 0


def test_empty_texture_has_no_id_or_size():
    texture = Texture()
    assert (texture.id, texture.width, texture.height, texture.path) == (0, 0, 0, "")


def test_texture_ids_are_unique():
    ids = {make_texture().id for _ in range(5)}
    assert len(ids) == 5


def test_destroy_releases_image_but_keeps_size():
    texture = make_texture(8, 4)
    texture.destroy()
    assert texture.id == 0
    assert texture.surface is None
    assert (texture.width, texture.height) == (8, 4)


def test_load_flips_image_vertically(tmp_path):
    surface = pygame.Surface((2, 2))
    surface.fill((255, 0, 0), pygame.Rect(0, 0, 2, 1))
    surface.fill((0, 0, 255), pygame.Rect(0, 1, 2, 1))
    path = tmp_path / "image.bmp"
    pygame.image.save(surface, str(path))

    texture = Texture.load(path)
    assert (texture.width, texture.height) == (2, 2)
    assert texture.path == str(path)
    assert tuple(texture.surface.get_at((0, 0)))[:3] == (0, 0, 255)
    assert tuple(texture.surface.get_at((0, 1)))[:3] == (255, 0, 0)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(TextureError):
        Texture.load(tmp_path / "missing.png")


def test_sprite_defaults_cover_whole_texture():
    texture = make_texture(32, 16)
    sprite = Sprite(texture)
    assert sprite.texture is texture
    assert sprite.texture_rect == Rect(0, 0, 32, 16)
    assert sprite.scale == Vec2(1.0, 1.0)
    assert sprite.color == (1.0, 1.0, 1.0, 1.0)


def test_local_bounds_ignore_mirroring():
    sprite = Sprite(make_texture())
    sprite.texture_rect = Rect(4, 8, 32, -16)
    sprite.position = Vec2(100.0, 50.0)
    assert sprite.local_bounds() == Rect(0.0, 0.0, 32.0, 16.0)


def test_global_bounds_without_transform_are_shifted_local_bounds():
    sprite = Sprite(make_texture(32, 16))
    sprite.position = Vec2(100.0, 50.0)
    local = sprite.local_bounds()
    assert sprite.global_bounds() == Rect(100.0, 50.0, local.width, local.height)


def test_global_bounds_apply_origin_and_scale():
    sprite = Sprite(make_texture(32, 32))
    sprite.origin = Vec2(16.0, 0.0)
    sprite.scale = Vec2(2.0, 2.0)
    bounds = sprite.global_bounds()
    local = sprite.local_bounds()
    assert bounds.left == -32.0
    assert bounds.bottom == 0.0
    assert (bounds.width, bounds.height) == (local.width * 2, local.height * 2)