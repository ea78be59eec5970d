"""Collects sprites by layer and draw order and renders them in one pass."""

from __future__ import annotations

import bisect
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pygame

from truerpg.rect import Rect
from truerpg.texture import Sprite, Texture
from truerpg.vector import Vec2

Color = Tuple[float, float, float, float]

MAX_TEXTURES = 16
_WHITE: Color = (1.0, 1.0, 1.0, 1.0)
_CACHE_SIZE = 4096


class SpriteBatchError(RuntimeError):
    """Raised when a batch cannot take another sprite."""


@dataclass(frozen=True)
class Vertex:
    """One corner of a sprite quad."""

    position: Vec2
    color: Color
    tex_coord: Vec2
    tex_id: int


@dataclass(frozen=True)
class _Quad:
    order: int
    texture: Texture
    texture_rect: Rect
    color: Color
    vertices: Tuple[Vertex, Vertex, Vertex, Vertex]


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _prepare_rect(rect: Rect) -> Rect:
    """Shrink the rectangle by half a texel on each side to avoid bleeding."""
    offset = 0.5
    left, bottom = float(rect.left), float(rect.bottom)
    width, height = float(rect.width), float(rect.height)
    left += _sign(width) * offset
    bottom += _sign(height) * offset
    width = _sign(width) * (abs(width) - 2 * offset)
    height = _sign(height) * (abs(height) - 2 * offset)
    return Rect(left, bottom, width, height)


def _tex_coords(texture: Texture, x: float, y: float) -> Vec2:
    u = x / texture.width if texture.width else 0.0
    v = y / texture.height if texture.height else 0.0
    return Vec2(u, v)


class SpriteBatch:
    """Gathers sprites between :meth:`begin` and :meth:`end`.

    Lower layers are drawn first; inside a layer, sprites with a lower order
    come first and equal orders keep the order they were drawn in.
    """

    def __init__(self, max_sprites: int = 2000) -> None:
        self.max_sprites = max_sprites
        self._layers: Dict[int, List[_Quad]] = {}
        self._textures: List[Texture] = []
        self._count = 0
        self._camera: Optional[Tuple[Vec2, float, float]] = None
        self._cache: "OrderedDict[tuple, pygame.Surface]" = OrderedDict()

    def __len__(self) -> int:
        return self._count

    @property
    def textures(self) -> Tuple[Texture, ...]:
        return tuple(self._textures)

    def begin(self) -> None:
        """Start a new frame, dropping everything drawn before."""
        self._layers.clear()
        self._textures.clear()
        self._count = 0

    def draw(self, sprite: Sprite, layer: int = 0, order: int = 0) -> None:
        """Queue ``sprite`` for rendering at the given layer and order."""
        if self._count >= self.max_sprites:
            raise SpriteBatchError("Cannot draw a sprite! Maximum number of sprites reached!")

        texture = sprite.texture
        tex_id = next(
            (index for index, known in enumerate(self._textures) if known.id == texture.id),
            None,
        )
        if tex_id is None:
            if len(self._textures) >= MAX_TEXTURES:
                raise SpriteBatchError(
                    f"Cannot draw a sprite with texture {texture.path}! "
                    "Maximum number of textures reached!"
                )
            self._textures.append(texture)
            tex_id = len(self._textures) - 1

        rect = sprite.texture_rect
        quad_pos = sprite.position - sprite.origin * sprite.scale
        w = abs(float(rect.width)) * sprite.scale.x
        h = abs(float(rect.height)) * sprite.scale.y
        r = _prepare_rect(rect)
        color = tuple(sprite.color)

        corners = (
            (quad_pos, r.left, r.bottom),
            (quad_pos + Vec2(w, 0.0), r.left + r.width, r.bottom),
            (quad_pos + Vec2(w, h), r.left + r.width, r.bottom + r.height),
            (quad_pos + Vec2(0.0, h), r.left, r.bottom + r.height),
        )
        vertices = tuple(
            Vertex(position, color, _tex_coords(texture, u, v), tex_id)
            for position, u, v in corners
        )
        quad = _Quad(order, texture, rect, color, vertices)
        bisect.insort(self._layers.setdefault(layer, []), quad, key=lambda q: q.order)
        self._count += 1

    def _quads(self) -> List[_Quad]:
        return [quad for layer in sorted(self._layers) for quad in self._layers[layer]]

    def vertices(self) -> List[Vertex]:
        """Every queued vertex in the order it will be drawn."""
        return [vertex for quad in self._quads() for vertex in quad.vertices]

    def set_camera(self, position: Vec2, width: float, height: float) -> None:
        """Show the world area of ``width`` by ``height`` centred on ``position``."""
        self._camera = (position, float(width), float(height))

    def end(self, target: pygame.Surface) -> int:
        """Render the queued sprites onto ``target``; return how many were drawn."""
        target_width, target_height = target.get_size()
        if self._camera is None:
            position, width, height = Vec2(), float(target_width), float(target_height)
        else:
            position, width, height = self._camera
        if width == 0 or height == 0:
            return 0
        sx = target_width / width
        sy = target_height / height

        drawn = 0
        for quad in self._quads():
            image = self._quad_image(quad, sx, sy)
            if image is None:
                continue
            bottom_left = quad.vertices[0].position
            top_right = quad.vertices[2].position
            left = min(bottom_left.x, top_right.x)
            top = max(bottom_left.y, top_right.y)
            x = (left - position.x + width / 2) * sx
            y = target_height - (top - position.y + height / 2) * sy
            target.blit(image, (round(x), round(y)))
            drawn += 1
        return drawn

    def _quad_image(self, quad: _Quad, sx: float, sy: float) -> Optional[pygame.Surface]:
        surface = quad.texture.surface
        if surface is None:
            return None
        bottom_left = quad.vertices[0].position
        top_right = quad.vertices[2].position
        quad_width = top_right.x - bottom_left.x
        quad_height = top_right.y - bottom_left.y
        size = (round(abs(quad_width) * sx), round(abs(quad_height) * sy))
        if size[0] <= 0 or size[1] <= 0:
            return None

        rect = quad.texture_rect
        # Texture rows are stored bottom-up while the screen grows downwards.
        flip_x = (rect.width < 0) != (quad_width < 0)
        flip_y = (rect.height < 0) == (quad_height < 0)
        key = (quad.texture.id, rect, size, flip_x, flip_y, quad.color)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        area = pygame.Rect(
            int(min(rect.left, rect.left + rect.width)),
            int(min(rect.bottom, rect.bottom + rect.height)),
            int(abs(rect.width)),
            int(abs(rect.height)),
        ).clip(surface.get_rect())
        if area.width == 0 or area.height == 0:
            return None

        image = pygame.transform.flip(surface.subsurface(area), flip_x, flip_y)
        image = pygame.transform.scale(image, size)
        if quad.color != _WHITE:
            tint = tuple(max(0, min(255, round(c * 255))) for c in quad.color)
            image.fill(tint, special_flags=pygame.BLEND_RGBA_MULT)
            if not image.get_flags() & pygame.SRCALPHA:
                image.set_alpha(tint[3])

        self._cache[key] = image
        if len(self._cache) > _CACHE_SIZE:
            self._cache.popitem(last=False)
        return image

    def destroy(self) -> None:
        """Drop every queued sprite and cached image."""
        self.begin()
        self._cache.clear()
        self._camera = None