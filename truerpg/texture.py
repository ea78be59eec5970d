"""Textures loaded from image files and sprites that show part of them."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Optional, Tuple, Union

import pygame

from truerpg.rect import Rect
from truerpg.vector import Vec2

Color = Tuple[float, float, float, float]

_texture_ids = itertools.count(1)


class TextureError(RuntimeError):
    """Raised when an image cannot be loaded as a texture."""


class Texture:
    """An image held in memory, with a unique non-zero id while alive.

    Images are stored flipped vertically, so row zero is the bottom row and
    texture rectangles are measured from the bottom-left corner.
    """

    def __init__(self, surface: Optional[pygame.Surface] = None, path: Union[str, Path] = "") -> None:
        self.surface = surface
        self.path = str(path)
        if surface is None:
            self.id = 0
            self.width = 0
            self.height = 0
        else:
            self.id = next(_texture_ids)
            self.width, self.height = surface.get_size()

    @classmethod
    def load(cls, path: Union[str, Path]) -> Texture:
        """Load an image file, flipping it so that its origin is bottom-left."""
        try:
            surface = pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            raise TextureError(f"Failed to load texture {path}") from exc
        surface = pygame.transform.flip(surface, False, True)
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            surface = surface.convert_alpha()
        return cls(surface, path)

    def destroy(self) -> None:
        """Release the image; the texture keeps its size but has id 0."""
        self.surface = None
        self.id = 0

    def __repr__(self) -> str:
        return f"Texture(id={self.id}, path={self.path!r}, size={self.width}x{self.height})"


class Sprite:
    """A textured quad with a position, origin, scale and colour."""

    def __init__(self, texture: Texture) -> None:
        self.texture = texture
        self.position = Vec2()
        self.origin = Vec2()
        self.scale = Vec2(1.0, 1.0)
        self.color: Color = (1.0, 1.0, 1.0, 1.0)
        self.texture_rect = Rect(0, 0, texture.width, texture.height)

    def local_bounds(self) -> Rect:
        """Bounds of the sprite ignoring every transformation."""
        return Rect(
            0.0,
            0.0,
            abs(float(self.texture_rect.width)),
            abs(float(self.texture_rect.height)),
        )

    def global_bounds(self) -> Rect:
        """Bounds of the sprite with position, origin and scale applied."""
        return Rect(
            self.position.x - self.origin.x * self.scale.x,
            self.position.y - self.origin.y * self.scale.y,
            abs(float(self.texture_rect.width)) * self.scale.x,
            abs(float(self.texture_rect.height)) * self.scale.y,
        )