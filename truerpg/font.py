"""Bitmap fonts: printable ASCII glyphs rendered into a single texture atlas."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pygame
import pygame.freetype

from truerpg.texture import Texture

FIRST_CHAR = 32
END_CHAR = 128

_WHITE = (255, 255, 255, 255)


class FontError(RuntimeError):
    """Raised when a font file cannot be loaded."""


@dataclass(frozen=True)
class Character:
    """Placement of one glyph inside the font atlas.

    ``size`` is the glyph bitmap's width and height, ``x_offset`` its left
    edge in the atlas and ``baseline`` how far the glyph's top sits below
    the top of the atlas row.
    """

    size: Tuple[int, int] = (0, 0)
    x_offset: int = 0
    baseline: int = 0


class Font:
    """A font rendered at one pixel size into a white glyph atlas.

    ``path`` may be ``None`` to use the built-in default font.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, size: int = 32) -> None:
        if not pygame.freetype.get_init():
            pygame.freetype.init()
        self.path = pygame.freetype.get_default_font() if path is None else str(path)
        self.size = size
        try:
            face = pygame.freetype.Font(None if path is None else str(path), size)
        except (OSError, pygame.error) as exc:
            raise FontError(f"Failed to load font {self.path}") from exc

        glyphs = self._render_glyphs(face)
        width = sum(surface.get_width() for _, surface, _ in glyphs)
        height = max((surface.get_height() for _, surface, _ in glyphs), default=0)

        atlas = pygame.Surface((width, height), pygame.SRCALPHA)
        atlas.fill((0, 0, 0, 0))
        self._characters: Dict[str, Character] = {}
        x = 0
        for char, surface, top in glyphs:
            glyph_width, glyph_height = surface.get_size()
            atlas.blit(surface, (x, 0), special_flags=pygame.BLEND_RGBA_MAX)
            self._characters[char] = Character((glyph_width, glyph_height), x, height - top)
            x += glyph_width

        self.texture = Texture(atlas, self.path)

    @staticmethod
    def _render_glyphs(face: pygame.freetype.Font) -> List[Tuple[str, pygame.Surface, int]]:
        glyphs = []
        for code in range(FIRST_CHAR, END_CHAR):
            char = chr(code)
            try:
                metrics = face.get_metrics(char)
                if not metrics or metrics[0] is None:
                    continue
                min_x, max_x, min_y, max_y = metrics[0][:4]
                if max_x - min_x <= 0 or max_y - min_y <= 0:
                    continue
                surface, rect = face.render(char, _WHITE)
            except pygame.error:
                continue
            if surface.get_width() == 0 or surface.get_height() == 0:
                continue
            glyphs.append((char, surface, rect.y))
        return glyphs

    def character(self, char: str) -> Character:
        """Glyph placement for ``char``; an empty glyph if the font lacks it."""
        return self._characters.get(char, Character())

    def __contains__(self, char: object) -> bool:
        return char in self._characters

    def destroy(self) -> None:
        """Release the glyph atlas."""
        self.texture.destroy()

    def __repr__(self) -> str:
        return f"Font(path={self.path!r}, size={self.size})"