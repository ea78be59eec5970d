"""Lines of text laid out as sprites cut from a font atlas."""

from __future__ import annotations

import copy
from typing import List, Tuple

from truerpg.font import Font
from truerpg.rect import Rect
from truerpg.sprite_batch import SpriteBatch
from truerpg.texture import Sprite
from truerpg.vector import Vec2

Color = Tuple[float, float, float, float]


class Text:
    """A string rendered with a font, measured from its bottom-left corner.

    Changing :attr:`text` lays the glyphs out again and updates the size.
    """

    def __init__(self, font: Font, text: str = "") -> None:
        self._font = font
        self.position = Vec2()
        self.origin = Vec2()
        self.scale = Vec2(1.0, 1.0)
        self.color: Color = (1.0, 1.0, 1.0, 1.0)
        self._sprites: List[Sprite] = []
        self._width = 0.0
        self._height = 0.0
        self._text = ""
        self.text = text

    @property
    def font(self) -> Font:
        return self._font

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, text: str) -> None:
        self._text = text
        self._layout()

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def draw(self, batch: SpriteBatch, layer: int = 0, order: int = 0) -> None:
        """Queue every glyph of the text in ``batch``."""
        lift = Vec2(0.0, self._height)
        for sprite in self._sprites:
            placed = copy.copy(sprite)
            placed.position = self.position + (sprite.position + lift - self.origin) * self.scale
            placed.scale = self.scale
            placed.color = self.color
            batch.draw(placed, layer, order)

    def local_bounds(self) -> Rect:
        """Bounds of the text ignoring every transformation."""
        return Rect(0.0, 0.0, self._width, self._height)

    def global_bounds(self) -> Rect:
        """Bounds of the text with position, origin and scale applied.

        The height is derived from the text's width.
        """
        return Rect(
            self.position.x - self.origin.x * self.scale.x,
            self.position.y - self.origin.y * self.scale.y,
            self._width * self.scale.x,
            self._width * self.scale.y,
        )

    def _layout(self) -> None:
        font = self._font
        self._sprites = []
        max_width = 0.0
        max_height = 0.0
        pos = Vec2(0.0, 0.0)

        for char in self._text:
            if char == " ":
                pos += Vec2(font.size // 4, 0.0)
                continue
            if char == "\n":
                max_width = max(max_width, pos.x)
                max_height += float(font.size)
                pos = Vec2(0.0, pos.y - float(font.size))
                continue

            character = font.character(char)
            glyph_width, glyph_height = character.size
            sprite = Sprite(font.texture)
            # Atlas rows run top-down, so the glyph is read upside down.
            sprite.texture_rect = Rect(character.x_offset, glyph_height, glyph_width, -glyph_height)
            sprite.origin = Vec2(0.0, glyph_height)
            sprite.position = pos - Vec2(0.0, character.baseline)
            self._sprites.append(sprite)
            pos += Vec2(float(glyph_width), 0.0)

        self._width = max(max_width, pos.x)
        self._height = max_height + float(font.size)