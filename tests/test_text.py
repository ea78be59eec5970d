import pygame
import pytest

from truerpg.font import Character, Font
from truerpg.sprite_batch import SpriteBatch
from truerpg.text import Text
from truerpg.texture import Texture
from truerpg.vector import Vec2


class StubFont:
    def __init__(self):
        self.size = 32
        self.texture = Texture(pygame.Surface((40, 24)), "atlas.png")
        self._chars = {
            "a": Character((10, 20), 0, 5),
            "b": Character((12, 18), 10, 3),
        }

    def character(self, char):
        return self._chars.get(char, Character())


@pytest.fixture
def font():
    return StubFont()


def test_width_is_sum_of_glyphs(font):
    text = Text(font, "ab")
    assert text.width == font.character("a").size[0] + font.character("b").size[0]
    assert text.height == font.size


def test_newline_adds_a_line(font):
    text = Text(font, "a\nb")
    assert text.height == 2 * font.size
    assert text.width == max(font.character("a").size[0], font.character("b").size[0])


def test_space_advances_by_quarter_size(font):
    spaced = Text(font, "a b")
    plain = Text(font, "ab")
    assert spaced.width - plain.width == font.size // 4


def test_setting_text_relays_out(font):
    text = Text(font, "a")
    text.text = "a\na\na"
    assert text.text == "a\na\na"
    assert text.height == 3 * font.size


def test_empty_text_has_one_line(font):
    text = Text(font, "")
    assert text.local_bounds().width == 0
    assert text.local_bounds().height == font.size


def test_draw_queues_one_quad_per_glyph(font):
    batch = SpriteBatch()
    batch.begin()
    Text(font, "ab a\nb").draw(batch, layer=3, order=2)
    assert len(batch.vertices()) == 4 * 5


def test_draw_places_glyph_on_baseline(font):
    batch = SpriteBatch()
    batch.begin()
    Text(font, "a").draw(batch)
    bl, _, _, tl = batch.vertices()
    assert bl.position == Vec2(0, 7)
    assert tl.position.y - bl.position.y == font.character("a").size[1]
    assert tl.tex_coord.y < bl.tex_coord.y


def test_draw_applies_color_and_scale(font):
    text = Text(font, "a")
    text.color = (0.5, 0.5, 0.5, 1.0)
    text.scale = Vec2(2, 2)
    batch = SpriteBatch()
    batch.begin()
    text.draw(batch)
    bl, br, _, _ = batch.vertices()
    assert bl.color == (0.5, 0.5, 0.5, 1.0)
    assert br.position.x - bl.position.x == 2 * font.character("a").size[0]


def test_global_bounds_follow_transform(font):
    text = Text(font, "ab")
    text.position = Vec2(5, 6)
    text.origin = Vec2(1, 2)
    text.scale = Vec2(2, 3)
    bounds = text.global_bounds()
    assert bounds.left == text.position.x - text.origin.x * text.scale.x
    assert bounds.width == text.local_bounds().width * text.scale.x
    assert bounds.height == text.width * text.scale.y


def test_real_font_lines():
    font = Font(None, 24)
    text = Text(font, "Hi\nthere")
    assert text.height == 2 * font.size
    assert text.width >= Text(font, "there").width