import pytest

from truerpg.font import Character, Font, FontError


@pytest.fixture(scope="module")
def font():
    return Font(None, 32)


def test_size_is_kept(font):
    assert font.size == 32


def test_letters_have_glyphs(font):
    for char in "Ag":
        width, height = font.character(char).size
        assert width > 0
        assert height > 0


def test_unknown_character_is_empty(font):
    assert font.character("\u00e9") == Character()
    assert "\u00e9" not in font


def test_glyphs_do_not_overlap_in_atlas(font):
    chars = sorted(
        (font.character(chr(code)) for code in range(32, 128) if chr(code) in font),
        key=lambda c: c.x_offset,
    )
    assert chars
    for current, following in zip(chars, chars[1:]):
        assert current.x_offset + current.size[0] <= following.x_offset
    last = chars[-1]
    assert last.x_offset + last.size[0] == font.texture.width


def test_glyph_heights_fit_atlas(font):
    heights = [font.character(chr(code)).size[1] for code in range(32, 128)]
    assert max(heights) == font.texture.height


def test_capital_sits_higher_than_lowercase(font):
    assert font.character("A").baseline < font.character("g").baseline


def test_atlas_holds_visible_pixels(font):
    glyph = font.character("A")
    surface = font.texture.surface
    alphas = [
        surface.get_at((glyph.x_offset + x, y)).a
        for x in range(glyph.size[0])
        for y in range(glyph.size[1])
    ]
    assert max(alphas) > 0


def test_missing_file_raises(tmp_path):
    with pytest.raises(FontError):
        Font(tmp_path / "missing.ttf", 16)


def test_destroy_releases_texture():
    font = Font(None, 16)
    assert font.texture.id > 0
    font.destroy()
    assert font.texture.id == 0