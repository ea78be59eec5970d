import pytest

from truerpg.components import CameraComponent, TextRendererComponent, TransformComponent
from truerpg.ecs import Entity, Registry
from truerpg.scripts.text import TextScript
from truerpg.vector import Vec2


class FakeWindow:
    width = 200
    height = 100


def build():
    registry = Registry()
    camera = Entity(registry.create(), registry)
    camera.add_component(CameraComponent(zoom=2.0, window=FakeWindow()))
    text = Entity(registry.create(), registry)
    text.add_component(TransformComponent())
    text.add_component(TextRendererComponent(font=None, text="hello"))
    script = TextScript(camera)
    script.entity = text
    return script, text, camera


def test_text_is_placed_at_top_of_camera():
    script, text, camera = build()
    script.on_update(0.1)
    transform = text.get_component(TransformComponent)
    assert transform.position == Vec2(0.0, camera.get_component(CameraComponent).height() / 2)
    assert transform.position.y == 25.0


def test_text_scale_undoes_zoom():
    script, text, _ = build()
    script.on_update(0.1)
    assert text.get_component(TransformComponent).scale == Vec2(0.5, 0.5)


def test_color_at_start():
    script, text, _ = build()
    script.on_update(0.0)
    red, _green, blue, alpha = text.get_component(TextRendererComponent).color
    assert red == pytest.approx(0.5)
    assert blue == pytest.approx(1.0)
    assert alpha == 1.0


@pytest.mark.parametrize("delta", [0.3, 1.7, 4.2, 10.0])
def test_color_stays_in_range(delta):
    script, text, _ = build()
    script.on_update(delta)
    red, green, blue, alpha = text.get_component(TextRendererComponent).color
    assert 0.0 <= red <= 1.0
    assert 0.0 <= green <= 1.0
    assert 0.5 <= blue <= 1.5
    assert alpha == 1.0


def test_time_accumulates_over_updates():
    stepped, stepped_text, _ = build()
    stepped.on_update(0.5)
    stepped.on_update(0.5)
    single, single_text, _ = build()
    single.on_update(1.0)
    assert stepped_text.get_component(TextRendererComponent).color == pytest.approx(
        single_text.get_component(TextRendererComponent).color
    )