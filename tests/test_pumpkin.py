import pygame
import pytest

from truerpg.audio import AudioState
from truerpg.components import (
    AudioSourceComponent,
    HierarchyComponent,
    NameComponent,
    TextRendererComponent,
    TransformComponent,
)
from truerpg.ecs import Entity, Registry
from truerpg.hierarchy import add_child
from truerpg.scripts.pumpkin import PumpkinScript
from truerpg.vector import Vec2


class FakeWindow:
    def __init__(self):
        self.keys = set()

    def key_down(self, key):
        return key in self.keys


def make_entity(registry, name, position=Vec2()):
    entity = Entity(registry.create(), registry)
    entity.add_component(TransformComponent(position=position))
    entity.add_component(HierarchyComponent())
    entity.add_component(NameComponent(name))
    return entity


def build(player_position):
    registry = Registry()
    pumpkin = make_entity(registry, "pumpkin")
    pumpkin.add_component(AudioSourceComponent(clip=None))
    text = make_entity(registry, "text")
    text.add_component(TextRendererComponent(font=None))
    add_child(pumpkin, text)
    player = make_entity(registry, "player", player_position)
    script = PumpkinScript(player)
    script.entity = pumpkin
    script.window = FakeWindow()
    script.on_create()
    return script, pumpkin, text


def test_on_create_finds_text_child():
    script, _, text = build(Vec2(10.0, 0.0))
    assert script.text_entity == text


def test_prompt_shown_when_player_is_near():
    script, pumpkin, text = build(Vec2(10.0, 0.0))
    script.on_update(0.1)
    assert text.get_component(TextRendererComponent).text == "Press [E]"
    assert pumpkin.get_component(AudioSourceComponent).state is AudioState.STOP


def test_pressing_e_nearby_plays_and_fades_prompt():
    script, pumpkin, text = build(Vec2(10.0, 0.0))
    script.window.keys.add(pygame.K_e)
    script.on_update(0.1)
    assert pumpkin.get_component(AudioSourceComponent).state is AudioState.PLAY
    alpha = text.get_component(TextRendererComponent).color[3]
    assert 0.0 <= alpha < 1.0


def test_far_player_sees_nothing_and_cannot_play():
    script, pumpkin, text = build(Vec2(100.0, 0.0))
    script.window.keys.add(pygame.K_e)
    script.on_update(0.1)
    assert text.get_component(TextRendererComponent).text == ""
    assert pumpkin.get_component(AudioSourceComponent).state is AudioState.STOP


@pytest.mark.parametrize("steps", [1, 3, 7])
def test_prompt_bobs_around_its_rest_height(steps):
    script, _, text = build(Vec2(100.0, 0.0))
    for _ in range(steps):
        script.on_update(0.13)
    y = text.get_component(TransformComponent).position.y
    assert 27.0 <= y <= 37.0


def test_fade_stops_at_zero():
    script, _, text = build(Vec2(10.0, 0.0))
    script.window.keys.add(pygame.K_e)
    script.on_update(1.0)
    script.on_update(1.0)
    assert text.get_component(TextRendererComponent).color[3] == 0.0


def test_prompt_keeps_full_alpha_without_music():
    script, _, text = build(Vec2(10.0, 0.0))
    script.on_update(0.5)
    assert text.get_component(TextRendererComponent).color[3] == 1.0