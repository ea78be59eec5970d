"""A pumpkin that starts its music when the player presses E beside it."""

from __future__ import annotations

import math
from typing import Any, Optional

import pygame

from truerpg.audio import AudioState
from truerpg.components import AudioSourceComponent, TextRendererComponent, TransformComponent
from truerpg.ecs import Entity
from truerpg.hierarchy import find
from truerpg.script import Script
from truerpg.vector import Vec2
from truerpg.window import Window

REACH = 64.0
PROMPT = "Press [E]"


class PumpkinScript(Script):
    """Shows a bobbing prompt near the player and plays music on E.

    Once the music plays, the prompt fades out. :attr:`window` is the window
    whose keys are read; the current window is used when it is ``None``.
    """

    def __init__(self, player_entity: Entity) -> None:
        self.player_entity = player_entity
        self.text_entity = Entity()
        self.window: Optional[Any] = None
        self._time = 0.0

    def on_create(self) -> None:
        self.text_entity = find(self.entity, "text")

    def on_update(self, delta_time: float) -> None:
        self._time += 5 * delta_time
        window = self.window if self.window is not None else Window.instance()

        text_transform = self.text_entity.get_component(TransformComponent)
        text_transform.position = Vec2(text_transform.position.x, 5 * math.sin(self._time) + 32)

        pumpkin_position = self.get_component(TransformComponent).position
        player_position = self.player_entity.get_component(TransformComponent).position

        renderer = self.text_entity.get_component(TextRendererComponent)
        audio = self.get_component(AudioSourceComponent)

        if pumpkin_position.distance(player_position) < REACH:
            renderer.text = PROMPT
            if window.key_down(pygame.K_e):
                audio.play()
        else:
            renderer.text = ""

        if audio.state is AudioState.PLAY:
            red, green, blue, alpha = renderer.color
            renderer.color = (1.0, 1.0, 1.0, min(max(alpha - 6.0 * delta_time, 0.0), 1.0))