"""Keyboard-driven movement and walking animation for the player."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pygame

from truerpg.components import (
    AudioSourceComponent,
    RigidbodyComponent,
    SpriteRendererComponent,
)
from truerpg.ecs import Entity
from truerpg.hierarchy import find
from truerpg.rect import Rect
from truerpg.script import Script
from truerpg.vector import Vec2
from truerpg.window import Window

FRAME_SIZE = 32
ANIMATION_STEP = 30.0
ANIMATION_RATE = 200.0
VELOCITY_SCALE = 200.0

MOVEMENT_KEYS = (pygame.K_w, pygame.K_a, pygame.K_s, pygame.K_d)

# key -> (direction, animation row)
_MOVES: Dict[int, Tuple[Tuple[int, int], int]] = {
    pygame.K_w: ((0, 1), 0),
    pygame.K_a: ((-1, 0), 2),
    pygame.K_s: ((0, -1), 3),
    pygame.K_d: ((1, 0), 1),
}


class PlayerScript(Script):
    """Moves the entity with W, A, S and D and animates its "sprite" child.

    The most recently pressed movement key that is still held wins. Escape
    closes the window. :attr:`window` is the window whose keys are read; the
    current window is used when it is ``None``.
    """

    def __init__(self) -> None:
        self.speed = 1.3
        self.window: Optional[Any] = None
        self.sprite_entity = Entity()
        self.steps_entity = Entity()
        self.input_stack: List[int] = []
        self.animation_delay = 0.0
        self.current_animation = 3
        self.frame = 0

    def _window(self) -> Any:
        return self.window if self.window is not None else Window.instance()

    def on_create(self) -> None:
        self.sprite_entity = find(self.entity, "sprite")
        self.steps_entity = find(self.entity, "stepsSound")

    def on_update(self, delta_time: float) -> None:
        window = self._window()
        if window.key_down(pygame.K_ESCAPE):
            window.close()

        rigidbody = self.get_component(RigidbodyComponent)
        steps = self.steps_entity.get_component(AudioSourceComponent)

        self._update_input(window)
        current_key = self.input_stack[-1] if self.input_stack else None

        direction = (0, 0)
        if current_key in _MOVES:
            direction, self.current_animation = _MOVES[current_key]

        rigidbody.velocity = Vec2(*direction) * (self.speed * VELOCITY_SCALE)

        renderer = self.sprite_entity.get_component(SpriteRendererComponent)
        if self.animation_delay > ANIMATION_STEP:
            renderer.texture_rect = Rect(
                self.frame * FRAME_SIZE,
                self.current_animation * FRAME_SIZE,
                FRAME_SIZE,
                FRAME_SIZE,
            )
            self.frame += 1
            self.animation_delay = 0.0
        self.animation_delay += delta_time * ANIMATION_RATE

        if self.frame > 2:
            self.frame = 0

        if direction == (0, 0):
            self.frame = 1
            steps.pause()
        else:
            steps.play()

    def _update_input(self, window: Any) -> None:
        for key in MOVEMENT_KEYS:
            if window.key_down(key):
                if key not in self.input_stack:
                    self.input_stack.append(key)
            else:
                self.input_stack = [held for held in self.input_stack if held != key]