"""A wandering character that alternates between standing and walking."""

from __future__ import annotations

import enum
import random
from typing import Dict, Tuple

from truerpg.components import RigidbodyComponent, SpriteRendererComponent
from truerpg.ecs import Entity
from truerpg.hierarchy import find
from truerpg.rect import Rect
from truerpg.script import Script
from truerpg.vector import Vec2

FRAME_SIZE = 32
ANIMATION_STEP = 30.0
ANIMATION_RATE = 200.0
VELOCITY_SCALE = 200.0

DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))

_ANIMATION_ROWS: Dict[Tuple[int, int], int] = {
    (0, 1): 0,
    (-1, 0): 2,
    (0, -1): 3,
    (1, 0): 1,
}


class BotState(enum.Enum):
    IDLE = "idle"
    WALK = "walk"


class BotScript(Script):
    """Stands for 1-2 seconds, then walks one of four ways for 1-2 seconds.

    :attr:`rng` supplies the random directions and durations.
    """

    def __init__(self) -> None:
        self.speed = 1.3
        self.rng = random.Random()
        self.sprite_entity = Entity()
        self.animation_delay = 0.0
        self.current_animation = 3
        self.frame = 0
        self.state = BotState.IDLE
        self.direction: Tuple[int, int] = (0, 0)
        self.idle_time = 1.0
        self.walk_time = 1.0
        self.time = 0.0

    def on_create(self) -> None:
        self.sprite_entity = find(self.entity, "sprite")

    def on_update(self, delta_time: float) -> None:
        rigidbody = self.get_component(RigidbodyComponent)

        if self.state is BotState.IDLE:
            rigidbody.velocity = Vec2(0.0, 0.0)
            if self.time > self.idle_time:
                self.state = BotState.WALK
                self.time = 0.0
                self.direction = DIRECTIONS[self.rng.randint(0, 3)]
                self.walk_time = self.rng.uniform(1.0, 2.0)
        else:
            rigidbody.velocity = Vec2(*self.direction) * (self.speed * VELOCITY_SCALE)
            if self.time > self.walk_time:
                self.state = BotState.IDLE
                self.time = 0.0
                self.idle_time = self.rng.uniform(1.0, 2.0)

        self.time += delta_time
        self.current_animation = _ANIMATION_ROWS.get(self.direction, self.current_animation)

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
        if self.state is BotState.IDLE:
            self.frame = 1