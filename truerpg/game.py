"""The demo world and the program loop that runs it."""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from truerpg.audio import AudioError, StreamAudioClip
from truerpg.components import (
    AudioListenerComponent,
    AudioSourceComponent,
    AutoOrderComponent,
    CameraComponent,
    HorizontalAlign,
    NativeScriptComponent,
    RectColliderComponent,
    RigidbodyComponent,
    SpriteRendererComponent,
    TextRendererComponent,
    TransformComponent,
    VerticalAlign,
    WorldMapComponent,
)
from truerpg.ecs import Entity
from truerpg.font import Font
from truerpg.hierarchy import add_child
from truerpg.rect import Rect
from truerpg.scene import Scene
from truerpg.script import Script
from truerpg.scripts.bot import BotScript
from truerpg.scripts.debug_info import DebugInfoScript
from truerpg.scripts.player import PlayerScript
from truerpg.scripts.pumpkin import PumpkinScript
from truerpg.scripts.text import TextScript
from truerpg.scripts.world_map import WorldMapScript
from truerpg.texture import Texture
from truerpg.vector import Vec2
from truerpg.window import Window

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
WINDOW_TITLE = "TRUE RPG"

logger = logging.getLogger(__name__)


class FrameClock:
    """Measures the seconds between consecutive ticks."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._previous = clock()

    def tick(self) -> float:
        """Seconds since the previous tick, or since the clock was made."""
        now = self._clock()
        delta = now - self._previous
        self._previous = now
        return delta


def _load_resources(directory: Path) -> Dict[str, Any]:
    return {
        "font": Font(directory / "fonts" / "vt323.ttf", 32),
        "hero": Texture.load(str(directory / "textures" / "hero.png")),
        "base": Texture.load(str(directory / "textures" / "base.png")),
        "steps": StreamAudioClip(directory / "audio" / "steps.mp3"),
        "music": StreamAudioClip(directory / "audio" / "music.mp3"),
    }


class Game:
    """Builds the demo scene: a map, the player, a pumpkin, barrels and a bot.

    ``resources`` maps ``"font"``, ``"hero"``, ``"base"``, ``"steps"`` and
    ``"music"`` to the font, the two textures and the two audio clips.
    """

    def __init__(self, window: Any, resources: Mapping[str, Any]) -> None:
        self.window = window
        self.font: Font = resources["font"]
        self.hero_texture: Texture = resources["hero"]
        self.base_texture: Texture = resources["base"]
        self.steps = resources["steps"]
        self.music = resources["music"]
        self.scene = Scene(window)
        self.camera_entity = Entity()
        self.player_entity = Entity()
        self._build()

    def _windowed(self, script: Script) -> Script:
        script.window = self.window
        return script

    def _attach(self, entity: Entity, build: Callable[[], Script]) -> None:
        entity.add_component(NativeScriptComponent()).bind(build)

    def _build(self) -> None:
        scene = self.scene

        world_map = scene.create_entity("worldMap")
        world_map.get_component(TransformComponent).scale = Vec2(2.0, 2.0)
        world_map.add_component(WorldMapComponent())
        self._attach(
            world_map,
            lambda: self._windowed(WorldMapScript(self.base_texture, self.player_entity)),
        )

        self.camera_entity = scene.create_entity("camera")
        self.camera_entity.add_component(CameraComponent(window=self.window))

        text = scene.create_entity("text")
        greeting = text.add_component(TextRendererComponent(self.font, "True RPG!\n Welcome!"))
        greeting.horizontal_align = HorizontalAlign.CENTER
        greeting.vertical_align = VerticalAlign.TOP
        greeting.layer = 10
        camera = self.camera_entity
        self._attach(text, lambda: TextScript(camera))

        debug_info = scene.create_entity("debugInfo")
        debug_text = debug_info.add_component(TextRendererComponent(self.font, ""))
        debug_text.layer = 10
        debug_info.get_component(TransformComponent).scale = Vec2(0.8, 0.8)
        self._attach(debug_info, lambda: DebugInfoScript(camera))

        self.player_entity = player = scene.create_entity("player")
        player.add_component(AudioListenerComponent())

        sprite = scene.create_entity("sprite")
        hero = sprite.add_component(SpriteRendererComponent(self.hero_texture))
        hero.texture_rect = Rect(32, 96, 32, 32)
        hero.layer = 1
        sprite.add_component(AutoOrderComponent())
        sprite_transform = sprite.get_component(TransformComponent)
        sprite_transform.scale = Vec2(2.0, 2.0)
        sprite_transform.origin = Vec2(16, 0)

        steps_sound = scene.create_entity("stepsSound")
        steps = steps_sound.add_component(AudioSourceComponent(self.steps))
        steps.volume = 0.25
        steps.loop = True

        player.add_component(RectColliderComponent(offset=Vec2(-16, 0), size=Vec2(32, 32)))
        player.add_component(RigidbodyComponent())

        for child in (sprite, steps_sound, text, debug_info, self.camera_entity):
            add_child(player, child)
        self._attach(player, lambda: self._windowed(PlayerScript()))

        self._build_pumpkin()
        self._build_barrels()
        self._build_bot()

    def _build_pumpkin(self) -> None:
        scene = self.scene
        pumpkin = scene.create_entity("pumpkin")
        renderer = pumpkin.add_component(SpriteRendererComponent(self.base_texture))
        renderer.texture_rect = Rect(192, 3584, 32, 32)
        renderer.layer = 0
        transform = pumpkin.get_component(TransformComponent)
        transform.position = Vec2(384.0 - 32, 256.0 - 32)
        transform.scale = Vec2(2.0, 2.0)
        transform.origin = Vec2(16, 16)
        music = pumpkin.add_component(AudioSourceComponent(self.music))
        music.volume = 1.0

        label = scene.create_entity("text")
        label_text = label.add_component(TextRendererComponent(self.font))
        label_text.horizontal_align = HorizontalAlign.CENTER
        label_text.layer = 10
        label.get_component(TransformComponent).scale = Vec2(0.5, 0.5)
        add_child(pumpkin, label)

        self._attach(pumpkin, lambda: self._windowed(PumpkinScript(self.player_entity)))

    def _build_barrels(self) -> None:
        for index in range(3):
            barrel = self.scene.create_entity(f"barrel{index}")
            renderer = barrel.add_component(SpriteRendererComponent(self.base_texture))
            renderer.texture_rect = Rect(96, 736, 32, 32)
            renderer.layer = 1
            transform = barrel.get_component(TransformComponent)
            transform.position = Vec2(128.0 + index * 64.0, 384.0)
            transform.scale = Vec2(2.0, 2.0)
            barrel.add_component(RectColliderComponent(size=Vec2(64, 32)))
            barrel.add_component(AutoOrderComponent())

    def _build_bot(self) -> None:
        scene = self.scene
        bot = scene.create_entity("bot")
        bot.get_component(TransformComponent).position = Vec2(0.0, 5 * 64.0)

        sprite = scene.create_entity("sprite")
        renderer = sprite.add_component(SpriteRendererComponent(self.hero_texture))
        renderer.texture_rect = Rect(32, 96, 32, 32)
        renderer.layer = 1
        sprite.add_component(AutoOrderComponent())
        sprite_transform = sprite.get_component(TransformComponent)
        sprite_transform.scale = Vec2(2.0, 2.0)
        sprite_transform.origin = Vec2(16, 0)

        name = scene.create_entity("name")
        label = name.add_component(TextRendererComponent(self.font, "Bot"))
        label.horizontal_align = HorizontalAlign.CENTER
        label.layer = 10
        name.get_component(TransformComponent).position = Vec2(0.0, 64.0)

        bot.add_component(RectColliderComponent(offset=Vec2(-16, 0), size=Vec2(32, 32)))
        bot.add_component(RigidbodyComponent())

        add_child(bot, sprite)
        add_child(bot, name)
        self._attach(bot, BotScript)

    def update(self, delta_time: float) -> None:
        """Advance the world by ``delta_time`` seconds."""
        self.scene.update(delta_time)

    def destroy(self) -> None:
        """Tear down the scene and release the font and textures."""
        self.scene.destroy()
        self.font.destroy()
        self.hero_texture.destroy()
        self.base_texture.destroy()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the window and run the game until it is closed."""
    parser = argparse.ArgumentParser(prog="truerpg", description="A small top-down RPG.")
    parser.add_argument(
        "--resources",
        default="res",
        help="directory holding the fonts, textures and audio folders",
    )
    args = parser.parse_args(argv)

    window = Window.instance(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE)
    game = Game(window, _load_resources(Path(args.resources)))
    try:
        game.scene.audio_device.start()
    except AudioError as exc:
        logger.warning("audio disabled: %s", exc)

    clock = FrameClock()
    try:
        while window.is_open():
            game.update(clock.tick())
            window.swap_buffers()
            window.poll_events()
    finally:
        game.destroy()
        window.destroy()
    return 0