"""Component types that entities of a scene carry."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from truerpg.audio import AudioClip, AudioState
from truerpg.ecs import Entity
from truerpg.font import Font
from truerpg.rect import Rect
from truerpg.script import Script
from truerpg.texture import Texture
from truerpg.vector import Vec2
from truerpg.window import Window

Color = Tuple[float, float, float, float]
_WHITE: Color = (1.0, 1.0, 1.0, 1.0)


@dataclass
class TransformComponent:
    position: Vec2 = Vec2()
    origin: Vec2 = Vec2()
    scale: Vec2 = Vec2(1.0, 1.0)


@dataclass
class HierarchyComponent:
    """Links an entity to its parent and its siblings."""

    children: int = 0
    first_child: Entity = Entity()
    prev: Entity = Entity()
    next: Entity = Entity()
    parent: Entity = Entity()


@dataclass
class NameComponent:
    name: str = ""


@dataclass
class AudioListenerComponent:
    """Marks the entity whose position sounds are heard from."""


@dataclass
class AudioSourceComponent:
    """Plays an audio clip from the entity's position."""

    clip: AudioClip
    state: AudioState = AudioState.STOP
    volume: float = 1.0
    pan: float = 0.0
    loop: bool = False
    max_distance: float = 2000.0

    def play(self) -> None:
        self.state = AudioState.PLAY

    def pause(self) -> None:
        self.state = AudioState.PAUSE

    def stop(self) -> None:
        self.state = AudioState.STOP


@dataclass
class AutoOrderComponent:
    """Orders the entity's sprite by its vertical position."""

    order_pivot: int = 0


@dataclass
class CameraComponent:
    """A view onto the scene sized by the window and the zoom."""

    background: Color = (0.2, 0.3, 0.3, 1.0)
    zoom: float = 1.0
    window: Optional[Any] = field(default=None, compare=False, repr=False)

    def _window(self) -> Any:
        return self.window if self.window is not None else Window.instance()

    def width(self) -> float:
        return float(self._window().width) / self.zoom

    def height(self) -> float:
        return float(self._window().height) / self.zoom


@dataclass
class RectColliderComponent:
    offset: Vec2 = Vec2()
    size: Vec2 = Vec2()


@dataclass
class RigidbodyComponent:
    velocity: Vec2 = Vec2()


@dataclass
class SpriteRendererComponent:
    """Draws part of a texture; by default the whole texture."""

    texture: Texture
    texture_rect: Optional[Rect] = None
    color: Color = _WHITE
    layer: int = 0
    order: int = 0

    def __post_init__(self) -> None:
        if self.texture_rect is None:
            self.texture_rect = Rect(0, 0, self.texture.width, self.texture.height)


class HorizontalAlign(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


class VerticalAlign(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"
    CENTER = "center"


@dataclass
class TextRendererComponent:
    font: Font
    text: str = ""
    color: Color = _WHITE
    horizontal_align: HorizontalAlign = HorizontalAlign.LEFT
    vertical_align: VerticalAlign = VerticalAlign.BOTTOM
    layer: int = 0
    order: int = 0


@dataclass
class Tile:
    texture: Optional[Texture] = None
    texture_rect: Rect = Rect(0, 0, 0, 0)


@dataclass
class MapObject:
    texture: Optional[Texture] = None
    texture_rect: Rect = Rect(0, 0, 0, 0)
    origin: Vec2 = Vec2()
    order_pivot: int = 0


class WorldMapGenerator(ABC):
    """Decides what lies on each cell of an endless tile map."""

    @abstractmethod
    def generate_tiles(self, x: int, y: int) -> List[Tile]:
        """Tiles drawn on cell ``(x, y)``, bottom first."""

    @abstractmethod
    def generate_objects(self, x: int, y: int, tiles: List[Tile]) -> List[MapObject]:
        """Objects standing on cell ``(x, y)``, given its tiles."""


@dataclass
class WorldMapComponent:
    tile_size: int = 32
    generator: Optional[WorldMapGenerator] = None
    render_radius: int = 12
    tile_layer: int = 0
    object_layer: int = 1


@dataclass
class NativeScriptComponent:
    """Holds a script type to create lazily and the live instance."""

    instance: Optional[Script] = None
    _factory: Optional[Callable[[], Script]] = field(default=None, repr=False)

    def bind(self, script_type: type, *args: Any, **kwargs: Any) -> None:
        """Remember how to build the script; it is built on first update."""
        self._factory = lambda: script_type(*args, **kwargs)

    def instantiate(self) -> Script:
        """Build the bound script and keep it as :attr:`instance`."""
        if self._factory is None:
            raise RuntimeError("no script bound to this component")
        self.instance = self._factory()
        return self.instance

    def release(self) -> None:
        """Drop the live script instance."""
        self.instance = None