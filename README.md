# truerpg

A small top-down role-playing game. A hero walks over an endless tile map
generated from seeded simplex noise: sand, grass, dirt, mushrooms, trees
and bushes. Barrels block the way, a bot wanders around on its own, and a
pumpkin starts its music when you stand next to it and press E.

The game is organised as an entity-component-system scene. Entities carry
plain components (transforms, sprites, texts, rectangle colliders, rigid
bodies, audio sources, a camera, scripts). Each frame the scene runs its
script, physics, render and audio systems in that order.

## Installing

```
pip install .
```

Python 3.10 or later is needed; `pygame` and `numpy` are installed with it.

## Playing

```
truerpg --resources path/to/res
```

The window opens at 1280x720 with the title "TRUE RPG". `--resources`
defaults to `res` and must hold:

```
fonts/vt323.ttf
textures/hero.png
textures/base.png
audio/steps.mp3
audio/music.mp3
```

| Key     | Action                                              |
|---------|-----------------------------------------------------|
| W A S D | walk                                                |
| E       | play the pumpkin's music, when standing next to it  |
| Esc     | quit                                                |

If several movement keys are held, the one pressed last wins. The camera
follows the player; a greeting is shown at the top of the view and the
frame rate and tile position in the bottom-left corner. If no playback
device can be opened, the game logs a warning and runs without sound.

## What it does not do

- The fonts, textures and sounds listed above are not shipped with the
  package; the game cannot start without them.
- There is no menu, no saving or loading, and no way to change the window
  size or key bindings from the command line.

## Using the pieces

Noise (the same seed always gives the same values):

```python
from truerpg.noise import OpenSimplexNoise

noise = OpenSimplexNoise(2, 2, 2.0, 0.5, 32.0)
value = noise.get_noise(10, 20)
```

Entities and the hierarchy:

```python
from truerpg.ecs import Registry, Entity
from truerpg.components import TransformComponent, HierarchyComponent, NameComponent
from truerpg.hierarchy import add_child, find, compute_transform
from truerpg.vector import Vec2

registry = Registry()

def make(name, x, y):
    entity = Entity(registry.create(), registry)
    entity.add_component(TransformComponent(position=Vec2(x, y)))
    entity.add_component(HierarchyComponent())
    entity.add_component(NameComponent(name))
    return entity

player = make("player", 10, 0)
sprite = make("sprite", 1, 2)
add_child(player, sprite)

find(player, "sprite") == sprite          # True
compute_transform(sprite).position        # Vec2(x=11, y=2)
```

`truerpg.scene.Scene` does the same setup in `create_entity(name)` and
runs all systems in `update(delta_time)`; it needs a window such as
`truerpg.window.Window`.

Events:

```python
from truerpg.event import Event

on_hit = Event()
on_hit += print
on_hit("ouch")      # prints "ouch"
```

Other modules: `truerpg.rect` and `truerpg.vector` for geometry,
`truerpg.physics` (`rects_collide`, `PhysicsSystem`) for movement that stops
before colliders overlap, `truerpg.audio` (`AudioSource`, `AudioDevice`,
`mix_frames`) for mixing clips, and `truerpg.sprite_batch`, `truerpg.text`
and `truerpg.font` for drawing.

## Running the tests

```
pip install .[test]
pytest
```