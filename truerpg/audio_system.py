"""Keeps playback sources in step with the audio components of a scene."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

from truerpg.audio import AudioDevice, AudioSource, AudioState
from truerpg.components import AudioListenerComponent, AudioSourceComponent
from truerpg.ecs import Entity, Registry
from truerpg.hierarchy import compute_transform


class AudioSystem:
    """Creates a source for every audio component and mixes it by distance.

    Volume fades linearly with the distance to the listener and pan follows
    the horizontal offset from it.
    """

    def __init__(self, registry: Registry, device: AudioDevice) -> None:
        self.registry = registry
        self.device = device
        self._sources: Dict[int, AudioSource] = {}
        registry.on_construct(AudioSourceComponent).add(self._on_construct)
        registry.on_destroy(AudioSourceComponent).add(self._on_destroy)

    @property
    def sources(self) -> Mapping[int, AudioSource]:
        """Playback source of each entity with an audio component."""
        return MappingProxyType(self._sources)

    def update(self) -> None:
        """Apply every component's settings to its source, seen from the listener."""
        listener_id = next(iter(self.registry.view(AudioListenerComponent)), None)
        if listener_id is None:
            return
        listener_position = compute_transform(Entity(listener_id, self.registry)).position

        for entity_id in self.registry.view(AudioSourceComponent):
            component = self.registry.get(entity_id, AudioSourceComponent)
            source = self._sources.get(entity_id)
            if source is None:
                continue
            position = compute_transform(Entity(entity_id, self.registry)).position

            volume_factor = 1.0 - listener_position.distance(position) / component.max_distance
            volume_factor = min(max(volume_factor, 0.0), 1.0)
            pan_factor = (position - listener_position).x / component.max_distance * 2.0

            source.volume = component.volume * volume_factor
            source.pan = component.pan + pan_factor
            source.loop = component.loop

            if component.state is AudioState.PLAY:
                source.play()
            elif component.state is AudioState.PAUSE:
                source.pause()
            else:
                source.stop()

    def destroy(self) -> None:
        """Forget every source and stop following the registry."""
        self.device.clear()
        self._sources.clear()
        self.registry.on_construct(AudioSourceComponent).remove(self._on_construct)
        self.registry.on_destroy(AudioSourceComponent).remove(self._on_destroy)

    def _on_construct(self, registry: Registry, entity_id: int) -> None:
        component = registry.get(entity_id, AudioSourceComponent)
        source = AudioSource(component.clip)
        self._sources[entity_id] = source
        self.device.add(source)

    def _on_destroy(self, registry: Registry, entity_id: int) -> None:
        source = self._sources.pop(entity_id, None)
        if source is not None:
            self.device.remove(source)