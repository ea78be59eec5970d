"""Audio clips, playback sources and a software mixing device."""

from __future__ import annotations

import enum
import io
import threading
import wave
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Union

import numpy as np
import pygame

SAMPLE_RATE = 48000
CHANNELS = 2
_BLOCK_FRAMES = 1024

AudioInput = Union[str, BinaryIO]


class AudioError(RuntimeError):
    """Raised when audio cannot be decoded or played."""


class AudioState(enum.Enum):
    """Playback state of a source."""

    PLAY = "play"
    PAUSE = "pause"
    STOP = "stop"


def _resample(data: np.ndarray, rate: int) -> np.ndarray:
    if rate == SAMPLE_RATE or len(data) == 0:
        return data
    out_frames = max(1, round(len(data) * SAMPLE_RATE / rate))
    src_times = np.arange(len(data)) / rate
    dst_times = np.arange(out_frames) / SAMPLE_RATE
    return np.column_stack(
        [np.interp(dst_times, src_times, data[:, channel]) for channel in range(data.shape[1])]
    )


def _normalise(data: np.ndarray, rate: int) -> np.ndarray:
    """Bring decoded samples to stereo float32 at the device sample rate."""
    if data.shape[1] == 1:
        data = np.repeat(data, CHANNELS, axis=1)
    elif data.shape[1] > CHANNELS:
        data = data[:, :CHANNELS]
    data = _resample(data, rate)
    return np.ascontiguousarray(data, dtype=np.float32)


def _decode_wave(source: AudioInput) -> np.ndarray:
    with wave.open(source, "rb") as wav:
        channels = wav.getnchannels()
        width = wav.getsampwidth()
        rate = wav.getframerate()
        raw = wav.readframes(wav.getnframes())

    if width == 1:
        data = (np.frombuffer(raw, dtype=np.uint8).astype(np.float64) - 128.0) / 128.0
    elif width == 2:
        data = np.frombuffer(raw, dtype="<i2").astype(np.float64) / 32768.0
    elif width == 4:
        data = np.frombuffer(raw, dtype="<i4").astype(np.float64) / 2147483648.0
    else:
        raise AudioError(f"unsupported sample width: {width} bytes")
    return _normalise(data.reshape(-1, channels), rate)


def _decode_with_pygame(source: AudioInput) -> np.ndarray:
    try:
        if not pygame.mixer.get_init():
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=CHANNELS)
        sound = pygame.mixer.Sound(file=source)
        frequency, _size, _channels = pygame.mixer.get_init()
        samples = np.asarray(pygame.sndarray.array(sound))
    except pygame.error as exc:
        raise AudioError(f"cannot decode audio: {exc}") from exc

    if samples.ndim == 1:
        samples = samples[:, None]
    if np.issubdtype(samples.dtype, np.integer):
        info = np.iinfo(samples.dtype)
        scale = (int(info.max) + 1 - int(info.min)) / 2
        offset = (int(info.max) + int(info.min) + 1) / 2
        data = (samples.astype(np.float64) - offset) / scale
    else:
        data = samples.astype(np.float64)
    return _normalise(data, frequency)


def _decode(source: AudioInput) -> np.ndarray:
    try:
        return _decode_wave(source)
    except (wave.Error, EOFError):
        if isinstance(source, io.IOBase):
            source.seek(0)
        return _decode_with_pygame(source)


class AudioClip(ABC):
    """A piece of audio that can be decoded into stereo samples."""

    path: str

    @abstractmethod
    def decode(self) -> np.ndarray:
        """Return the clip as a ``(frames, 2)`` float32 array at the device rate."""


class CachedAudioClip(AudioClip):
    """A clip that keeps the whole file in memory; suited to short sounds."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        self._data = Path(path).read_bytes()

    def decode(self) -> np.ndarray:
        return _decode(io.BytesIO(self._data))


class StreamAudioClip(AudioClip):
    """A clip that reads its file from disk whenever it is decoded."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)

    def decode(self) -> np.ndarray:
        return _decode(self.path)


class AudioSource:
    """Playback settings for one clip."""

    def __init__(self, clip: AudioClip) -> None:
        self.clip = clip
        self.state = AudioState.STOP
        self.volume = 1.0
        self.pan = 0.0
        self.loop = False

    def play(self) -> None:
        self.state = AudioState.PLAY

    def pause(self) -> None:
        self.state = AudioState.PAUSE

    def stop(self) -> None:
        self.state = AudioState.STOP


def mix_frames(output: np.ndarray, samples: np.ndarray, volume: float, pan: float) -> np.ndarray:
    """Return ``output`` with ``samples`` added at the given volume and pan.

    A pan of -1 silences the right channel, 1 silences the left channel.
    """
    output = np.asarray(output, dtype=np.float32)
    samples = np.asarray(samples, dtype=np.float32)
    if output.shape != samples.shape:
        raise ValueError(f"shape mismatch: {output.shape} and {samples.shape}")
    left = 1.0 - min(max(pan, 0.0), 1.0)
    right = 1.0 - abs(min(max(pan, -1.0), 0.0))
    mixed = output.copy()
    mixed[:, 0] += volume * left * samples[:, 0]
    mixed[:, 1] += volume * right * samples[:, 1]
    return mixed


@dataclass
class _Voice:
    samples: np.ndarray
    cursor: int = 0

    def read(self, frame_count: int, loop: bool) -> Optional[np.ndarray]:
        total = len(self.samples)
        if total == 0 or (not loop and self.cursor >= total):
            return None
        if loop:
            indices = (self.cursor + np.arange(frame_count)) % total
            self.cursor = (self.cursor + frame_count) % total
            return self.samples[indices]
        chunk = self.samples[self.cursor:self.cursor + frame_count]
        self.cursor += len(chunk)
        block = np.zeros((frame_count, CHANNELS), dtype=np.float32)
        block[: len(chunk)] = chunk
        return block


class AudioDevice:
    """Mixes every registered source into one stereo stream."""

    def __init__(self) -> None:
        self._voices: Dict[AudioSource, _Voice] = {}
        self._lock = threading.Lock()
        self._stopping = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._channel: Optional[pygame.mixer.Channel] = None

    def __len__(self) -> int:
        return len(self._voices)

    def __contains__(self, source: object) -> bool:
        return source in self._voices

    def __enter__(self) -> AudioDevice:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def add(self, source: AudioSource) -> None:
        """Register ``source``; adding the same source twice has no effect."""
        if source in self._voices:
            return
        samples = source.clip.decode()
        with self._lock:
            self._voices.setdefault(source, _Voice(samples))

    def remove(self, source: AudioSource) -> None:
        """Forget ``source``; unknown sources are ignored."""
        with self._lock:
            self._voices.pop(source, None)

    def clear(self) -> None:
        """Forget every source."""
        with self._lock:
            self._voices.clear()

    def mix(self, frame_count: int) -> np.ndarray:
        """Produce the next ``frame_count`` stereo frames of the mix."""
        output = np.zeros((frame_count, CHANNELS), dtype=np.float32)
        with self._lock:
            for source, voice in self._voices.items():
                if source.state is AudioState.PLAY:
                    block = voice.read(frame_count, source.loop)
                    if block is None:
                        source.stop()
                    else:
                        output = mix_frames(output, block, source.volume, source.pan)
                if source.state is AudioState.STOP:
                    voice.cursor = 0
        return output

    def start(self) -> None:
        """Open the playback device and start feeding it the mix."""
        if self._thread is not None:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=CHANNELS)
            _frequency, _size, channels = pygame.mixer.get_init()
            if channels != CHANNELS:
                raise AudioError(f"playback device has {channels} channels, need {CHANNELS}")
            self._channel = pygame.mixer.Channel(0)
        except pygame.error as exc:
            raise AudioError("Failed to open playback device") from exc
        self._stopping.clear()
        self._thread = threading.Thread(target=self._pump, name="audio-mixer", daemon=True)
        self._thread.start()

    def close(self) -> None:
        """Stop playback and forget every source."""
        if self._thread is not None:
            self._stopping.set()
            self._thread.join()
            self._thread = None
        if self._channel is not None:
            self._channel.stop()
            self._channel = None
        self.clear()

    def _pump(self) -> None:
        channel = self._channel
        while not self._stopping.is_set():
            if channel.get_queue() is None:
                block = self.mix(_BLOCK_FRAMES)
                pcm = (np.clip(block, -1.0, 1.0) * 32767).astype(np.int16)
                sound = pygame.sndarray.make_sound(np.ascontiguousarray(pcm))
                if channel.get_busy():
                    channel.queue(sound)
                else:
                    channel.play(sound)
            self._stopping.wait(_BLOCK_FRAMES / SAMPLE_RATE / 4)