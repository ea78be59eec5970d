"""Seeded two-dimensional OpenSimplex-style noise with octaves."""

from __future__ import annotations

import math
import struct
import time
from typing import Optional, Sequence

PSIZE = 2048
MAX_OCTAVES = 9

_STRETCH_2D = -0.211324865405187
_SQUISH_2D = 0.366025403784439

_GRADIENTS_2D = (
    5, 2, 2, 5,
    -5, 2, -2, 5,
    5, -2, 2, -5,
    -5, -2, -2, -5,
)

_MASK64 = (1 << 64) - 1
_MULTIPLIER = 6364136223846793005
_INCREMENT = 1442695040888963407


def _to_f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _permutation(seed: int) -> tuple[int, ...]:
    """Shuffle the lattice indices with a 64-bit LCG driven by ``seed``."""
    source = list(range(PSIZE + 1))
    perm = [0] * (PSIZE + 1)
    for i in range(PSIZE, -1, -1):
        seed = (seed * _MULTIPLIER + _INCREMENT) & _MASK64
        r = ((seed + 31) & _MASK64) % (i + 1)
        perm[i] = source[r]
        source[r] = source[i]
    return tuple(perm)


def _extrapolate(perm: Sequence[int], xsb: int, ysb: int, dx: float, dy: float) -> float:
    index = perm[(perm[xsb & 0xFF] + ysb) & 0xFF] & 0x0E
    return _GRADIENTS_2D[index] * dx * _GRADIENTS_2D[index + 1] * dy


def _contribution(perm: Sequence[int], xsb: int, ysb: int, dx: float, dy: float) -> float:
    attn = 2 - dx * dx - dy * dy
    if attn <= 0:
        return 0.0
    attn *= attn
    return attn * attn * _extrapolate(perm, xsb, ysb, dx, dy)


def _eval(perm: Sequence[int], x: float, y: float) -> float:
    stretch_offset = (x + y) * _STRETCH_2D
    xs = x + stretch_offset
    ys = y + stretch_offset

    xsb = math.floor(xs)
    ysb = math.floor(ys)

    squish_offset = (xsb + ysb) * _SQUISH_2D
    xb = xsb + squish_offset
    yb = ysb + squish_offset

    xins = xs - xsb
    yins = ys - ysb
    in_sum = xins + yins

    dx0 = x - xb
    dy0 = y - yb

    value = 0.0
    value += _contribution(perm, xsb + 1, ysb, dx0 - 1 - _SQUISH_2D, dy0 - _SQUISH_2D)
    value += _contribution(perm, xsb, ysb + 1, dx0 - _SQUISH_2D, dy0 - 1 - _SQUISH_2D)

    if in_sum <= 1:
        zins = 1 - in_sum
        if zins > xins or zins > yins:
            if xins > yins:
                xsv_ext, ysv_ext = xsb + 1, ysb - 1
                dx_ext, dy_ext = dx0 - 1, dy0 + 1
            else:
                xsv_ext, ysv_ext = xsb - 1, ysb + 1
                dx_ext, dy_ext = dx0 + 1, dy0 - 1
        else:
            xsv_ext, ysv_ext = xsb + 1, ysb + 1
            dx_ext = dx0 - 1 - 2 * _SQUISH_2D
            dy_ext = dy0 - 1 - 2 * _SQUISH_2D
    else:
        zins = 2 - in_sum
        if zins < xins or zins < yins:
            if xins > yins:
                xsv_ext, ysv_ext = xsb + 2, ysb
                dx_ext = dx0 - 2 - 2 * _SQUISH_2D
                dy_ext = dy0 - 2 * _SQUISH_2D
            else:
                xsv_ext, ysv_ext = xsb, ysb + 2
                dx_ext = dx0 - 2 * _SQUISH_2D
                dy_ext = dy0 - 2 - 2 * _SQUISH_2D
        else:
            dx_ext, dy_ext = dx0, dy0
            xsv_ext, ysv_ext = xsb, ysb
        xsb += 1
        ysb += 1
        dx0 = dx0 - 1 - 2 * _SQUISH_2D
        dy0 = dy0 - 1 - 2 * _SQUISH_2D

    value += _contribution(perm, xsb, ysb, dx0, dy0)
    value += _contribution(perm, xsv_ext, ysv_ext, dx_ext, dy_ext)

    return value * (1.0 / 47.0)


class OpenSimplexNoise:
    """Fractal noise built from several seeded permutation contexts."""

    def __init__(
        self,
        seed: Optional[int] = None,
        octaves: int = 2,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
        period: float = 32.0,
    ) -> None:
        self._contexts: tuple[tuple[int, ...], ...] = ()
        self._seed = 0
        self.seed = int(time.time()) if seed is None else seed
        self.octaves = octaves
        self.lacunarity = lacunarity
        self.persistence = persistence
        self.period = period

    @property
    def seed(self) -> int:
        return self._seed

    @seed.setter
    def seed(self, seed: int) -> None:
        self._seed = seed & _MASK64
        self._contexts = tuple(
            _permutation((self._seed + i * 2) & _MASK64) for i in range(MAX_OCTAVES)
        )

    @property
    def octaves(self) -> int:
        return self._octaves

    @octaves.setter
    def octaves(self, octaves: int) -> None:
        self._octaves = max(0, min(int(octaves), MAX_OCTAVES))

    @property
    def lacunarity(self) -> float:
        return self._lacunarity

    @lacunarity.setter
    def lacunarity(self, lacunarity: float) -> None:
        self._lacunarity = _to_f32(lacunarity)

    @property
    def persistence(self) -> float:
        return self._persistence

    @persistence.setter
    def persistence(self, persistence: float) -> None:
        self._persistence = _to_f32(persistence)

    @property
    def period(self) -> float:
        return self._period

    @period.setter
    def period(self, period: float) -> None:
        self._period = _to_f32(period)

    def get_noise(self, x: float, y: float) -> float:
        """Noise value at ``(x, y)``, averaged over the configured octaves."""
        x /= self._period
        y /= self._period

        amp = 1.0
        total_weight = 1.0
        total = _eval(self._contexts[0], x, y)

        for perm in self._contexts[: self._octaves]:
            x *= self._lacunarity
            y *= self._lacunarity
            amp *= self._persistence
            total_weight += amp
            total += _eval(perm, x, y) * amp

        return total / total_weight