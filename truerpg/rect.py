"""Axis-aligned rectangles described by their bottom-left corner and size."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


def _scale(component: Number, value: Number) -> Number:
    product = component * value
    # Integer rectangles stay integer, truncating toward zero.
    if isinstance(component, int) and not isinstance(component, bool):
        return int(product)
    return product


@dataclass(frozen=True)
class Rect:
    """A rectangle with a left edge, a bottom edge, a width and a height.

    Width and height may be negative, which mirrors the rectangle.
    """

    left: Number
    bottom: Number
    width: Number
    height: Number

    def __mul__(self, value: Number) -> Rect:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return NotImplemented
        return Rect(
            _scale(self.left, value),
            _scale(self.bottom, value),
            _scale(self.width, value),
            _scale(self.height, value),
        )