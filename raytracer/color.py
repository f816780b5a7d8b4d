"""
Quantized RGB colors.

Channels are integers, conceptually in the 0-255 range. Shading sums are
allowed to leave that range (a lit surface plus its highlight easily
exceeds 255); callers clamp once the final color is known.

Scaling by a float truncates each channel toward zero.
"""

from __future__ import annotations
from typing import Union
import numpy as np


class Color:
    """An RGB color with integer channels."""

    __slots__ = ('_data',)

    def __init__(self, r: int = 0, g: int = 0, b: int = 0):
        self._data = np.array([r, g, b], dtype=np.int64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Color:
        """Create Color from numpy array, truncating any fractional part."""
        c = cls.__new__(cls)
        c._data = np.asarray(arr).astype(np.int64)
        return c

    @property
    def r(self) -> int:
        return int(self._data[0])

    @property
    def g(self) -> int:
        return int(self._data[1])

    @property
    def b(self) -> int:
        return int(self._data[2])

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash((self.r, self.g, self.b))

    def __iter__(self):
        return iter((self.r, self.g, self.b))

    def __add__(self, other: Color) -> Color:
        return Color.from_array(self._data + other._data)

    def __sub__(self, other: Color) -> Color:
        return Color.from_array(self._data - other._data)

    def __mul__(self, other: Union[Color, int, float]) -> Color:
        if isinstance(other, Color):
            return Color.from_array(self._data * other._data)
        return Color.from_array(self._data * other)

    def __rmul__(self, other: Union[int, float]) -> Color:
        return self.__mul__(other)

    def blend(self, light: Color) -> Color:
        """Return this color as seen under a light of the given color.

        White light leaves the color unchanged; black light yields black.
        """
        return Color.from_array((self._data * light._data) // 255)

    def clamp(self, min_val: int = 0, max_val: int = 255) -> Color:
        """Clamp all channels to the given range."""
        return Color.from_array(np.clip(self._data, min_val, max_val))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
