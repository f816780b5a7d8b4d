"""
Homogeneous 4-component tuples for 3D math.

The fourth coordinate tells points from directions:
- Point: w = 1, affected by translation
- Vector: w = 0, only rotated and scaled

All float comparisons in the ray tracer go through EPSILON.
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np

EPSILON = 1e-5


def float_eq(a: float, b: float) -> bool:
    """Return True if two floats differ by less than EPSILON."""
    return abs(a - b) < EPSILON


class Tuple:
    """A homogeneous (x, y, z, w) tuple.

    Uses numpy internally for efficient computation while providing
    a clean, Pythonic API. Instances are treated as immutable values;
    every operation returns a new tuple.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        self._data = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Tuple:
        """Create a tuple from a 4-element numpy array.

        Called on Tuple itself, the concrete type is picked from w so that
        matrix products of points stay points and of vectors stay vectors.
        """
        arr = np.asarray(arr, dtype=np.float64)
        if cls is Tuple:
            # Snap w so rounding noise from inverted matrices keeps the type
            if float_eq(arr[3], 1.0):
                cls = Point
                arr[3] = 1.0
            elif float_eq(arr[3], 0.0):
                cls = Vector
                arr[3] = 0.0
        t = cls.__new__(cls)
        t._data = arr
        return t

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    def is_point(self) -> bool:
        return self._data[3] == 1.0

    def is_vector(self) -> bool:
        return self._data[3] == 0.0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=EPSILON))

    def __hash__(self) -> int:
        # Equality is tolerance based, so hash consistently with it
        return hash(self._data.shape)

    def __neg__(self) -> Tuple:
        return Tuple.from_array(-self._data)

    def __add__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return Tuple.from_array(self._data + other._data)

    def __sub__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return Tuple.from_array(self._data - other._data)

    def __mul__(self, scalar: Union[int, float]) -> Tuple:
        if isinstance(scalar, Tuple):
            return NotImplemented
        return Tuple.from_array(self._data * scalar)

    def __rmul__(self, scalar: Union[int, float]) -> Tuple:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Union[int, float]) -> Tuple:
        return Tuple.from_array(self._data / scalar)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def magnitude(self) -> float:
        """Return the length of the xyz part."""
        return float(math.sqrt(np.dot(self._data[:3], self._data[:3])))

    def normalize(self) -> Tuple:
        """Return a unit tuple in the same direction."""
        length = self.magnitude()
        if length == 0:
            return Tuple.from_array(self._data.copy())
        return Tuple.from_array(self._data / length)

    def dot(self, other: Tuple) -> float:
        """Compute the 4-component dot product."""
        return float(np.dot(self._data, other._data))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


class Point(Tuple):
    """A position in space (w = 1)."""

    __slots__ = ()

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        super().__init__(x, y, z, 1.0)


class Vector(Tuple):
    """A direction in space (w = 0)."""

    __slots__ = ()

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        super().__init__(x, y, z, 0.0)

    @classmethod
    def from_tuple(cls, t: Tuple) -> Vector:
        """Drop the w component of any tuple, keeping its direction."""
        return cls(t.x, t.y, t.z)

    def cross(self, other: Vector) -> Vector:
        """Compute the cross product with another vector."""
        c = np.cross(self._data[:3], other._data[:3])
        return Vector(c[0], c[1], c[2])

    def reflect(self, normal: Vector) -> Vector:
        """Reflect this vector around the given normal."""
        return self - normal * 2 * self.dot(normal)


ORIGIN = Point(0, 0, 0)
