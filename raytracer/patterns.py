"""
Procedural patterns for surface coloring.

Implements:
- Stripes alternating along x
- Linear gradient along x
- Concentric rings in the xz plane
- 3D checkers

Patterns are evaluated in pattern space: the world point is taken into
the object's space, then into the pattern's own space.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
import math

from .color import Color, BLACK, WHITE
from .matrix import IDENTITY, Matrix, Transformable
from .tuples import Point

if TYPE_CHECKING:
    from .shapes import Shape


class PatternType(Enum):
    """Closed set of procedural pattern kinds."""
    STRIPE = 'stripe'
    GRADIENT = 'gradient'
    RING = 'ring'
    CHECKERS = 'checkers'


@dataclass(frozen=True)
class Pattern(Transformable):
    """A two-color procedural pattern with its own transform."""
    kind: PatternType = PatternType.STRIPE
    color_a: Color = WHITE
    color_b: Color = BLACK
    transform: Matrix = IDENTITY

    def color_at(self, point: Point) -> Color:
        """Get the pattern color at a point given in pattern space."""
        if self.kind is PatternType.STRIPE:
            return self._stripe(point)
        if self.kind is PatternType.GRADIENT:
            return self._gradient(point)
        if self.kind is PatternType.RING:
            return self._ring(point)
        return self._checkers(point)

    def color_at_object(self, shape: Shape, world_point: Point) -> Color:
        """Get the pattern color at a world-space point on a shape.

        Args:
            shape: The shape carrying this pattern
            world_point: The point in world space

        Returns:
            Pattern color at this location
        """
        object_point = shape.transform.invert() * world_point
        pattern_point = self.transform.invert() * object_point
        return self.color_at(pattern_point)

    def _stripe(self, point: Point) -> Color:
        if math.floor(point.x) % 2 == 0:
            return self.color_a
        return self.color_b

    def _gradient(self, point: Point) -> Color:
        distance = self.color_b - self.color_a
        fraction = point.x - math.floor(point.x)
        return self.color_a + distance * fraction

    def _ring(self, point: Point) -> Color:
        if math.floor(math.hypot(point.x, point.z)) % 2 == 0:
            return self.color_a
        return self.color_b

    def _checkers(self, point: Point) -> Color:
        total = math.floor(point.x) + math.floor(point.y) + math.floor(point.z)
        if total % 2 == 0:
            return self.color_a
        return self.color_b


def stripe_pattern(a: Color = WHITE, b: Color = BLACK) -> Pattern:
    return Pattern(PatternType.STRIPE, a, b)


def gradient_pattern(a: Color = WHITE, b: Color = BLACK) -> Pattern:
    return Pattern(PatternType.GRADIENT, a, b)


def ring_pattern(a: Color = WHITE, b: Color = BLACK) -> Pattern:
    return Pattern(PatternType.RING, a, b)


def checkers_pattern(a: Color = WHITE, b: Color = BLACK) -> Pattern:
    return Pattern(PatternType.CHECKERS, a, b)
