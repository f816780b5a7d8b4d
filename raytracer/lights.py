"""
Light sources for the ray tracer.

A world carries at most one point light. Point lights emit equally in
all directions from a single position and cast hard shadows.
"""

from __future__ import annotations
from dataclasses import dataclass

from .color import Color, WHITE
from .tuples import Point, Vector


@dataclass(frozen=True)
class PointLight:
    """A point light source.

    Attributes:
        position: Position of the light
        intensity: Color and brightness of the light
    """
    position: Point
    intensity: Color = WHITE

    def direction_from(self, point: Point) -> Vector:
        """Unit vector from the given point toward the light."""
        return (self.position - point).normalize()

    def distance_from(self, point: Point) -> float:
        """Distance between the given point and the light."""
        return (self.position - point).magnitude()
