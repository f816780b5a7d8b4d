"""
Geometric shapes for the ray tracer.

Shapes are plain immutable data: a kind, a transform and a material.
Geometry is defined in local space and dispatched on the kind:
- SPHERE: the unit sphere centered at the origin
- PLANE: the infinite xz plane, normal +y

Adding a primitive means adding an ObjectType member together with its
local intersect and normal rules.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import List
import math

from .intersections import Intersection
from .materials import Material
from .matrix import IDENTITY, Matrix, Transformable
from .ray import Ray
from .tuples import EPSILON, ORIGIN, Point, Vector


class ObjectType(Enum):
    """Closed set of primitive kinds."""
    SPHERE = 'sphere'
    PLANE = 'plane'


@dataclass(frozen=True, eq=True)
class Shape(Transformable):
    """A primitive with a transform and a material.

    Equality is structural. Intersections refer back to the shape object
    that produced them.
    """
    kind: ObjectType = ObjectType.SPHERE
    transform: Matrix = IDENTITY
    material: Material = Material()

    def with_material(self, material: Material) -> Shape:
        return replace(self, material=material)

    def intersect(self, ray: Ray) -> List[Intersection]:
        """Intersect a world-space ray with this shape.

        Returns:
            Every intersection along the whole ray, including those behind
            its origin; not sorted
        """
        local_ray = ray.transform(self.transform.invert())
        if self.kind is ObjectType.SPHERE:
            return self._intersect_sphere(local_ray)
        return self._intersect_plane(local_ray)

    def _intersect_sphere(self, local_ray: Ray) -> List[Intersection]:
        """Solve |O + tD|^2 = 1 for the unit sphere.

        The equation expands to t^2(D.D) + 2t(D.(O-C)) + (O-C).(O-C) - 1 = 0
        which is the quadratic at^2 + bt + c = 0.
        """
        sphere_to_ray = local_ray.origin - ORIGIN
        direction = local_ray.direction

        a = direction.dot(direction)
        b = 2.0 * direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0:
            return []

        sqrtd = math.sqrt(discriminant)
        t1 = (-b - sqrtd) / (2.0 * a)
        t2 = (-b + sqrtd) / (2.0 * a)
        return [Intersection(t1, self), Intersection(t2, self)]

    def _intersect_plane(self, local_ray: Ray) -> List[Intersection]:
        # Parallel or coplanar rays never hit
        if abs(local_ray.direction.y) < EPSILON:
            return []
        t = -local_ray.origin.y / local_ray.direction.y
        return [Intersection(t, self)]

    def normal_at(self, world_point: Point) -> Vector:
        """Compute the unit surface normal at a world-space point.

        The local normal is taken back to world space with the
        inverse-transpose so it stays perpendicular under non-uniform
        scaling.
        """
        inverse = self.transform.invert()
        local_point = inverse * world_point
        if self.kind is ObjectType.SPHERE:
            local_normal = Vector.from_tuple(local_point - ORIGIN)
        else:
            local_normal = Vector(0, 1, 0)

        world_normal = inverse.transpose() * local_normal
        return Vector.from_tuple(world_normal).normalize()


def sphere() -> Shape:
    """Unit sphere at the origin with the default material."""
    return Shape(ObjectType.SPHERE)


def plane() -> Shape:
    """The xz plane with the default material."""
    return Shape(ObjectType.PLANE)


def glass_sphere() -> Shape:
    """Unit sphere made of fully transparent glass."""
    return Shape(
        ObjectType.SPHERE,
        material=Material(transparent=1.0, refractive_index=1.5),
    )
