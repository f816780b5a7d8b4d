"""
Ray-shape intersections and the quantities needed to shade them.

An Intersection records where along a ray a shape was crossed. Preparing
it against the ray and the full sorted intersection list yields a
Computations bundle: hit point, eye/normal/reflection vectors, offset
points and the refractive indices on either side of the surface.
"""

from __future__ import annotations
from dataclasses import dataclass
from operator import attrgetter
from typing import Iterable, List, Optional, Sequence, TYPE_CHECKING
import math

from .tuples import EPSILON, Point, Vector, float_eq

if TYPE_CHECKING:
    from .ray import Ray
    from .shapes import Shape


class Intersection:
    """A ray parameter t paired with the shape hit there."""

    __slots__ = ('t', 'object')

    def __init__(self, t: float, obj: Shape):
        self.t = t
        self.object = obj

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.object is other.object and float_eq(self.t, other.t)

    __hash__ = None

    def __lt__(self, other: Intersection) -> bool:
        return self.t < other.t and not float_eq(self.t, other.t)

    def __repr__(self) -> str:
        return f"Intersection(t={self.t:.5f}, object={self.object.kind.value})"

    def prepare_computations(
        self, ray: Ray, intersections: Optional[Sequence[Intersection]] = None
    ) -> Computations:
        """Derive the shading quantities for this intersection.

        Args:
            ray: The ray that produced the intersection
            intersections: Every intersection of the ray, sorted by t; used
                to find the refractive indices. Defaults to just this one.

        Returns:
            A fresh Computations bundle
        """
        if intersections is None:
            intersections = [self]

        point = ray.position(self.t)
        eyev = -ray.direction
        normalv = self.object.normal_at(point)

        inside = normalv.dot(eyev) < 0
        if inside:
            normalv = -normalv

        n1, n2 = self._refractive_indices(intersections)

        return Computations(
            t=self.t,
            object=self.object,
            point=point,
            eyev=eyev,
            normalv=normalv,
            inside=inside,
            reflectv=ray.direction.reflect(normalv),
            over_point=point + normalv * EPSILON,
            under_point=point - normalv * EPSILON,
            n1=n1,
            n2=n2,
        )

    def _refractive_indices(self, intersections: Iterable[Intersection]) -> tuple[float, float]:
        """Find (n1, n2) by replaying the ray's path through nested shapes.

        Walks the sorted intersections keeping the shapes the ray is
        currently inside. n1 is read before this intersection toggles its
        shape, n2 right after. Assumes shapes are disjoint or properly
        nested.
        """
        containers: List[Shape] = []
        n1 = n2 = 1.0

        for i in intersections:
            is_hit = i == self
            if is_hit:
                n1 = containers[-1].material.refractive_index if containers else 1.0

            for index, shape in enumerate(containers):
                if shape is i.object:
                    del containers[index]
                    break
            else:
                containers.append(i.object)

            if is_hit:
                n2 = containers[-1].material.refractive_index if containers else 1.0
                break

        return n1, n2


def sort_intersections(intersections: Iterable[Intersection]) -> List[Intersection]:
    """Return the intersections ordered by ascending t."""
    return sorted(intersections, key=attrgetter('t'))


def hit(intersections: Iterable[Intersection]) -> Optional[Intersection]:
    """Return the visible intersection: the smallest positive t, if any."""
    visible = [i for i in intersections if i.t > 0]
    if not visible:
        return None
    return min(visible, key=attrgetter('t'))


@dataclass
class Computations:
    """Shading quantities for one intersection.

    Attributes:
        t: Ray parameter of the intersection
        object: The shape that was hit
        point: Hit point in world space
        eyev: Unit vector from the point toward the eye
        normalv: Surface normal, flipped to face the eye
        inside: True if the ray started inside the shape
        reflectv: Ray direction reflected about the normal
        over_point: Point nudged out along the normal (shadow and reflection origin)
        under_point: Point nudged in along the normal (refraction origin)
        n1: Refractive index of the medium being left
        n2: Refractive index of the medium being entered
    """
    t: float
    object: Shape
    point: Point
    eyev: Vector
    normalv: Vector
    inside: bool
    reflectv: Vector
    over_point: Point
    under_point: Point
    n1: float = 1.0
    n2: float = 1.0

    def schlick(self) -> float:
        """Schlick's approximation of the Fresnel reflectance.

        Returns:
            Fraction of light reflected, 1.0 under total internal reflection
        """
        cos = self.eyev.dot(self.normalv)

        if self.n1 > self.n2:
            n = self.n1 / self.n2
            sin2_t = n * n * (1.0 - cos * cos)
            if sin2_t > 1.0:
                return 1.0
            cos = math.sqrt(1.0 - sin2_t)

        r0 = ((self.n1 - self.n2) / (self.n1 + self.n2)) ** 2
        return r0 + (1.0 - r0) * (1.0 - cos) ** 5
