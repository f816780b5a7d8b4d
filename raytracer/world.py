"""
The scene and the recursive shading algorithm.

color_at(ray, remaining) intersects the scene, shades the nearest visible
hit with Phong lighting and hard shadows, then recurses for reflection
and refraction. `remaining` strictly decreases on every recursive call
and is the only termination guarantee.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple
import math

from .color import Color, BLACK, WHITE
from .errors import MissingLightError
from .intersections import Computations, Intersection, hit, sort_intersections
from .lights import PointLight
from .materials import Material
from .matrix import Matrix
from .ray import Ray
from .shapes import Shape
from .tuples import Point

MAX_DEPTH = 5


@dataclass(frozen=True)
class World:
    """A list of shapes lit by at most one point light."""
    objects: Tuple[Shape, ...] = ()
    light: Optional[PointLight] = None

    def __post_init__(self):
        object.__setattr__(self, 'objects', tuple(self.objects))

    def __len__(self) -> int:
        return len(self.objects)

    def with_light(self, light: Optional[PointLight]) -> World:
        return replace(self, light=light)

    def with_objects(self, objects) -> World:
        return replace(self, objects=tuple(objects))

    def add(self, *shapes: Shape) -> World:
        """Return a new world with the shapes appended."""
        return replace(self, objects=self.objects + shapes)

    def intersect(self, ray: Ray) -> List[Intersection]:
        """Intersect the ray with every shape, sorted by ascending t."""
        intersections: List[Intersection] = []
        for shape in self.objects:
            intersections.extend(shape.intersect(ray))
        return sort_intersections(intersections)

    def is_shadowed(self, point: Point) -> bool:
        """Check whether an object lies between the point and the light."""
        if self.light is None:
            return False

        v = self.light.position - point
        distance = v.magnitude()
        ray = Ray(point, v.normalize())

        h = hit(self.intersect(ray))
        return h is not None and h.t < distance

    def shade_hit(self, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
        """Compute the clamped color at a prepared intersection.

        Raises:
            MissingLightError: If the world has no light
        """
        if self.light is None:
            raise MissingLightError("Cannot shade a hit in a world without a light")

        material = comps.object.material
        surface = material.lighting(
            comps.object,
            self.light,
            comps.over_point,
            comps.eyev,
            comps.normalv,
            self.is_shadowed(comps.over_point),
        )

        reflected = self.reflected_color(comps, remaining)
        refracted = self.refracted_color(comps, remaining)

        if material.reflect > 0 and material.transparent > 0:
            reflectance = comps.schlick()
            color = surface + reflected * reflectance + refracted * (1.0 - reflectance)
        else:
            color = surface + reflected + refracted
        return color.clamp()

    def color_at(self, ray: Ray, remaining: int = MAX_DEPTH) -> Color:
        """Trace a ray into the world; black if it hits nothing."""
        intersections = self.intersect(ray)
        h = hit(intersections)
        if h is None:
            return BLACK
        return self.shade_hit(h.prepare_computations(ray, intersections), remaining)

    def reflected_color(self, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
        """Color seen along the reflection vector, scaled by reflectivity."""
        reflect = comps.object.material.reflect
        if remaining <= 0 or reflect == 0:
            return BLACK

        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * reflect

    def refracted_color(self, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
        """Color seen through the surface, scaled by transparency.

        Uses Snell's law; total internal reflection contributes black.
        """
        transparent = comps.object.material.transparent
        if remaining <= 0 or transparent == 0:
            return BLACK

        n_ratio = comps.n1 / comps.n2
        cos_i = comps.eyev.dot(comps.normalv)
        sin2_t = n_ratio ** 2 * (1.0 - cos_i ** 2)
        if sin2_t > 1.0:
            return BLACK

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
        refract_ray = Ray(comps.under_point, direction)
        return self.color_at(refract_ray, remaining - 1) * transparent


def default_world() -> World:
    """Two concentric spheres lit from the upper left.

    The outer unit sphere is green-ish and matte, the inner one is half its
    size with the default material.
    """
    light = PointLight(Point(-10, 10, -10), WHITE)
    outer = Shape(material=Material(color=Color(204, 255, 153), diffuse=0.7, specular=0.2))
    inner = Shape(transform=Matrix.scaling(0.5, 0.5, 0.5))
    return World(objects=(outer, inner), light=light)
