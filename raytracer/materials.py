"""
Surface materials and Phong shading.

A material bundles a base color (or a procedural pattern) with the
Phong coefficients and the optical properties used for reflection and
refraction:
- ambient, diffuse, specular, shine: Phong reflection model
- reflect: 0 (matte) to 1 (perfect mirror)
- transparent: 0 (opaque) to 1 (fully transparent)
- refractive_index: 1.0 for vacuum, ~1.5 for glass
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, TYPE_CHECKING

from .color import Color, BLACK, WHITE
from .errors import InvalidMaterialError
from .lights import PointLight
from .patterns import Pattern
from .tuples import Point, Vector

if TYPE_CHECKING:
    from .shapes import Shape

VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.5
DIAMOND = 2.417


@dataclass(frozen=True)
class Material:
    """Immutable surface description.

    Use the `with_*` builders to derive variations; they return new
    materials and leave the receiver untouched.
    """
    color: Color = WHITE
    pattern: Optional[Pattern] = None
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shine: float = 200.0
    reflect: float = 0.0
    transparent: float = 0.0
    refractive_index: float = VACUUM

    def __post_init__(self):
        if self.refractive_index <= 0:
            raise InvalidMaterialError(
                f"refractive_index must be positive, got {self.refractive_index}"
            )

    def with_color(self, color: Color) -> Material:
        return replace(self, color=color)

    def with_pattern(self, pattern: Optional[Pattern]) -> Material:
        return replace(self, pattern=pattern)

    def with_ambient(self, ambient: float) -> Material:
        return replace(self, ambient=ambient)

    def with_diffuse(self, diffuse: float) -> Material:
        return replace(self, diffuse=diffuse)

    def with_specular(self, specular: float) -> Material:
        return replace(self, specular=specular)

    def with_shine(self, shine: float) -> Material:
        return replace(self, shine=shine)

    def with_reflect(self, reflect: float) -> Material:
        return replace(self, reflect=reflect)

    def with_transparency(self, transparent: float) -> Material:
        return replace(self, transparent=transparent)

    def with_refractive_index(self, refractive_index: float) -> Material:
        return replace(self, refractive_index=refractive_index)

    def color_at(self, shape: Shape, point: Point) -> Color:
        """Surface color at a world-space point, honoring the pattern."""
        if self.pattern is not None:
            return self.pattern.color_at_object(shape, point)
        return self.color

    def lighting(
        self,
        shape: Shape,
        light: PointLight,
        point: Point,
        eyev: Vector,
        normalv: Vector,
        in_shadow: bool = False,
    ) -> Color:
        """Evaluate the Phong reflection model at a surface point.

        Args:
            shape: The shape being shaded (needed for pattern space)
            light: The light illuminating the point
            point: The point being shaded, in world space
            eyev: Unit vector toward the eye
            normalv: Unit surface normal
            in_shadow: If True only the ambient term contributes

        Returns:
            Unclamped sum of ambient, diffuse and specular contributions
        """
        effective_color = self.color_at(shape, point).blend(light.intensity)
        lightv = light.direction_from(point)
        ambient = effective_color * self.ambient

        if in_shadow:
            return ambient

        # Negative means the light is on the other side of the surface
        light_dot_normal = lightv.dot(normalv)
        if light_dot_normal < 0:
            return ambient

        diffuse = effective_color * self.diffuse * light_dot_normal

        reflectv = (-lightv).reflect(normalv)
        reflect_dot_eye = reflectv.dot(eyev)
        if reflect_dot_eye <= 0:
            specular = BLACK
        else:
            factor = reflect_dot_eye ** self.shine
            specular = light.intensity * self.specular * factor

        return ambient + diffuse + specular
