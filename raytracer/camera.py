"""
Camera module for generating primary rays.

The camera sits at the origin of its own space looking toward -z, with
the image plane one unit away. Its transform (usually a view transform)
maps the world into camera space; pixel rays are mapped back out with
the inverse.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
import math

from .matrix import IDENTITY, Matrix, Transformable
from .ray import Ray
from .tuples import Point, Vector

if TYPE_CHECKING:
    from .canvas import Canvas
    from .renderer import RenderSettings
    from .world import World


@dataclass(frozen=True)
class Camera(Transformable):
    """A pinhole camera.

    Attributes:
        hsize: Horizontal size of the image in pixels
        vsize: Vertical size of the image in pixels
        field_of_view: Angle in radians covered by the larger image side
        transform: World-to-camera transform
        half_width, half_height: Half extents of the image plane (derived)
        pixel_size: Size of one pixel on the image plane (derived)
    """
    hsize: int
    vsize: int
    field_of_view: float
    transform: Matrix = IDENTITY
    half_width: float = field(init=False, repr=False)
    half_height: float = field(init=False, repr=False)
    pixel_size: float = field(init=False, repr=False)

    def __post_init__(self):
        if self.hsize < 1 or self.vsize < 1:
            raise ValueError(f"Camera size must be positive, got {self.hsize}x{self.vsize}")

        half_view = math.tan(self.field_of_view / 2)
        aspect = self.hsize / self.vsize

        if aspect >= 1:
            half_width, half_height = half_view, half_view / aspect
        else:
            half_width, half_height = half_view * aspect, half_view

        object.__setattr__(self, 'half_width', half_width)
        object.__setattr__(self, 'half_height', half_height)
        object.__setattr__(self, 'pixel_size', (half_width * 2) / self.hsize)

    @classmethod
    def looking_at(
        cls,
        hsize: int,
        vsize: int,
        field_of_view: float,
        from_point: Point,
        to: Point,
        up: Vector = Vector(0, 1, 0),
    ) -> Camera:
        """Create a camera positioned with a view transform."""
        return cls(hsize, vsize, field_of_view, Matrix.view_transform(from_point, to, up))

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Generate the ray from the camera through the center of a pixel.

        Args:
            x: Pixel column (0 = left)
            y: Pixel row (0 = top)

        Returns:
            A world-space ray with a normalized direction
        """
        xoffset = (x + 0.5) * self.pixel_size
        yoffset = (y + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        inverse = self.transform.invert()
        pixel = inverse * Point(world_x, world_y, -1)
        origin = inverse * Point(0, 0, 0)
        direction = Vector.from_tuple(pixel - origin).normalize()
        return Ray(origin, direction)

    def render(self, world: World, settings: Optional[RenderSettings] = None) -> Canvas:
        """Render the world into a new canvas.

        Args:
            world: The scene to render
            settings: Render configuration (uses defaults if None)

        Returns:
            Canvas of hsize x vsize pixels
        """
        from .renderer import Renderer
        return Renderer(settings).render(world, self)
