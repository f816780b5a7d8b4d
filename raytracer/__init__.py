"""
raytracer - A Python Whitted-style Ray Tracer

An offline CPU renderer with support for:
- Affine transforms on shapes, patterns and the camera
- Spheres and planes
- Phong shading with hard shadows from a point light
- Recursive reflection and refraction with Schlick blending
- Procedural patterns (stripes, gradients, rings, checkers)
- Parallel tile-based rendering
- YAML/JSON scene files, PPM and PNG output
"""

__version__ = "0.1.0"
__author__ = "raytracer Team"

from .tuples import Tuple, Point, Vector, ORIGIN, EPSILON, float_eq
from .color import Color, BLACK, WHITE, RED, GREEN, BLUE
from .matrix import Matrix, IDENTITY, Transformable
from .ray import Ray
from .errors import (
    RaytracerError, SingularMatrixError, MatrixDimensionError,
    MissingLightError, PixelOutOfBoundsError
)
from .patterns import (
    Pattern, PatternType, stripe_pattern, gradient_pattern,
    ring_pattern, checkers_pattern
)
from .lights import PointLight
from .materials import Material
from .intersections import Intersection, Computations, hit, sort_intersections
from .shapes import ObjectType, Shape, sphere, plane, glass_sphere
from .world import World, default_world, MAX_DEPTH
from .canvas import Canvas
from .camera import Camera
from .renderer import Renderer, RenderSettings, render_tile
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .logging_config import setup_logging
