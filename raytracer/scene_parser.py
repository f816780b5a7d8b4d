"""
Scene description language parser.

A scene is a YAML (or JSON) list of entries, each either adding something
to the scene or defining a named material:

```yaml
- add: camera
  width: 100
  height: 50
  field-of-view: 1.0472
  from: [0, 1.5, -5]
  to: [0, 1, 0]
  up: [0, 1, 0]

- add: light
  at: [-10, 10, -10]
  intensity: [255, 255, 255]

- define: material
  name: glass
  color: [20, 20, 20]
  transparent: 0.9
  refractive-index: 1.5

- add: object
  type: plane
  material:
    color: [255, 255, 255]
    pattern:
      type: checkers
      colors: [[255, 255, 255], [0, 0, 0]]

- add: object
  type: sphere
  material: glass
  transform:
    - translate: [0, 1, 0]
```

Angles are in radians. Transforms are chained in the order listed.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import json
import logging

import yaml

from .camera import Camera
from .color import Color
from .errors import InvalidMaterialError, RaytracerError
from .lights import PointLight
from .materials import Material
from .matrix import Matrix
from .patterns import Pattern, PatternType
from .shapes import ObjectType, Shape
from .tuples import Point, Vector
from .world import World

logger = logging.getLogger(__name__)

MATERIAL_KEYS = {
    'color': 'color',
    'ambient': 'ambient',
    'diffuse': 'diffuse',
    'specular': 'specular',
    'shine': 'shine',
    'reflect': 'reflect',
    'transparent': 'transparent',
    'refractive-index': 'refractive_index',
    'refractive_index': 'refractive_index',
}

# Keys that may sit beside the material properties in an entry
MATERIAL_EXTRA_KEYS = {'pattern', 'name', 'define'}


class SceneParseError(RaytracerError):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: List[Shape] = []
        self.light: Optional[PointLight] = None
        self.camera: Optional[Camera] = None

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[World, Camera]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (world, camera)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            content = path.read_text()
        except (OSError, UnicodeDecodeError) as exc:
            raise SceneParseError(f"Cannot read scene file {filepath}: {exc}") from exc

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise SceneParseError(f"Cannot read scene file {filepath}: {exc}") from exc

        return self.parse_data(data)

    def parse_data(self, data: Any) -> Tuple[World, Camera]:
        """Parse a scene from already-loaded data.

        Args:
            data: List of scene entries

        Returns:
            Tuple of (world, camera)
        """
        if not isinstance(data, list):
            raise SceneParseError(f"Scene must be a list of entries, got {type(data).__name__}")

        for index, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise SceneParseError(f"Entry {index} is not a mapping: {entry!r}")

            if 'add' in entry:
                self._parse_add(entry)
            elif 'define' in entry:
                self._parse_define(entry)
            else:
                raise SceneParseError(f"Entry {index} has neither 'add' nor 'define': {entry!r}")

        if self.camera is None:
            raise SceneParseError("Scene has no camera")

        world = World(objects=tuple(self.objects), light=self.light)
        logger.debug("Loaded scene with %d objects, light=%s", len(world), self.light is not None)
        return world, self.camera

    def _parse_add(self, entry: Dict[str, Any]) -> None:
        what = entry['add']
        if what == 'camera':
            self._parse_camera(entry)
        elif what == 'light':
            self._parse_light(entry)
        elif what == 'object':
            self._parse_object(entry)
        else:
            raise SceneParseError(f"Unknown entry type: add {what}")

    def _parse_define(self, entry: Dict[str, Any]) -> None:
        what = entry['define']
        if what != 'material':
            raise SceneParseError(f"Unknown definition type: define {what}")
        name = self._require(entry, 'name')
        self.materials[name] = self._parse_material(entry)
        logger.debug("Defined material %s", name)

    def _parse_camera(self, data: Dict[str, Any]) -> None:
        """Parse a camera entry."""
        try:
            width = int(self._require(data, 'width'))
            height = int(self._require(data, 'height'))
            fov = float(self._require(data, 'field-of-view'))
        except (TypeError, ValueError) as exc:
            raise SceneParseError(f"Invalid camera settings: {exc}") from exc

        if width < 1 or height < 1:
            raise SceneParseError(f"Camera size must be positive, got {width}x{height}")

        from_point = self._parse_point(self._require(data, 'from'))
        to = self._parse_point(self._require(data, 'to'))
        up = self._parse_vector(data.get('up', [0, 1, 0]))

        self.camera = Camera(width, height, fov, Matrix.view_transform(from_point, to, up))

    def _parse_light(self, data: Dict[str, Any]) -> None:
        """Parse a light entry; a world has a single light."""
        if self.light is not None:
            logger.warning("Scene defines more than one light, keeping the last one")
        self.light = PointLight(
            self._parse_point(self._require(data, 'at')),
            self._parse_color(data.get('intensity', [255, 255, 255])),
        )

    def _parse_object(self, data: Dict[str, Any]) -> None:
        """Parse an object entry."""
        obj_type = str(data.get('type', 'sphere')).lower()
        try:
            kind = ObjectType(obj_type)
        except ValueError:
            raise SceneParseError(f"Unknown object type: {obj_type}") from None

        shape = Shape(kind, material=self._resolve_material(data.get('material')))
        shape = self._apply_transforms(shape, data.get('transform', []))
        self.objects.append(shape)
        logger.debug("Added %s", kind.value)

    def _resolve_material(self, mat_ref: Any) -> Material:
        """Look up a material reference (name or inline definition)."""
        if mat_ref is None:
            return Material()
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        if isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_material(self, data: Dict[str, Any]) -> Material:
        """Parse material properties; missing ones keep their defaults."""
        unknown = set(data) - set(MATERIAL_KEYS) - MATERIAL_EXTRA_KEYS
        if unknown:
            raise SceneParseError(f"Unknown material properties: {', '.join(sorted(map(str, unknown)))}")

        kwargs: Dict[str, Any] = {}
        for key, attr in MATERIAL_KEYS.items():
            if key not in data:
                continue
            if attr == 'color':
                kwargs[attr] = self._parse_color(data[key])
            else:
                try:
                    kwargs[attr] = float(data[key])
                except (TypeError, ValueError):
                    raise SceneParseError(f"Material {key} must be a number, got {data[key]!r}") from None

        if 'pattern' in data:
            kwargs['pattern'] = self._parse_pattern(data['pattern'])

        try:
            return Material(**kwargs)
        except InvalidMaterialError as exc:
            raise SceneParseError(f"Invalid material: {exc}") from exc

    def _parse_pattern(self, data: Any) -> Pattern:
        """Parse a pattern mapping."""
        if not isinstance(data, dict):
            raise SceneParseError(f"Pattern must be a mapping, got {data!r}")

        pattern_type = str(data.get('type', 'stripe')).lower()
        try:
            kind = PatternType(pattern_type)
        except ValueError:
            raise SceneParseError(f"Unknown pattern type: {pattern_type}") from None

        colors = data.get('colors', [[255, 255, 255], [0, 0, 0]])
        if not isinstance(colors, (list, tuple)) or len(colors) != 2:
            raise SceneParseError(f"Pattern needs exactly 2 colors, got {colors!r}")

        pattern = Pattern(kind, self._parse_color(colors[0]), self._parse_color(colors[1]))
        return self._apply_transforms(pattern, data.get('transform', []))

    def _apply_transforms(self, target, transforms: Any):
        """Chain transform steps onto a shape or pattern."""
        if not isinstance(transforms, list):
            raise SceneParseError(f"Transform must be a list, got {transforms!r}")

        for step in transforms:
            if not isinstance(step, dict) or len(step) != 1:
                raise SceneParseError(f"Transform step must have exactly one key: {step!r}")
            (op, args), = step.items()

            if op == 'translate':
                target = target.translate(*self._parse_numbers(args, 3))
            elif op == 'scale':
                target = target.scale(*self._parse_numbers(args, 3))
            elif op == 'rotate-x':
                target = target.rotate_x(self._parse_number(args))
            elif op == 'rotate-y':
                target = target.rotate_y(self._parse_number(args))
            elif op == 'rotate-z':
                target = target.rotate_z(self._parse_number(args))
            elif op == 'skew':
                target = target.skew(*self._parse_numbers(args, 6))
            else:
                raise SceneParseError(f"Unknown transform: {op}")

        return target

    @staticmethod
    def _require(data: Dict[str, Any], key: str) -> Any:
        if key not in data:
            raise SceneParseError(f"Missing required key '{key}' in {data!r}")
        return data[key]

    @staticmethod
    def _parse_number(data: Any) -> float:
        try:
            return float(data)
        except (TypeError, ValueError):
            raise SceneParseError(f"Expected a number, got {data!r}") from None

    def _parse_numbers(self, data: Any, count: int) -> List[float]:
        if not isinstance(data, (list, tuple)) or len(data) != count:
            raise SceneParseError(f"Expected {count} numbers, got {data!r}")
        return [self._parse_number(v) for v in data]

    def _parse_point(self, data: Any) -> Point:
        return Point(*self._parse_numbers(data, 3))

    def _parse_vector(self, data: Any) -> Vector:
        return Vector(*self._parse_numbers(data, 3))

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from [r, g, b] (0-255) or a '#rrggbb' string."""
        if isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                try:
                    return Color(int(data[1:3], 16), int(data[3:5], 16), int(data[5:7], 16))
                except ValueError:
                    pass
            raise SceneParseError(f"Cannot parse color from string: {data}")
        r, g, b = self._parse_numbers(data, 3)
        return Color(int(r), int(g), int(b))


def load_scene(filepath: Union[str, Path]) -> Tuple[World, Camera]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to scene file

    Returns:
        Tuple of (world, camera)
    """
    return SceneParser().parse_file(filepath)


def parse_scene(data: Any) -> Tuple[World, Camera]:
    """Convenience function to parse scene data.

    Args:
        data: List of scene entries

    Returns:
        Tuple of (world, camera)
    """
    return SceneParser().parse_data(data)
