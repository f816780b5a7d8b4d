"""Tests for the YAML/JSON scene parser."""

import pytest
import json
import math

from raytracer.camera import Camera
from raytracer.color import WHITE, Color
from raytracer.materials import Material
from raytracer.matrix import Matrix
from raytracer.patterns import PatternType
from raytracer.scene_parser import SceneParseError, SceneParser, load_scene, parse_scene
from raytracer.shapes import ObjectType
from raytracer.tuples import Point, Vector
from raytracer.world import World


CAMERA = {
    'add': 'camera',
    'width': 100,
    'height': 50,
    'field-of-view': 0.785,
    'from': [-6, 6, -10],
    'to': [6, 0, 6],
    'up': [-0.45, 1, 0],
}

LIGHT = {'add': 'light', 'at': [50, 100, -50], 'intensity': [255, 255, 255]}


SCENE_YAML = """
- add: camera
  width: 40
  height: 20
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
    pattern:
      type: checkers
      colors: [[255, 255, 255], [0, 0, 0]]

- add: object
  type: sphere
  material: glass
  transform:
    - translate: [0, 1, 0]
"""


class TestParseData:
    """Test parsing already-loaded scene data."""

    def test_camera(self):
        _, camera = parse_scene([CAMERA])
        assert isinstance(camera, Camera)
        assert camera.hsize == 100
        assert camera.vsize == 50
        assert camera.field_of_view == pytest.approx(0.785)
        assert camera.transform == Matrix.view_transform(
            Point(-6, 6, -10), Point(6, 0, 6), Vector(-0.45, 1, 0)
        )

    def test_light(self):
        world, _ = parse_scene([CAMERA, LIGHT])
        assert world.light.position == Point(50, 100, -50)
        assert world.light.intensity == WHITE

    def test_second_light_replaces_first(self):
        other = {'add': 'light', 'at': [0, 1, 0]}
        world, _ = parse_scene([CAMERA, LIGHT, other])
        assert world.light.position == Point(0, 1, 0)

    def test_scene_without_light(self):
        world, _ = parse_scene([CAMERA])
        assert world.light is None

    def test_objects_default_to_spheres(self):
        world, _ = parse_scene([CAMERA, {'add': 'object'}])
        assert isinstance(world, World)
        assert len(world) == 1
        assert world.objects[0].kind is ObjectType.SPHERE
        assert world.objects[0].material == Material()

    def test_inline_material(self):
        entry = {
            'add': 'object',
            'type': 'plane',
            'material': {'color': [255, 0, 0], 'reflect': 0.5, 'shine': 50},
        }
        world, _ = parse_scene([CAMERA, entry])
        shape = world.objects[0]
        assert shape.kind is ObjectType.PLANE
        assert shape.material.color == Color(255, 0, 0)
        assert shape.material.reflect == 0.5
        assert shape.material.shine == 50.0
        assert shape.material.diffuse == 0.9

    def test_named_material(self):
        define = {'define': 'material', 'name': 'mirror', 'reflect': 1, 'color': '#102030'}
        world, _ = parse_scene([CAMERA, define, {'add': 'object', 'material': 'mirror'}])
        material = world.objects[0].material
        assert material.reflect == 1.0
        assert material.color == Color(16, 32, 48)

    def test_pattern(self):
        entry = {
            'add': 'object',
            'material': {
                'pattern': {
                    'type': 'ring',
                    'colors': [[255, 0, 0], [0, 0, 255]],
                    'transform': [{'scale': [0.5, 0.5, 0.5]}],
                },
            },
        }
        world, _ = parse_scene([CAMERA, entry])
        pattern = world.objects[0].material.pattern
        assert pattern.kind is PatternType.RING
        assert pattern.color_a == Color(255, 0, 0)
        assert pattern.color_b == Color(0, 0, 255)
        assert pattern.transform == Matrix.scaling(0.5, 0.5, 0.5)

    def test_transforms_chain_in_listed_order(self):
        entry = {
            'add': 'object',
            'transform': [
                {'translate': [1, 2, 3]},
                {'scale': [2, 2, 2]},
                {'rotate-x': math.pi / 2},
                {'rotate-y': 0.5},
                {'rotate-z': 0.25},
                {'skew': [1, 0, 0, 0, 0, 0]},
            ],
        }
        world, _ = parse_scene([CAMERA, entry])
        expected = (
            Matrix.translation(1, 2, 3) * Matrix.scaling(2, 2, 2)
            * Matrix.rotation_x(math.pi / 2) * Matrix.rotation_y(0.5)
            * Matrix.rotation_z(0.25) * Matrix.shearing(1, 0, 0, 0, 0, 0)
        )
        assert world.objects[0].transform == expected

    def test_underscored_refractive_index(self):
        entry = {'add': 'object', 'material': {'refractive_index': 1.5, 'transparent': 0.9}}
        world, _ = parse_scene([CAMERA, entry])
        material = world.objects[0].material
        assert material.refractive_index == 1.5
        assert material.transparent == 0.9

    def test_parser_instance_collects_state(self):
        parser = SceneParser()
        parser.parse_data([{'define': 'material', 'name': 'm', 'ambient': 1}, CAMERA])
        assert parser.materials['m'].ambient == 1.0


class TestParseErrors:
    """Test rejected scene descriptions."""

    @pytest.mark.parametrize("data", [
        {'add': 'camera'},
        [],
        [LIGHT],
        [CAMERA, 'not a mapping'],
        [CAMERA, {'remove': 'object'}],
        [CAMERA, {'add': 'teapot'}],
        [CAMERA, {'define': 'texture', 'name': 'x'}],
        [CAMERA, {'define': 'material'}],
        [CAMERA, {'add': 'object', 'type': 'cube'}],
        [CAMERA, {'add': 'object', 'material': 'undefined'}],
        [CAMERA, {'add': 'object', 'material': {'ambient': 'lots'}}],
        [CAMERA, {'add': 'object', 'transform': [{'translate': [1, 2]}]}],
        [CAMERA, {'add': 'object', 'transform': [{'explode': 1}]}],
        [CAMERA, {'add': 'object', 'transform': {'translate': [1, 2, 3]}}],
        [CAMERA, {'add': 'object', 'material': {'pattern': {'type': 'plaid'}}}],
        [CAMERA, {'add': 'object', 'material': {'pattern': {'colors': [[0, 0, 0]]}}}],
        [CAMERA, {'add': 'object', 'material': {'color': '#zzzzzz'}}],
        [CAMERA, {'add': 'object', 'material': {'transparnet': 0.9}}],
        [CAMERA, {'define': 'material', 'name': 'm', 'shininess': 10}],
        [CAMERA, {'add': 'object', 'material': {'refractive-index': 0}}],
        [CAMERA, {'add': 'object', 'material': {'refractive_index': -1.5}}],
        [dict(CAMERA, width=0)],
        [dict(CAMERA, width='wide')],
        [{'add': 'light', 'at': [0, 0, 0]}, dict(CAMERA, **{'from': [0, 0]})],
    ])
    def test_invalid_scene(self, data):
        with pytest.raises(SceneParseError):
            parse_scene(data)


class TestLoadScene:
    """Test loading scene files."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text(SCENE_YAML)
        world, camera = load_scene(path)
        assert camera.hsize == 40
        assert camera.vsize == 20
        assert len(world) == 2
        floor, ball = world.objects
        assert floor.kind is ObjectType.PLANE
        assert floor.material.pattern.kind is PatternType.CHECKERS
        assert ball.material.transparent == 0.9
        assert ball.material.refractive_index == 1.5
        assert ball.transform == Matrix.translation(0, 1, 0)

    def test_json_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps([CAMERA, LIGHT, {'add': 'object'}]))
        world, camera = load_scene(str(path))
        assert camera.hsize == 100
        assert len(world) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneParseError):
            load_scene(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("- add: camera\n  width: [1, 2\n")
        with pytest.raises(SceneParseError):
            load_scene(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")
        with pytest.raises(SceneParseError):
            load_scene(path)

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(SceneParseError):
            load_scene(tmp_path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe\xfa- add: camera\n")
        with pytest.raises(SceneParseError):
            load_scene(path)
