"""Tests for the command line entry point."""

import pytest

from PIL import Image

from main import create_demo_scene, main
from raytracer.camera import Camera
from raytracer.world import World


SCENE = """
- add: camera
  width: 6
  height: 4
  field-of-view: 1.0472
  from: [0, 0, -5]
  to: [0, 0, 0]

- add: light
  at: [-10, 10, -10]

- add: object
"""


class TestDemoScene:
    """Test the built-in demo scene."""

    def test_demo_scene(self):
        world, camera = create_demo_scene(32, 18)
        assert isinstance(world, World)
        assert isinstance(camera, Camera)
        assert camera.hsize == 32
        assert camera.vsize == 18
        assert len(world) == 5
        assert world.light is not None


class TestMain:
    """Test running the CLI."""

    def test_render_demo_to_png(self, tmp_path):
        output = tmp_path / "out" / "demo.png"
        code = main([
            '--width', '8', '--height', '6', '--threads', '1',
            '--depth', '2', '--output', str(output),
        ])
        assert code == 0
        with Image.open(output) as img:
            assert img.size == (8, 6)

    def test_render_scene_file_to_ppm(self, tmp_path):
        scene = tmp_path / "scene.yaml"
        scene.write_text(SCENE)
        output = tmp_path / "scene.ppm"
        code = main([str(scene), '--threads', '2', '--tile-size', '2', '--output', str(output)])
        assert code == 0
        assert output.read_text().startswith("P3\n6 4\n255\n")

    def test_bad_scene_returns_error(self, tmp_path, capsys):
        code = main([str(tmp_path / "missing.yaml"), '--output', str(tmp_path / "x.png")])
        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_scene_directory_returns_error(self, tmp_path):
        code = main([str(tmp_path), '--output', str(tmp_path / "x.png")])
        assert code == 1

    def test_invalid_material_returns_error(self, tmp_path):
        scene = tmp_path / "scene.yaml"
        scene.write_text(SCENE + "  material:\n    refractive-index: 0\n")
        code = main([str(scene), '--output', str(tmp_path / "x.png")])
        assert code == 1
