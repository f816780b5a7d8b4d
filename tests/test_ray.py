"""Tests for Ray class."""

import pytest

from raytracer.matrix import Matrix
from raytracer.ray import Ray
from raytracer.tuples import Point, Vector


class TestRay:
    """Test Ray operations."""

    def test_creation(self):
        origin = Point(1, 2, 3)
        direction = Vector(4, 5, 6)
        ray = Ray(origin, direction)
        assert ray.origin == origin
        assert ray.direction == direction

    @pytest.mark.parametrize("t, expected", [
        (0, Point(2, 3, 4)),
        (1, Point(3, 3, 4)),
        (-1, Point(1, 3, 4)),
        (2.5, Point(4.5, 3, 4)),
    ])
    def test_position(self, t, expected):
        ray = Ray(Point(2, 3, 4), Vector(1, 0, 0))
        assert ray.position(t) == expected

    def test_translate(self):
        ray = Ray(Point(1, 2, 3), Vector(0, 1, 0))
        moved = ray.transform(Matrix.translation(3, 4, 5))
        assert moved.origin == Point(4, 6, 8)
        assert moved.direction == Vector(0, 1, 0)

    def test_scale(self):
        ray = Ray(Point(1, 2, 3), Vector(0, 1, 0))
        scaled = ray.transform(Matrix.scaling(2, 3, 4))
        assert scaled.origin == Point(2, 6, 12)
        assert scaled.direction == Vector(0, 3, 0)

    def test_transform_leaves_original_untouched(self):
        ray = Ray(Point(1, 2, 3), Vector(0, 1, 0))
        ray.transform(Matrix.translation(3, 4, 5))
        assert ray.origin == Point(1, 2, 3)

    def test_equality(self):
        assert Ray(Point(0, 0, 0), Vector(0, 0, 1)) == Ray(Point(0, 0, 0), Vector(0, 0, 1))
        assert Ray(Point(0, 0, 0), Vector(0, 0, 1)) != Ray(Point(0, 0, 0), Vector(0, 1, 0))
