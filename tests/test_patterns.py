"""Tests for procedural patterns."""

import pytest

from raytracer.color import BLACK, WHITE, Color
from raytracer.matrix import IDENTITY, Matrix
from raytracer.patterns import (
    Pattern, PatternType, checkers_pattern, gradient_pattern, ring_pattern, stripe_pattern
)
from raytracer.shapes import sphere
from raytracer.tuples import Point


class TestPatternDefaults:
    """Test pattern construction."""

    def test_default_pattern(self):
        p = Pattern()
        assert p.kind is PatternType.STRIPE
        assert p.color_a == WHITE
        assert p.color_b == BLACK
        assert p.transform == IDENTITY

    def test_helpers_set_kind(self):
        assert stripe_pattern().kind is PatternType.STRIPE
        assert gradient_pattern().kind is PatternType.GRADIENT
        assert ring_pattern().kind is PatternType.RING
        assert checkers_pattern().kind is PatternType.CHECKERS

    def test_pattern_is_transformable(self):
        p = stripe_pattern().scale(2, 2, 2)
        assert p.transform == Matrix.scaling(2, 2, 2)


class TestStripes:
    """Test the stripe pattern."""

    @pytest.mark.parametrize("point", [Point(0, 0, 0), Point(0, 1, 0), Point(0, 2, 0)])
    def test_constant_in_y(self, point):
        assert stripe_pattern().color_at(point) == WHITE

    @pytest.mark.parametrize("point", [Point(0, 0, 0), Point(0, 0, 1), Point(0, 0, 2)])
    def test_constant_in_z(self, point):
        assert stripe_pattern().color_at(point) == WHITE

    @pytest.mark.parametrize("x, expected", [
        (0, WHITE), (0.9, WHITE), (1, BLACK), (-0.1, BLACK), (-1, BLACK), (-1.1, WHITE),
    ])
    def test_alternates_in_x(self, x, expected):
        assert stripe_pattern().color_at(Point(x, 0, 0)) == expected


class TestPatternSpace:
    """Test object and pattern transforms."""

    def test_object_transform(self):
        s = sphere().scale(2, 2, 2)
        assert stripe_pattern().color_at_object(s, Point(1.5, 0, 0)) == WHITE

    def test_pattern_transform(self):
        p = stripe_pattern().scale(2, 2, 2)
        assert p.color_at_object(sphere(), Point(1.5, 0, 0)) == WHITE

    def test_both_transforms(self):
        s = sphere().scale(2, 2, 2)
        p = stripe_pattern().translate(0.5, 0, 0)
        assert p.color_at_object(s, Point(2.5, 0, 0)) == WHITE

    def test_untransformed_object_and_pattern(self):
        assert stripe_pattern().color_at_object(sphere(), Point(1.5, 0, 0)) == BLACK


class TestOtherPatterns:
    """Test gradient, ring and checkers."""

    @pytest.mark.parametrize("x, expected", [
        (0, WHITE),
        (0.25, Color(192, 192, 192)),
        (0.5, Color(128, 128, 128)),
        (0.75, Color(64, 64, 64)),
    ])
    def test_gradient_interpolates(self, x, expected):
        assert gradient_pattern().color_at(Point(x, 0, 0)) == expected

    @pytest.mark.parametrize("point, expected", [
        (Point(0, 0, 0), WHITE),
        (Point(1, 0, 0), BLACK),
        (Point(0, 0, 1), BLACK),
        (Point(0.708, 0, 0.708), BLACK),
    ])
    def test_ring(self, point, expected):
        assert ring_pattern().color_at(point) == expected

    @pytest.mark.parametrize("point, expected", [
        (Point(0, 0, 0), WHITE),
        (Point(0.99, 0, 0), WHITE),
        (Point(1.01, 0, 0), BLACK),
        (Point(0, 0.99, 0), WHITE),
        (Point(0, 1.01, 0), BLACK),
        (Point(0, 0, 0.99), WHITE),
        (Point(0, 0, 1.01), BLACK),
    ])
    def test_checkers_repeat_in_every_dimension(self, point, expected):
        assert checkers_pattern().color_at(point) == expected
