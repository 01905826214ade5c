"""Unit tests for Ray, RayHit and the vector helpers.

Tests cover:
- Vector helpers (vec3, as_vec3, length, normalize, rounding)
- Ray evaluation, normalization and immutability
- RayHit distance and display format
"""

import math

import numpy as np
import pytest

from raycaster.core.ray import (
    Ray,
    RayHit,
    as_vec3,
    format_point,
    length,
    normalize,
    round_half_away,
    vec3,
)
from raycaster.errors import ConfigurationError


class TestVectorHelpers:
    """Tests for the NumPy vector helpers."""

    def test_vec3_dtype_and_values(self):
        v = vec3(1.0, 2.0, 3.0)
        assert v.dtype == np.float64
        assert v.tolist() == [1.0, 2.0, 3.0]

    def test_as_vec3_accepts_sequences(self):
        assert as_vec3((1, 2, 3)).tolist() == [1.0, 2.0, 3.0]
        assert as_vec3([[4.0], [5.0], [6.0]]).tolist() == [4.0, 5.0, 6.0]

    def test_as_vec3_rejects_wrong_size(self):
        with pytest.raises(ConfigurationError):
            as_vec3((1.0, 2.0))

    def test_length(self):
        assert abs(length(vec3(3.0, 4.0, 0.0)) - 5.0) < 1e-12

    def test_normalize_unit_length(self):
        n = normalize(vec3(1.0, 2.0, -2.0))
        assert abs(length(n) - 1.0) < 1e-12
        assert np.allclose(n, [1.0 / 3.0, 2.0 / 3.0, -2.0 / 3.0])

    def test_normalize_zero_vector(self):
        """A zero vector normalizes to zero instead of NaN."""
        assert normalize(vec3(0.0, 0.0, 0.0)).tolist() == [0.0, 0.0, 0.0]

    def test_round_half_away_from_zero(self):
        assert round_half_away(2.5) == 3
        assert round_half_away(-2.5) == -3
        assert round_half_away(2.4) == 2
        assert round_half_away(-0.4) == 0

    def test_format_point(self):
        assert format_point(vec3(1.0, -0.5, 10.0)) == "(1, -0.5, 10)"


class TestRay:
    """Tests for the Ray record."""

    def test_at(self):
        ray = Ray(vec3(1.0, 0.0, 0.0), vec3(0.0, 0.0, -2.0))
        assert ray.at(1.5).tolist() == [1.0, 0.0, -3.0]

    def test_coerces_sequences(self):
        ray = Ray((0, 0, 0), (0, 1, 0))
        assert ray.origin.dtype == np.float64
        assert ray.direction.tolist() == [0.0, 1.0, 0.0]

    def test_is_immutable(self):
        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
        with pytest.raises(AttributeError):
            ray.origin = vec3(1.0, 1.0, 1.0)
        with pytest.raises(ValueError):
            ray.origin[0] = 5.0

    def test_does_not_alias_input(self):
        origin = vec3(0.0, 0.0, 0.0)
        ray = Ray(origin, vec3(0.0, 0.0, -1.0))
        origin[0] = 9.0
        assert ray.origin[0] == 0.0

    def test_normalized(self):
        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 3.0, 4.0)).normalized()
        assert abs(length(ray.direction) - 1.0) < 1e-12
        assert np.allclose(ray.direction, [0.0, 0.6, 0.8])

    def test_zero_direction_rejected(self):
        with pytest.raises(ConfigurationError, match="zero-length"):
            Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0))

    def test_tiny_direction_accepted(self):
        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 1e-9))
        assert np.allclose(ray.normalized().direction, [0.0, 0.0, 1.0])

    def test_str(self):
        ray = Ray(vec3(0.0, 0.0, 3.0), vec3(0.0, 0.0, -1.0))
        assert str(ray) == "[ Origin (0, 0, 3), Direction: (0, 0, -1) ]"


class TestRayHit:
    """Tests for the RayHit record."""

    def test_distance_from(self):
        hit = RayHit(vec3(0.0, 0.0, -4.0), vec3(0.0, 0.0, -6.0), vec3(0.0, 0.0, 1.0))
        assert abs(hit.distance_from(vec3(0.0, 0.0, 0.0)) - 4.0) < 1e-12

    def test_str_has_three_lines(self):
        hit = RayHit(vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, 1.0))
        lines = str(hit).split("\n")
        assert lines == [
            "Normal: (0, 0, 1)",
            "  Near: (0, 0, 1)",
            "   Far: (0, 0, -1)",
        ]

    def test_equal_near_and_far_allowed(self):
        p = vec3(1.0, 2.0, 3.0)
        hit = RayHit(p, p, vec3(0.0, 1.0, 0.0))
        assert np.array_equal(hit.near, hit.far)
        assert math.isclose(length(hit.normal), 1.0)
