"""Unit tests for orthographic and perspective projections."""

import math

import numpy as np
import pytest

from raycaster.camera.projection import OrthographicProjection, PerspectiveProjection
from raycaster.errors import ConfigurationError


class TestOrthographicProjection:
    """Tests for the OpenGL-style orthographic projection."""

    def test_symmetric_bounds(self):
        proj = OrthographicProjection.symmetric(3.0)
        assert (proj.left, proj.right, proj.bottom, proj.top) == (-3.0, 3.0, -3.0, 3.0)
        assert (proj.znear, proj.zfar) == (-3.0, 3.0)

    def test_corners_map_to_ndc_cube(self):
        proj = OrthographicProjection(-2.0, 4.0, -1.0, 1.0, 1.0, 11.0)
        assert np.allclose(proj.project_point((-2.0, -1.0, -1.0)), [-1.0, -1.0, -1.0])
        assert np.allclose(proj.project_point((4.0, 1.0, -11.0)), [1.0, 1.0, 1.0])

    def test_unproject_near_plane(self):
        """NDC depth -1 lands on z = -znear in view space."""
        proj = OrthographicProjection.symmetric(3.0)
        assert np.allclose(proj.unproject_point((0.0, 0.0, -1.0)), [0.0, 0.0, 3.0])
        assert np.allclose(proj.unproject_point((1.0, -1.0, 1.0)), [3.0, -3.0, -3.0])

    def test_inverse_matrix(self):
        proj = OrthographicProjection(-1.0, 2.0, -3.0, 4.0, 0.5, 9.0)
        assert np.allclose(proj.as_matrix() @ proj.inverse_matrix(), np.eye(4))

    @pytest.mark.parametrize(
        "bounds",
        [
            (1.0, 1.0, -1.0, 1.0, -1.0, 1.0),
            (-1.0, 1.0, 2.0, -2.0, -1.0, 1.0),
            (-1.0, 1.0, -1.0, 1.0, 5.0, 5.0),
        ],
    )
    def test_degenerate_bounds_raise(self, bounds):
        with pytest.raises(ConfigurationError):
            OrthographicProjection(*bounds)


class TestPerspectiveProjection:
    """Tests for the OpenGL-style perspective projection."""

    def test_near_and_far_depth(self):
        proj = PerspectiveProjection(aspect=1.0, fovy=math.pi / 2.0, znear=1.0, zfar=10.0)
        assert abs(proj.project_point((0.0, 0.0, -1.0))[2] + 1.0) < 1e-9
        assert abs(proj.project_point((0.0, 0.0, -10.0))[2] - 1.0) < 1e-9

    def test_frustum_edge(self):
        """With a 90 degree fovy the top edge at depth d is at y = d."""
        proj = PerspectiveProjection(aspect=2.0, fovy=math.pi / 2.0, znear=1.0, zfar=10.0)
        ndc = proj.project_point((8.0, 4.0, -4.0))
        assert np.allclose(ndc[:2], [1.0, 1.0])

    def test_unproject_inverts_project(self):
        proj = PerspectiveProjection(aspect=1.5, fovy=0.9, znear=0.3, zfar=40.0)
        p = np.array([0.7, -1.2, -6.0])
        assert np.allclose(proj.unproject_point(proj.project_point(p)), p)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"aspect": 0.0, "fovy": 1.0, "znear": 0.1, "zfar": 10.0},
            {"aspect": 1.0, "fovy": 0.0, "znear": 0.1, "zfar": 10.0},
            {"aspect": 1.0, "fovy": math.pi, "znear": 0.1, "zfar": 10.0},
            {"aspect": 1.0, "fovy": 1.0, "znear": 0.0, "zfar": 10.0},
            {"aspect": 1.0, "fovy": 1.0, "znear": 10.0, "zfar": 1.0},
        ],
    )
    def test_invalid_parameters_raise(self, kwargs):
        with pytest.raises(ConfigurationError):
            PerspectiveProjection(**kwargs)
