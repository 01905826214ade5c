"""Tests for render configuration and validation."""

import math

import pytest

from raycaster.camera.projection import OrthographicProjection, PerspectiveProjection
from raycaster.config import RenderConfig, projection_from_mapping
from raycaster.errors import ConfigurationError
from raycaster.render.reference import BACKGROUND_COLOR
from raycaster.scene.scene import HitSelection


class TestRenderConfig:
    """Tests for RenderConfig defaults and validation."""

    def test_defaults(self):
        config = RenderConfig()
        assert (config.width, config.height) == (1001, 1001)
        assert config.projection == OrthographicProjection.symmetric(3.0)
        assert config.background == BACKGROUND_COLOR
        assert config.selection is HitSelection.NEAREST
        assert config.backend == "taichi"
        assert config.light_name is None

    def test_selection_from_string(self):
        assert RenderConfig(selection="farthest_near").selection is HitSelection.FARTHEST_NEAR

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": -3},
            {"background": (0, 0, 256)},
            {"background": (0, 0)},
            {"selection": "closest"},
            {"backend": "opengl"},
            {"arch": "tpu"},
            {"projection": "orthographic"},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ConfigurationError):
            RenderConfig(**kwargs)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            RenderConfig(width=0)

    def test_demo_params(self):
        projection = PerspectiveProjection(aspect=2.0, fovy=0.5, znear=0.1, zfar=20.0)
        config = RenderConfig(
            width=64, height=32, projection=projection, selection="farthest_near"
        )
        params = config.demo_params()
        assert (params.width, params.height) == (64, 32)
        assert params.projection is projection
        assert params.selection is HitSelection.FARTHEST_NEAR


class TestFromMapping:
    """Tests for building configs from plain values."""

    def test_missing_keys_take_defaults(self):
        config = RenderConfig.from_mapping({"width": 10, "height": 20})
        assert (config.width, config.height) == (10, 20)
        assert config.backend == "taichi"

    def test_unknown_keys_raise(self):
        with pytest.raises(ConfigurationError, match="samples"):
            RenderConfig.from_mapping({"samples": 100})

    def test_perspective_aspect_follows_image(self):
        config = RenderConfig.from_mapping(
            {"width": 200, "height": 100, "projection": {"kind": "perspective", "fovy": 0.6}}
        )
        assert isinstance(config.projection, PerspectiveProjection)
        assert config.projection.aspect == 2.0
        assert config.projection.fovy == 0.6

    def test_projection_none_uses_default(self):
        config = RenderConfig.from_mapping({"projection": None})
        assert config.projection == OrthographicProjection.symmetric(3.0)


class TestProjectionFromMapping:
    """Tests for projection_from_mapping."""

    def test_symmetric_orthographic(self):
        assert projection_from_mapping({"kind": "orthographic", "size": 2.0}) == (
            OrthographicProjection.symmetric(2.0)
        )

    def test_orthographic_defaults_to_size_three(self):
        assert projection_from_mapping({"kind": "orthographic"}) == (
            OrthographicProjection.symmetric(3.0)
        )

    def test_explicit_orthographic_planes(self):
        proj = projection_from_mapping(
            {
                "kind": "orthographic",
                "left": -1,
                "right": 2,
                "bottom": -3,
                "top": 4,
                "znear": 0.5,
                "zfar": 9,
            }
        )
        assert (proj.left, proj.right, proj.bottom, proj.top) == (-1.0, 2.0, -3.0, 4.0)

    def test_incomplete_orthographic_planes_raise(self):
        with pytest.raises(ConfigurationError, match="right"):
            projection_from_mapping({"kind": "orthographic", "left": -1})

    def test_perspective_defaults(self):
        proj = projection_from_mapping({"kind": "perspective"}, aspect=1.5)
        assert proj.aspect == 1.5
        assert proj.fovy == math.pi / 4.0

    def test_unknown_kind_raises(self):
        with pytest.raises(ConfigurationError):
            projection_from_mapping({"kind": "fisheye"})

    def test_invalid_values_propagate(self):
        with pytest.raises(ConfigurationError):
            projection_from_mapping({"kind": "perspective", "znear": 5.0, "zfar": 1.0})
