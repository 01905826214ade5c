"""Render configuration.

RenderConfig gathers everything a driver needs to produce one image: the
image size, projection, background color, shading light, hit selection
policy, backend and output path. Values are validated at construction so a
bad setting fails before Taichi is initialized or any ray is cast.

Example:
    >>> from raycaster.config import RenderConfig
    >>> config = RenderConfig.from_mapping(
    ...     {
    ...         "width": 256,
    ...         "height": 256,
    ...         "projection": {"kind": "perspective", "fovy": 0.6},
    ...         "backend": "reference",
    ...     }
    ... )
    >>> config.projection.aspect
    1.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from raycaster.camera.projection import (
    OrthographicProjection,
    PerspectiveProjection,
    Projection,
)
from raycaster.errors import ConfigurationError
from raycaster.preview.buffer import Color
from raycaster.render.reference import BACKGROUND_COLOR
from raycaster.scene.demo import DemoSceneParams
from raycaster.scene.scene import HitSelection

BACKENDS = ("taichi", "reference")
ARCHES = ("cpu", "gpu")

DEFAULT_SIZE = 1001
DEFAULT_ORTHO_SIZE = 3.0


def _default_projection() -> Projection:
    return OrthographicProjection.symmetric(DEFAULT_ORTHO_SIZE)


@dataclass
class RenderConfig:
    """Settings for a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        projection: Camera projection.
        background: Color for pixels whose ray hits nothing.
        light_name: Light used for shading; None means the first registered.
        selection: Hit selection policy.
        backend: "taichi" (parallel kernel) or "reference" (pure Python).
        arch: Taichi architecture, "cpu" or "gpu". Ignored by the reference
            backend.
        output: Path of the PNG to write.
    """

    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE
    projection: Projection = field(default_factory=_default_projection)
    background: Color = BACKGROUND_COLOR
    light_name: Optional[str] = None
    selection: HitSelection = HitSelection.NEAREST
    backend: str = "taichi"
    arch: str = "gpu"
    output: str = "render.png"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if not isinstance(self.projection, (OrthographicProjection, PerspectiveProjection)):
            raise ConfigurationError(
                f"Unsupported projection type {type(self.projection).__name__}"
            )

        background = tuple(int(c) for c in self.background)
        if len(background) != 3 or any(c < 0 or c > 255 for c in background):
            raise ConfigurationError(
                f"Background must be three values in [0, 255], got {self.background!r}"
            )
        self.background = background

        try:
            self.selection = HitSelection(self.selection)
        except ValueError:
            valid = ", ".join(s.value for s in HitSelection)
            raise ConfigurationError(
                f"Unknown hit selection {self.selection!r} (expected one of: {valid})"
            ) from None

        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown backend {self.backend!r} (expected one of: {', '.join(BACKENDS)})"
            )
        if self.arch not in ARCHES:
            raise ConfigurationError(
                f"Unknown arch {self.arch!r} (expected one of: {', '.join(ARCHES)})"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> RenderConfig:
        """Build a config from plain values, e.g. parsed JSON or CLI options.

        The projection may be given as a mapping with a "kind" key; see
        projection_from_mapping. Missing keys take their defaults.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(f"Unknown render settings: {', '.join(unknown)}")

        kwargs = dict(values)
        projection = kwargs.get("projection")
        if isinstance(projection, Mapping):
            aspect = kwargs.get("width", DEFAULT_SIZE) / kwargs.get("height", DEFAULT_SIZE)
            kwargs["projection"] = projection_from_mapping(projection, aspect=aspect)
        elif projection is None:
            kwargs.pop("projection", None)
        return cls(**kwargs)

    def demo_params(self) -> DemoSceneParams:
        """Demo scene parameters matching this config's image and camera."""
        return DemoSceneParams(
            width=self.width,
            height=self.height,
            projection=self.projection,
            selection=self.selection,
        )


def projection_from_mapping(values: Mapping[str, Any], aspect: float = 1.0) -> Projection:
    """Build a projection from a mapping with a "kind" key.

    Orthographic accepts either "size" (a symmetric box, default 3) or the
    six planes "left", "right", "bottom", "top", "znear", "zfar". Perspective accepts
    "fovy" (radians), "znear", "zfar" and "aspect"; aspect defaults to the
    ``aspect`` argument.

    Raises:
        ConfigurationError: On an unknown kind or missing values.
    """
    params = dict(values)
    kind = params.pop("kind", "orthographic")

    try:
        if kind == "orthographic":
            if "size" in params or "left" not in params:
                return OrthographicProjection.symmetric(
                    float(params.get("size", DEFAULT_ORTHO_SIZE))
                )
            return OrthographicProjection(
                left=float(params["left"]),
                right=float(params["right"]),
                bottom=float(params["bottom"]),
                top=float(params["top"]),
                znear=float(params["znear"]),
                zfar=float(params["zfar"]),
            )
        if kind == "perspective":
            return PerspectiveProjection(
                aspect=float(params.get("aspect", aspect)),
                fovy=float(params.get("fovy", math.pi / 4.0)),
                znear=float(params.get("znear", 0.1)),
                zfar=float(params.get("zfar", 100.0)),
            )
    except KeyError as e:
        raise ConfigurationError(f"Missing {kind} projection setting: {e.args[0]}") from None

    raise ConfigurationError(
        f"Unknown projection kind {kind!r} (expected 'orthographic' or 'perspective')"
    )


__all__ = [
    "RenderConfig",
    "projection_from_mapping",
    "BACKENDS",
    "ARCHES",
]
