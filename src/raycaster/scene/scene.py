"""Scene composition: named shapes and lights, hit selection and shading.

The scene is a pair of name -> object registries. Names are the only way
callers address shapes and lights; registering under an existing name
replaces the previous entry.

Hit selection is explicit. Every shape is tested and the winning hit is
chosen by the distance of its near point from the ray origin:

- HitSelection.NEAREST (default) keeps the smallest distance, i.e. the
  visible surface.
- HitSelection.FARTHEST_NEAR keeps the largest near distance, so the
  deepest entry point wins.

Equal distances never replace the current winner.

Shading is a single Lambertian term from one point light:

    l = normalize(light_position - near)
    v = int(clamp(255 * dot(normal, l), 0, 255))

returned as the gray color (v, v, v).

Example:
    >>> from raycaster.scene.scene import Scene
    >>> scene = Scene()
    >>> scene.add_shape("ball", Sphere(Isometry.from_translation(0, 0, -10), 1.0))
    >>> scene.add_light("key", PointLight(Isometry.from_translation(2, 1, -8)))
    >>> hit = scene.ray_cast(context.unproject_point((500, 500)))
    >>> color = scene.shade(hit) if hit is not None else background
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

import numpy as np

from raycaster.core.ray import Ray, RayHit, normalize
from raycaster.geometry.light import PointLight
from raycaster.geometry.shape import Shape
from raycaster.preview.buffer import BLACK, Color

MAX_INTENSITY = 255


class HitSelection(str, Enum):
    """Policy for choosing one hit among all shapes a ray intersects."""

    NEAREST = "nearest"
    FARTHEST_NEAR = "farthest_near"

    def prefers(self, distance: float, best: float) -> bool:
        """True if a hit at ``distance`` should replace one at ``best``."""
        if self is HitSelection.NEAREST:
            return distance < best
        return distance > best


class Scene:
    """Container of named shapes and named point lights.

    Attributes:
        selection: The hit selection policy used by ray_cast.
    """

    def __init__(
        self,
        selection: HitSelection = HitSelection.NEAREST,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.selection = HitSelection(selection)
        self._shapes: dict[str, Shape] = {}
        self._lights: dict[str, PointLight] = {}
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    @property
    def shapes(self) -> Mapping[str, Shape]:
        """Read-only view of the registered shapes."""
        return MappingProxyType(self._shapes)

    @property
    def lights(self) -> Mapping[str, PointLight]:
        """Read-only view of the registered lights."""
        return MappingProxyType(self._lights)

    def add_shape(self, name: str, shape: Shape) -> Shape:
        """Register ``shape`` under ``name``, replacing any previous entry.

        Raises:
            TypeError: If ``shape`` does not implement the Shape capability.
        """
        if not isinstance(shape, Shape):
            raise TypeError(f"Expected a Shape, got {type(shape).__name__}")
        if name in self._shapes:
            self._logger.debug("Replacing shape %r", name)
        self._shapes[name] = shape
        self._logger.debug("Added shape %r: %r", name, shape)
        return shape

    def add_light(self, name: str, light: PointLight) -> PointLight:
        """Register ``light`` under ``name``, replacing any previous entry."""
        if not isinstance(light, PointLight):
            raise TypeError(f"Expected a PointLight, got {type(light).__name__}")
        if name in self._lights:
            self._logger.debug("Replacing light %r", name)
        self._lights[name] = light
        self._logger.debug("Added light %r: %s", name, light)
        return light

    def get_shape(self, name: str) -> Optional[Shape]:
        return self._shapes.get(name)

    def get_light(self, name: str) -> Optional[PointLight]:
        return self._lights.get(name)

    def remove_shape(self, name: str) -> Optional[Shape]:
        return self._shapes.pop(name, None)

    def remove_light(self, name: str) -> Optional[PointLight]:
        return self._lights.pop(name, None)

    def clear(self) -> None:
        """Remove all shapes and lights."""
        self._shapes.clear()
        self._lights.clear()

    # -------------------------------------------------------------------------
    # Ray casting and shading
    # -------------------------------------------------------------------------

    def ray_cast(self, ray: Ray) -> Optional[RayHit]:
        """Cast ``ray`` against every shape and select one hit.

        Returns:
            The hit chosen by the scene's selection policy, or None if no
            shape intersects the ray.
        """
        result: Optional[RayHit] = None
        best = 0.0
        for shape in self._shapes.values():
            hit = shape.ray_cast(ray)
            if hit is None:
                continue
            distance = hit.distance_from(ray.origin)
            if result is None or self.selection.prefers(distance, best):
                result = hit
                best = distance
        return result

    def resolve_light(self, light_name: Optional[str] = None) -> Optional[PointLight]:
        """Pick the shading light: the named one, or the first registered.

        Raises:
            KeyError: If ``light_name`` is given but not registered.
        """
        if light_name is not None:
            if light_name not in self._lights:
                raise KeyError(f"No light named {light_name!r}")
            return self._lights[light_name]
        return next(iter(self._lights.values()), None)

    def shade(self, hit: RayHit, light_name: Optional[str] = None) -> Color:
        """Compute the gray Lambertian color of a hit.

        Args:
            hit: The hit to shade.
            light_name: Light to use. Defaults to the first registered light.

        Returns:
            (v, v, v) with v an integer in [0, 255]. Black if the scene has
            no lights.
        """
        light = self.resolve_light(light_name)
        if light is None:
            self._logger.warning("Shading with no lights in scene; returning black")
            return BLACK
        value = lambert_intensity(hit.normal, light.position - hit.near)
        return (value, value, value)

    def cast_and_shade(
        self,
        ray: Ray,
        background: Color,
        light_name: Optional[str] = None,
    ) -> Color:
        """Cast ``ray`` and shade the selected hit, or return ``background``."""
        hit = self.ray_cast(ray)
        if hit is None:
            return background
        return self.shade(hit, light_name)

    def __len__(self) -> int:
        return len(self._shapes)

    def __repr__(self) -> str:
        return (
            f"Scene(shapes={list(self._shapes)}, lights={list(self._lights)}, "
            f"selection={self.selection.value})"
        )


def lambert_intensity(normal: np.ndarray, to_light: np.ndarray) -> int:
    """Gray level for a surface normal and a (non-normalized) light vector."""
    n_dot_l = float(np.dot(normal, normalize(to_light)))
    return int(min(max(n_dot_l * MAX_INTENSITY, 0.0), float(MAX_INTENSITY)))
