"""Plane primitive with optional finite extent.

The plane passes through its pose origin and its normal is the pose's local
Z axis. Rays only hit the plane from the front: the ray must travel against
the normal by more than a small epsilon, so rays parallel to the plane, rays
grazing it, and rays approaching from behind all miss.

By default the plane is infinite. When ``x_dim`` and ``y_dim`` are given the
plane is clipped to an x_dim by y_dim rectangle centred on the pose origin
and spanned by the pose's local X and Y axes.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from raycaster.core.ray import Ray, RayHit, Vector3, format_point, normalize
from raycaster.core.transform import Isometry
from raycaster.errors import ConfigurationError
from raycaster.geometry.shape import Shape

# Minimum cosine between the ray and the reversed normal for a hit
PARALLEL_EPSILON = 1e-6


class Plane(Shape):
    """A one-sided plane, infinite unless both dimensions are given.

    Attributes:
        pose: Rigid transform; local Z is the normal and the origin is a
            point on the plane.
        x_dim: Full extent along the local X axis, or None for unbounded.
        y_dim: Full extent along the local Y axis, or None for unbounded.
    """

    def __init__(
        self,
        pose: Isometry,
        x_dim: Optional[float] = None,
        y_dim: Optional[float] = None,
    ) -> None:
        if (x_dim is None) != (y_dim is None):
            raise ConfigurationError("Plane x_dim and y_dim must be given together")
        if x_dim is not None and not (x_dim > 0.0 and y_dim > 0.0):
            raise ConfigurationError(
                f"Plane dimensions must be positive, got {x_dim}x{y_dim}"
            )
        self._pose = pose
        self._x_dim = None if x_dim is None else float(x_dim)
        self._y_dim = None if y_dim is None else float(y_dim)

    @property
    def pose(self) -> Isometry:
        return self._pose

    @property
    def x_dim(self) -> Optional[float]:
        return self._x_dim

    @property
    def y_dim(self) -> Optional[float]:
        return self._y_dim

    @property
    def is_bounded(self) -> bool:
        return self._x_dim is not None

    @property
    def normal(self) -> Vector3:
        return normalize(self._pose.z_axis())

    @property
    def point(self) -> Vector3:
        return self._pose.translation

    def origin(self) -> Isometry:
        return self._pose

    def ray_cast(self, ray: Ray) -> Optional[RayHit]:
        """Intersect a ray with the front face of the plane.

        Returns:
            A RayHit with near == far, or None when the ray is parallel,
            approaches from behind, starts past the plane, or lands outside
            a bounded plane's rectangle.
        """
        n = self.normal
        direction = normalize(ray.direction)
        denom = float(np.dot(direction, -n))
        if denom < PARALLEL_EPSILON:
            return None

        t = float(np.dot(self.point - ray.origin, -n)) / denom
        if t < 0.0:
            return None

        hit_point = ray.origin + direction * t
        if self.is_bounded and not self._within_extent(hit_point):
            return None

        return RayHit(near=hit_point, far=hit_point, normal=n)

    def _within_extent(self, point: Vector3) -> bool:
        offset = point - self.point
        local_x = float(np.dot(offset, self._pose.x_axis()))
        local_y = float(np.dot(offset, self._pose.y_axis()))
        return abs(local_x) <= self._x_dim / 2.0 and abs(local_y) <= self._y_dim / 2.0

    def __repr__(self) -> str:
        return (
            f"Plane(point={format_point(self.point)}, normal={format_point(self.normal)}, "
            f"x_dim={self._x_dim}, y_dim={self._y_dim})"
        )
