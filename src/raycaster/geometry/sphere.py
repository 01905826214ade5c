"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric construction rather than the quadratic
discriminant. With unit ray direction D, origin O and sphere center C:

    L    = C - O
    t_ca = L . D              (closest approach along the ray)
    d^2  = L . L - t_ca^2     (squared distance from C to the ray)
    t_hc = sqrt(r^2 - d^2)    (half chord length)
    t0   = t_ca - t_hc,  t1 = t_ca + t_hc

A sphere whose center projects behind the ray origin (t_ca < 0) is a miss,
even when the origin lies inside the sphere. When the origin is inside and
the center is ahead, the near point is reported at t0, which lies behind the
ray origin; it is not clamped to the origin.

Example:
    >>> from raycaster.core.ray import Ray
    >>> from raycaster.core.transform import Isometry
    >>> from raycaster.geometry.sphere import Sphere
    >>> sphere = Sphere(Isometry.from_translation(0.0, 0.0, 5.0), radius=1.0)
    >>> hit = sphere.ray_cast(Ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0)))
    >>> hit.near
    array([0., 0., 4.])
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from raycaster.core.ray import Ray, RayHit, format_point, normalize
from raycaster.core.transform import Isometry
from raycaster.errors import ConfigurationError
from raycaster.geometry.shape import Shape


class Sphere(Shape):
    """A sphere defined by a pose (its center) and a radius.

    Attributes:
        pose: Rigid transform whose translation is the sphere center.
        radius: The radius of the sphere (positive).
    """

    def __init__(self, pose: Isometry, radius: float) -> None:
        if not radius > 0.0:
            raise ConfigurationError(f"Sphere radius must be positive, got {radius}")
        self._pose = pose
        self._radius = float(radius)

    @property
    def pose(self) -> Isometry:
        return self._pose

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def center(self) -> np.ndarray:
        return self._pose.translation

    def origin(self) -> Isometry:
        return self._pose

    def ray_cast(self, ray: Ray) -> Optional[RayHit]:
        """Intersect a ray with the sphere.

        Args:
            ray: The ray to test. Its direction need not be normalized.

        Returns:
            A RayHit with near/far points and the outward normal at near, or
            None if the ray misses.
        """
        direction = normalize(ray.direction)
        center = self.center
        oc = center - ray.origin

        t_ca = float(np.dot(oc, direction))
        if t_ca < 0.0:
            return None

        # Clamp tiny negative values from cancellation when the ray passes
        # through the center.
        d2 = max(float(np.dot(oc, oc)) - t_ca * t_ca, 0.0)
        r2 = self._radius * self._radius
        if d2 > r2:
            return None

        t_hc = math.sqrt(r2 - d2)
        t0 = t_ca - t_hc
        t1 = t_ca + t_hc

        near = ray.origin + direction * t0
        far = ray.origin + direction * t1
        return RayHit(near=near, far=far, normal=normalize(near - center))

    def __repr__(self) -> str:
        return f"Sphere(center={format_point(self.center)}, radius={self._radius})"

    def __str__(self) -> str:
        return f"[Pose {format_point(self.center)}, Radius: ({self._radius:g})]"
