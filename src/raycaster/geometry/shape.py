"""Abstract shape capability shared by all primitives."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from raycaster.core.ray import Ray, RayHit
from raycaster.core.transform import Isometry


class Shape(ABC):
    """Object that can be intersected by a ray.

    Subclasses place themselves in world space with a rigid pose and return
    ``None`` from ray_cast when the ray misses; a miss is not an error.
    """

    @abstractmethod
    def ray_cast(self, ray: Ray) -> Optional[RayHit]:
        """Intersect ``ray`` with this shape, or return None on a miss."""

    @abstractmethod
    def origin(self) -> Isometry:
        """Pose placing this shape in world space."""
