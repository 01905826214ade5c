"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass

from raycaster.core.ray import Vector3, format_point
from raycaster.core.transform import Isometry


@dataclass(frozen=True)
class PointLight:
    """An omnidirectional light at a point.

    Attributes:
        pose: Light pose. Only the translation is used, as the light position.
    """

    pose: Isometry

    @property
    def position(self) -> Vector3:
        return self.pose.translation

    def __str__(self) -> str:
        return f"[PointLight {format_point(self.position)}]"
