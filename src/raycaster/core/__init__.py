"""Core data structures.

Components:
    ray: Ray and RayHit records plus NumPy vector helpers
    transform: Rigid transforms used as object and camera poses

Everything here is plain NumPy on the host side. The Taichi mirrors of the
intersection math live in raycaster.render.kernel.
"""

from .ray import (
    EPSILON,
    Ray,
    RayHit,
    Vector3,
    as_vec3,
    format_point,
    length,
    normalize,
    vec3,
)
from .transform import Isometry

__all__ = [
    "Ray",
    "RayHit",
    "Vector3",
    "Isometry",
    "vec3",
    "as_vec3",
    "length",
    "normalize",
    "format_point",
    "EPSILON",
]
