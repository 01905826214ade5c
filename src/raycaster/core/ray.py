"""Ray data structures and vector utilities.

This module provides the immutable Ray and RayHit records shared by every
primitive, plus the small set of NumPy vector helpers the rest of the
package builds on. All vectors are float64 arrays of shape (3,).

Example:
    >>> from raycaster.core.ray import Ray, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -2.0))
    >>> ray.at(1.5)
    array([ 0.,  0., -3.])
    >>> print(ray.normalized())
    [ Origin (0, 0, 0), Direction: (0, 0, -1) ]
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Union

import numpy as np
import numpy.typing as npt

from raycaster.errors import ConfigurationError

Vector3 = npt.NDArray[np.float64]
VectorLike = Union[Vector3, Iterable[float]]

# Magnitudes below this are treated as zero-length vectors
EPSILON = 1e-12


# =============================================================================
# Vector Utility Functions
# =============================================================================


def vec3(x: float, y: float, z: float) -> Vector3:
    """Create a float64 3-vector."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(v: VectorLike) -> Vector3:
    """Coerce any 3-element sequence into a float64 3-vector.

    Raises:
        ConfigurationError: If the input does not hold exactly 3 values.
    """
    arr = np.array(v, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ConfigurationError(f"Expected 3 components, got shape {arr.shape}")
    return arr


def length(v: Vector3) -> float:
    """Compute the Euclidean length of a vector."""
    return float(np.linalg.norm(v))


def normalize(v: Vector3) -> Vector3:
    """Normalize a vector to unit length.

    Returns:
        A unit vector in the same direction as v. A zero-length input yields
        a zero vector.
    """
    n = np.linalg.norm(v)
    if n < EPSILON:
        return np.zeros(3, dtype=np.float64)
    return v / n


def format_point(v: Vector3) -> str:
    """Format a 3-vector as ``(x, y, z)`` for log and error messages."""
    return f"({v[0]:.6g}, {v[1]:.6g}, {v[2]:.6g})"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


# =============================================================================
# Ray and RayHit
# =============================================================================


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            unit length; intersection routines normalize it themselves. A
            zero-length direction raises ConfigurationError.
    """

    origin: Vector3
    direction: Vector3

    def __post_init__(self) -> None:
        origin = as_vec3(self.origin)
        direction = as_vec3(self.direction)
        origin.setflags(write=False)
        direction.setflags(write=False)
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction)
        if np.linalg.norm(direction) < EPSILON:
            raise ConfigurationError(f"Ray {self} has a zero-length direction")

    def at(self, t: float) -> Vector3:
        """Compute the point ``origin + t * direction``."""
        return self.origin + t * self.direction

    def normalized(self) -> Ray:
        """Return a copy of this ray with a unit-length direction."""
        return Ray(self.origin, self.direction / np.linalg.norm(self.direction))

    def __str__(self) -> str:
        d = self.direction
        return (
            f"[ Origin {format_point(self.origin)}, "
            f"Direction: ({d[0]:.6g}, {d[1]:.6g}, {d[2]:.6g}) ]"
        )


@dataclass(frozen=True)
class RayHit:
    """Record of a ray-surface intersection.

    Attributes:
        near: First surface point along the ray (entry point).
        far: Second surface point along the ray (exit point). Equal to near
            for surfaces with a single intersection such as a plane.
        normal: Unit surface normal at near, pointing out of the surface.
    """

    near: Vector3
    far: Vector3
    normal: Vector3

    def __post_init__(self) -> None:
        for name in ("near", "far", "normal"):
            arr = as_vec3(getattr(self, name))
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    def distance_from(self, point: Vector3) -> float:
        """Distance from ``point`` to the near hit point."""
        return length(self.near - point)

    def __str__(self) -> str:
        return (
            f"Normal: {format_point(self.normal)}\n"
            f"  Near: {format_point(self.near)}\n"
            f"   Far: {format_point(self.far)}"
        )
