"""Orthographic and perspective projections.

Both projections follow the OpenGL convention: view space looks down -Z and
the projection maps the view frustum (or box) onto the normalized device
coordinate (NDC) cube [-1, 1]^3. A view-space point at z = -znear lands on
NDC depth -1 and a point at z = -zfar lands on +1.

Example:
    >>> from raycaster.camera.projection import OrthographicProjection
    >>> proj = OrthographicProjection(-3.0, 3.0, -3.0, 3.0, -3.0, 3.0)
    >>> proj.project_point((3.0, 0.0, 0.0))
    array([1., 0., 0.])
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property
from typing import Union

import numpy as np
import numpy.typing as npt

from raycaster.core.ray import EPSILON, VectorLike, Vector3, as_vec3
from raycaster.errors import ConfigurationError

Matrix4 = npt.NDArray[np.float64]


class _Projection:
    """Shared homogeneous projection/unprojection on top of ``as_matrix``."""

    def as_matrix(self) -> Matrix4:
        raise NotImplementedError("as_matrix() must be implemented by subclasses.")

    @cached_property
    def _matrix(self) -> Matrix4:
        return self.as_matrix()

    @cached_property
    def _inverse(self) -> Matrix4:
        return np.linalg.inv(self._matrix)

    def inverse_matrix(self) -> Matrix4:
        """Return the inverse projection matrix (NDC -> view space)."""
        return self._inverse.copy()

    def project_point(self, point: VectorLike) -> Vector3:
        """Map a view-space point into normalized device coordinates."""
        return _apply_homogeneous(self._matrix, as_vec3(point))

    def unproject_point(self, ndc: VectorLike) -> Vector3:
        """Map a normalized device coordinate back into view space."""
        return _apply_homogeneous(self._inverse, as_vec3(ndc))


@dataclass(frozen=True)
class OrthographicProjection(_Projection):
    """Orthographic projection bounded by six planes.

    Attributes:
        left, right: X extent of the view box.
        bottom, top: Y extent of the view box.
        znear, zfar: Depth of the near and far planes along -Z. They may be
            negative, which places the near plane behind the camera origin.
    """

    left: float
    right: float
    bottom: float
    top: float
    znear: float
    zfar: float

    def __post_init__(self) -> None:
        if not self.left < self.right:
            raise ConfigurationError(
                f"Orthographic left ({self.left}) must be less than right ({self.right})"
            )
        if not self.bottom < self.top:
            raise ConfigurationError(
                f"Orthographic bottom ({self.bottom}) must be less than top ({self.top})"
            )
        if not self.znear < self.zfar:
            raise ConfigurationError(
                f"Projection znear ({self.znear}) must be less than zfar ({self.zfar})"
            )

    @classmethod
    def symmetric(cls, size: float) -> OrthographicProjection:
        """Cube of half-width ``size`` centred on the view origin."""
        return cls(-size, size, -size, size, -size, size)

    def as_matrix(self) -> Matrix4:
        rl = self.right - self.left
        tb = self.top - self.bottom
        fn = self.zfar - self.znear
        m = np.eye(4)
        m[0, 0] = 2.0 / rl
        m[1, 1] = 2.0 / tb
        m[2, 2] = -2.0 / fn
        m[0, 3] = -(self.right + self.left) / rl
        m[1, 3] = -(self.top + self.bottom) / tb
        m[2, 3] = -(self.zfar + self.znear) / fn
        return m


@dataclass(frozen=True)
class PerspectiveProjection(_Projection):
    """Symmetric perspective projection.

    Attributes:
        aspect: Width divided by height of the view.
        fovy: Vertical field of view in radians, in (0, pi).
        znear: Distance to the near plane (positive).
        zfar: Distance to the far plane (greater than znear).
    """

    aspect: float
    fovy: float
    znear: float
    zfar: float

    def __post_init__(self) -> None:
        if self.aspect <= 0.0:
            raise ConfigurationError(f"Perspective aspect must be positive, got {self.aspect}")
        if not 0.0 < self.fovy < math.pi:
            raise ConfigurationError(
                f"Perspective fovy must be in (0, pi) radians, got {self.fovy}"
            )
        if self.znear <= 0.0:
            raise ConfigurationError(f"Perspective znear must be positive, got {self.znear}")
        if not self.znear < self.zfar:
            raise ConfigurationError(
                f"Projection znear ({self.znear}) must be less than zfar ({self.zfar})"
            )

    def as_matrix(self) -> Matrix4:
        f = 1.0 / math.tan(self.fovy / 2.0)
        m = np.zeros((4, 4))
        m[0, 0] = f / self.aspect
        m[1, 1] = f
        m[2, 2] = (self.zfar + self.znear) / (self.znear - self.zfar)
        m[2, 3] = 2.0 * self.zfar * self.znear / (self.znear - self.zfar)
        m[3, 2] = -1.0
        return m


Projection = Union[OrthographicProjection, PerspectiveProjection]


def _apply_homogeneous(m: Matrix4, p: Vector3) -> Vector3:
    h = m @ np.append(p, 1.0)
    w = h[3]
    # Points on the camera plane of a perspective projection have w == 0
    if abs(w) < EPSILON:
        w = math.copysign(EPSILON, w)
    return h[:3] / w
