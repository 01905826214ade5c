"""Rigid transforms (isometries) used as object and camera poses.

An isometry is a rotation followed by a translation, with no scale. Poses
place primitives, lights and the camera in world space:

    world_point = rotation @ local_point + translation

Two camera helpers are provided:
- face_towards(eye, target, up): a pose whose local +Z axis points at target.
  This is how an object is oriented towards something.
- look_at_rh(eye, target, up): a right-handed *view* transform mapping world
  space into a camera space that looks down -Z, which is what the OpenGL
  style projections in camera.projection expect.

Example:
    >>> from raycaster.core.transform import Isometry
    >>> target = Isometry.from_translation(0.0, 0.0, -10.0)
    >>> light = target @ Isometry.from_translation(2.0, 1.0, 2.0)
    >>> light.translation
    array([ 2.,  1., -8.])
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from raycaster.core.ray import EPSILON, VectorLike, Vector3, as_vec3, format_point, normalize
from raycaster.errors import ConfigurationError

Matrix3 = npt.NDArray[np.float64]
Matrix4 = npt.NDArray[np.float64]


@dataclass(frozen=True)
class Isometry:
    """A rigid transform: rotation (3x3 orthonormal matrix) plus translation.

    Attributes:
        rotation: Orthonormal 3x3 rotation matrix.
        translation: Translation vector applied after the rotation.
    """

    rotation: Matrix3
    translation: Vector3

    def __post_init__(self) -> None:
        rotation = np.asarray(self.rotation, dtype=np.float64)
        if rotation.shape != (3, 3):
            raise ConfigurationError(f"Rotation must be 3x3, got shape {rotation.shape}")
        if not np.allclose(rotation @ rotation.T, np.eye(3), atol=1e-6):
            raise ConfigurationError("Rotation matrix is not orthonormal")
        translation = as_vec3(self.translation)
        rotation = rotation.copy()
        rotation.setflags(write=False)
        translation.setflags(write=False)
        object.__setattr__(self, "rotation", rotation)
        object.__setattr__(self, "translation", translation)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def identity(cls) -> Isometry:
        return cls(np.eye(3), np.zeros(3))

    @classmethod
    def from_translation(cls, x: float, y: float, z: float) -> Isometry:
        return cls(np.eye(3), np.array([x, y, z], dtype=np.float64))

    @classmethod
    def from_axis_angle(
        cls,
        axis: VectorLike,
        angle: float,
        translation: VectorLike = (0.0, 0.0, 0.0),
    ) -> Isometry:
        """Build a pose rotating ``angle`` radians about ``axis`` (Rodrigues).

        Raises:
            ConfigurationError: If the axis has zero length.
        """
        k = as_vec3(axis)
        n = np.linalg.norm(k)
        if n < EPSILON:
            raise ConfigurationError("Rotation axis must be non-zero")
        k = k / n
        skew = np.array(
            [
                [0.0, -k[2], k[1]],
                [k[2], 0.0, -k[0]],
                [-k[1], k[0], 0.0],
            ]
        )
        rotation = np.eye(3) + math.sin(angle) * skew + (1.0 - math.cos(angle)) * (skew @ skew)
        return cls(rotation, as_vec3(translation))

    @classmethod
    def face_towards(cls, eye: VectorLike, target: VectorLike, up: VectorLike) -> Isometry:
        """Pose located at ``eye`` whose local +Z axis points at ``target``.

        Raises:
            ConfigurationError: If eye and target coincide or up is parallel
                to the viewing direction.
        """
        eye = as_vec3(eye)
        zaxis = _checked_unit(as_vec3(target) - eye, "eye and target must differ")
        xaxis = _checked_unit(np.cross(as_vec3(up), zaxis), "up is parallel to the view direction")
        yaxis = np.cross(zaxis, xaxis)
        return cls(np.column_stack([xaxis, yaxis, zaxis]), eye)

    @classmethod
    def look_at_rh(cls, eye: VectorLike, target: VectorLike, up: VectorLike) -> Isometry:
        """Right-handed view transform: world space to a camera looking down -Z.

        The returned isometry maps ``eye`` to the origin and ``target`` onto
        the negative Z axis. It is the inverse of the camera's own pose.
        """
        eye = as_vec3(eye)
        # The camera looks along -Z, so its local +Z points away from target.
        camera_pose = cls.face_towards(eye, 2.0 * eye - as_vec3(target), up)
        return camera_pose.inverse()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def inverse(self) -> Isometry:
        rot_t = self.rotation.T
        return Isometry(rot_t, -(rot_t @ self.translation))

    def __matmul__(self, other: Isometry) -> Isometry:
        if not isinstance(other, Isometry):
            return NotImplemented
        return Isometry(
            self.rotation @ other.rotation,
            self.rotation @ other.translation + self.translation,
        )

    def transform_point(self, point: VectorLike) -> Vector3:
        return self.rotation @ as_vec3(point) + self.translation

    def transform_vector(self, vector: VectorLike) -> Vector3:
        """Rotate a direction vector (translation does not apply)."""
        return self.rotation @ as_vec3(vector)

    def x_axis(self) -> Vector3:
        return self.rotation[:, 0].copy()

    def y_axis(self) -> Vector3:
        return self.rotation[:, 1].copy()

    def z_axis(self) -> Vector3:
        return self.rotation[:, 2].copy()

    def to_homogeneous(self) -> Matrix4:
        """Return the equivalent 4x4 homogeneous matrix."""
        m = np.eye(4)
        m[:3, :3] = self.rotation
        m[:3, 3] = self.translation
        return m

    def __str__(self) -> str:
        return f"Isometry(translation={format_point(self.translation)})"


def _checked_unit(v: Vector3, message: str) -> Vector3:
    if np.linalg.norm(v) < EPSILON:
        raise ConfigurationError(message)
    return normalize(v)
