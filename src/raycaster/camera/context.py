"""Graphics context: conversion between pixels and world-space rays.

The context owns the camera (root pose + projection), the image dimensions
and the output buffer. It provides:
- unproject_point: pixel -> world-space Ray through that pixel
- project_point: world-space point -> (possibly out of range) pixel
- put_pixel / put_pixel_unchecked: writes in Y-up pixel coordinates

Pixel coordinates have their origin at the bottom-left of the image and
normalize to NDC as:

    norm = (pixel - dim / 2) / (dim / 2)

so pixel 0 maps to -1 and pixel ``dim`` maps to +1 on each axis.

Example:
    >>> from raycaster.camera.context import GraphicsContext
    >>> from raycaster.camera.projection import OrthographicProjection
    >>> ctx = GraphicsContext(
    ...     projection=OrthographicProjection.symmetric(3.0), width=100, height=100
    ... )
    >>> ray = ctx.unproject_point((50, 50))
    >>> print(ray)
    [ Origin (0, 0, 3), Direction: (0, 0, -1) ]
    >>> ctx.project_point(ray.origin)
    (50, 50)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from raycaster.camera.projection import Projection
from raycaster.core.ray import Ray, VectorLike, as_vec3, normalize, round_half_away
from raycaster.core.transform import Isometry
from raycaster.errors import ConfigurationError
from raycaster.preview.buffer import Color, ImageBuffer
from raycaster.preview.export import save_png

Pixel = Tuple[int, int]


class GraphicsContext:
    """Camera, projection and image buffer for one render.

    Attributes:
        root_pose: World -> view transform applied to geometry before
            projection (the inverse of the camera's pose).
        projection: Orthographic or perspective projection.
        width: Image width in pixels.
        height: Image height in pixels.
        buffer: The RGB image being rendered into.
    """

    def __init__(
        self,
        projection: Projection,
        width: int,
        height: int,
        root_pose: Optional[Isometry] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Image dimensions must be positive, got {width}x{height}"
            )
        self.root_pose = root_pose if root_pose is not None else Isometry.identity()
        self.projection = projection
        self.width = int(width)
        self.height = int(height)
        self.buffer = ImageBuffer(self.width, self.height)
        self._view_to_world = self.root_pose.inverse()
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @property
    def view_to_world(self) -> Isometry:
        """Inverse of ``root_pose``: maps view space back to world space."""
        return self._view_to_world

    # -------------------------------------------------------------------------
    # Pixel <-> ray conversion
    # -------------------------------------------------------------------------

    def normalize_pixel(self, pixel: Tuple[float, float]) -> Tuple[float, float]:
        """Map pixel coordinates to symmetric NDC x/y in [-1, 1]."""
        half_w = self.width / 2.0
        half_h = self.height / 2.0
        return ((pixel[0] - half_w) / half_w, (pixel[1] - half_h) / half_h)

    def unproject_point(self, pixel: Tuple[float, float]) -> Ray:
        """Build the world-space ray through a pixel.

        The ray starts on the near plane and points towards the far plane.

        Args:
            pixel: (x, y) pixel coordinates, Y up.

        Returns:
            A Ray with unit-length direction.
        """
        nx, ny = self.normalize_pixel(pixel)
        near_view = self.projection.unproject_point((nx, ny, -1.0))
        far_view = self.projection.unproject_point((nx, ny, 1.0))
        direction_view = normalize(far_view - near_view)
        return Ray(
            origin=self._view_to_world.transform_point(near_view),
            direction=self._view_to_world.transform_vector(direction_view),
        )

    def project_point(self, point: VectorLike) -> Pixel:
        """Project a world-space point to integer pixel coordinates.

        The result may fall outside the image; callers bounds-check.
        """
        view = self.root_pose.transform_point(as_vec3(point))
        ndc = self.projection.project_point(view)
        img_x = (ndc[0] + 1.0) / 2.0
        img_y = (ndc[1] + 1.0) / 2.0
        return (
            round_half_away(img_x * self.width),
            round_half_away(img_y * self.height),
        )

    # -------------------------------------------------------------------------
    # Pixel writes
    # -------------------------------------------------------------------------

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: Color) -> None:
        """Write a pixel, silently ignoring coordinates outside the image."""
        if self.contains(x, y):
            self.put_pixel_unchecked(x, y, color)

    def put_pixel_unchecked(self, x: int, y: int, color: Color) -> None:
        # Y up: pixel row 0 is the bottom buffer row.
        self.buffer.set(x, self.height - 1 - y, color)

    def get_pixel(self, x: int, y: int) -> Color:
        """Read a pixel in the same Y-up coordinates used for writing."""
        if not self.contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.buffer.get(x, self.height - 1 - y)

    def blit_columns(self, pixels: np.ndarray) -> None:
        """Copy a (width, height, 3) array indexed by Y-up pixel coordinates.

        This is the layout produced by the Taichi renderer; it is flipped into
        buffer order here so both renderers share one convention.
        """
        if pixels.shape != (self.width, self.height, 3):
            raise ValueError(
                f"Expected pixel array of shape {(self.width, self.height, 3)}, "
                f"got {pixels.shape}"
            )
        image = np.flipud(np.transpose(pixels, (1, 0, 2)))
        self.buffer.blit(np.clip(image, 0, 255).astype(np.uint8))

    def save(self, path: Union[str, Path]) -> Path:
        """Encode the buffer as PNG at ``path``."""
        out = save_png(self.buffer, path)
        self._logger.info("Saved %dx%d image to %s", self.width, self.height, out)
        return out

    def __repr__(self) -> str:
        return (
            f"GraphicsContext(width={self.width}, height={self.height}, "
            f"projection={self.projection!r})"
        )
