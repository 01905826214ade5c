"""Debug overlay drawing: lines, pose axes, circles and cubes.

All primitives are given in world space, projected through the graphics
context and rasterized with bounds-checked pixel writes, so overlays never
fail on geometry that leaves the image.

Example:
    >>> from raycaster.preview.overlay import draw_axes
    >>> draw_axes(sphere.origin(), 0.5, context)
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from raycaster.core.ray import VectorLike, as_vec3, format_point, round_half_away
from raycaster.core.transform import Isometry
from raycaster.preview.buffer import Color

if TYPE_CHECKING:
    from raycaster.camera.context import GraphicsContext

logger = logging.getLogger(__name__)

RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
BLUE: Color = (0, 0, 255)
WHITE: Color = (255, 255, 255)

CIRCLE_POINT_COUNT = 64


def draw_line(
    p0: VectorLike,
    p1: VectorLike,
    color: Color,
    context: GraphicsContext,
) -> int:
    """Draw a world-space line segment.

    Both endpoints must project inside the image; otherwise the line is
    skipped and an INFO message is logged.

    Args:
        p0: First endpoint in world space.
        p1: Second endpoint in world space.
        color: RGB color.
        context: Graphics context to project through and draw into.

    Returns:
        The number of pixels written.
    """
    p0 = as_vec3(p0)
    p1 = as_vec3(p1)
    x0, y0 = context.project_point(p0)
    x1, y1 = context.project_point(p1)

    if not context.contains(x0, y0):
        logger.info(
            "Line endpoint p0 falls outside image: %s -> (%d, %d)", format_point(p0), x0, y0
        )
        return 0
    if not context.contains(x1, y1):
        logger.info(
            "Line endpoint p1 falls outside image: %s -> (%d, %d)", format_point(p1), x1, y1
        )
        return 0

    return rasterize_line(x0, y0, x1, y1, color, context)


def rasterize_line(
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: Color,
    context: GraphicsContext,
) -> int:
    """Rasterize a pixel-space segment by stepping along its major axis.

    The end pixel on the major axis is exclusive, except for a single-pixel
    segment which still writes one pixel.
    """
    steep = False
    # Transpose steep lines so we always step along x
    if abs(x0 - x1) < abs(y0 - y1):
        x0, y0 = y0, x0
        x1, y1 = y1, x1
        steep = True
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0
    if x0 == x1:
        x1 += 1

    written = 0
    for x in range(x0, x1):
        t = (x - x0) / (x1 - x0)
        y = round_half_away(y0 * (1.0 - t) + y1 * t)
        if steep:
            px, py = y, x
        else:
            px, py = x, y
        if context.contains(px, py):
            context.put_pixel_unchecked(px, py, color)
            written += 1
    return written


def draw_axes(pose: Isometry, size: float, context: GraphicsContext) -> None:
    """Draw the X (red), Y (green) and Z (blue) axes of a pose."""
    origin = pose.transform_point((0.0, 0.0, 0.0))
    draw_line(origin, pose.transform_point((size, 0.0, 0.0)), RED, context)
    draw_line(origin, pose.transform_point((0.0, size, 0.0)), GREEN, context)
    draw_line(origin, pose.transform_point((0.0, 0.0, size)), BLUE, context)


def draw_circle(
    pose: Isometry,
    radius: float,
    context: GraphicsContext,
    color: Color = WHITE,
) -> int:
    """Plot a circle of points in the XY plane of ``pose``.

    Points that project outside the image are skipped and logged at ERROR.

    Returns:
        The number of points drawn.
    """
    drawn = 0
    for idx in range(CIRCLE_POINT_COUNT):
        angle = 2.0 * math.pi * (idx / CIRCLE_POINT_COUNT)
        world_pt = pose.transform_point((radius * math.cos(angle), radius * math.sin(angle), 0.0))
        x, y = context.project_point(world_pt)
        if context.contains(x, y):
            context.put_pixel_unchecked(x, y, color)
            drawn += 1
        else:
            logger.error("Pixels outside image! %d, %d", x, y)
    return drawn


def draw_cube(pose: Isometry, size: float, color: Color, context: GraphicsContext) -> None:
    """Draw the 12 edges of an axis-aligned cube centred on ``pose``."""
    dp = size / 2.0
    dn = -size / 2.0
    corners = [
        pose.transform_point(c)
        for c in (
            (dp, dp, dp),
            (dn, dp, dp),
            (dn, dn, dp),
            (dp, dn, dp),
            (dp, dp, dn),
            (dn, dp, dn),
            (dn, dn, dn),
            (dp, dn, dn),
        )
    ]
    edges = (
        # Top
        (0, 1), (1, 2), (2, 3), (3, 0),
        # Bottom
        (4, 5), (5, 6), (6, 7), (7, 4),
        # Sides
        (0, 4), (1, 5), (2, 6), (3, 7),
    )
    for a, b in edges:
        draw_line(corners[a], corners[b], color, context)
