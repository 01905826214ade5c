"""Camera module: projections and the graphics context.

Components:
    projection: OpenGL-style orthographic and perspective projections
    context: GraphicsContext mapping pixels to world-space rays and back

Pixel to ray:
    ray = context.unproject_point((x, y))

World point to pixel:
    x, y = context.project_point(point)
"""

from .context import GraphicsContext
from .projection import OrthographicProjection, PerspectiveProjection, Projection

__all__ = [
    "GraphicsContext",
    "OrthographicProjection",
    "PerspectiveProjection",
    "Projection",
]
