"""Geometry module for shape primitives and lights.

Components:
    shape: Abstract Shape capability (ray_cast, origin)
    sphere: Sphere primitive with geometric ray-sphere intersection
    plane: One-sided plane with optional finite extent
    light: Point light source

Ray-object intersection follows the pattern:
    hit = shape.ray_cast(ray)   # RayHit, or None on a miss
"""

from .light import PointLight
from .plane import PARALLEL_EPSILON, Plane
from .shape import Shape
from .sphere import Sphere

__all__ = [
    "Shape",
    "Sphere",
    "Plane",
    "PointLight",
    "PARALLEL_EPSILON",
]
