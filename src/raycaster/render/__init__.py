"""Render module: fill a graphics context from a scene.

Components:
    reference: Pure-Python per-pixel loop through the public API
    kernel: Taichi renderer running all pixels in one parallel kernel

Both backends produce the same image (up to float32 rounding in the kernel).
The Taichi backend requires ti.init() to have been called.
"""

from .kernel import KernelHit, Renderer, hit_plane, hit_sphere, render_taichi
from .reference import BACKGROUND_COLOR, render_pixel, render_reference

__all__ = [
    "BACKGROUND_COLOR",
    "render_pixel",
    "render_reference",
    "Renderer",
    "render_taichi",
    "KernelHit",
    "hit_sphere",
    "hit_plane",
]
