"""Scene module: shape/light registry, hit selection and shading.

Components:
    scene: Scene container, HitSelection policy and Lambertian shading
    demo: Factory for the standard lit-sphere demo scene
"""

from .demo import DemoSceneParams, create_demo_scene
from .scene import MAX_INTENSITY, HitSelection, Scene, lambert_intensity

__all__ = [
    "Scene",
    "HitSelection",
    "lambert_intensity",
    "MAX_INTENSITY",
    "DemoSceneParams",
    "create_demo_scene",
]
