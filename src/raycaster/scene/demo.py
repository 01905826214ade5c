"""Demo scene: a lit sphere in front of the camera.

This module provides a factory for the standard test scene: a unit sphere ten
units down the -Z axis, lit by a point light offset from the sphere center,
viewed through a +-3 orthographic box. An optional backdrop plane sits behind
the sphere, facing the camera.

Example:
    >>> from raycaster.scene.demo import DemoSceneParams, create_demo_scene
    >>> scene, context = create_demo_scene(DemoSceneParams(width=256, height=256))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from raycaster.camera.context import GraphicsContext
from raycaster.camera.projection import OrthographicProjection, Projection
from raycaster.core.transform import Isometry
from raycaster.geometry.light import PointLight
from raycaster.geometry.plane import Plane
from raycaster.geometry.sphere import Sphere
from raycaster.scene.scene import HitSelection, Scene

logger = logging.getLogger(__name__)

SPHERE_NAME = "sphere"
LIGHT_NAME = "light"
BACKDROP_NAME = "backdrop"


@dataclass
class DemoSceneParams:
    """Parameters for the demo scene.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        ortho_size: Half-size of the orthographic view box.
        projection: Explicit projection; overrides ortho_size when set.
        eye: Camera position in world space.
        up: Camera up direction.
        sphere_center: Sphere center, also the point the camera looks at.
        sphere_radius: Sphere radius.
        light_offset: Light position relative to the sphere center.
        backdrop: Whether to add a plane behind the sphere.
        backdrop_distance: Distance of the backdrop behind the sphere center.
        selection: Hit selection policy for the scene.
    """

    width: int = 1001
    height: int = 1001
    ortho_size: float = 3.0
    projection: Optional[Projection] = None
    eye: tuple[float, float, float] = (0.0, 0.0, 0.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    sphere_center: tuple[float, float, float] = (0.0, 0.0, -10.0)
    sphere_radius: float = 1.0
    light_offset: tuple[float, float, float] = (2.0, 1.0, 2.0)
    backdrop: bool = False
    backdrop_distance: float = 3.0
    selection: HitSelection = HitSelection.NEAREST


def create_demo_scene(
    params: Optional[DemoSceneParams] = None,
) -> tuple[Scene, GraphicsContext]:
    """Create the demo scene and a graphics context looking at it.

    Args:
        params: Scene parameters. Defaults to DemoSceneParams().

    Returns:
        Tuple of (scene, context).
    """
    if params is None:
        params = DemoSceneParams()

    target = Isometry.from_translation(*params.sphere_center)
    projection = params.projection
    if projection is None:
        projection = OrthographicProjection.symmetric(params.ortho_size)

    context = GraphicsContext(
        projection=projection,
        width=params.width,
        height=params.height,
        root_pose=Isometry.look_at_rh(params.eye, params.sphere_center, params.up),
    )

    scene = Scene(selection=params.selection)
    scene.add_shape(SPHERE_NAME, Sphere(target, params.sphere_radius))
    scene.add_light(
        LIGHT_NAME, PointLight(target @ Isometry.from_translation(*params.light_offset))
    )

    if params.backdrop:
        # Local +Z of the backdrop faces back towards the camera
        backdrop_pose = Isometry.face_towards(
            target.transform_point((0.0, 0.0, -params.backdrop_distance)),
            params.eye,
            params.up,
        )
        scene.add_shape(BACKDROP_NAME, Plane(backdrop_pose))

    logger.info(
        "Created demo scene: %d shapes, %dx%d image", len(scene), params.width, params.height
    )
    return scene, context
