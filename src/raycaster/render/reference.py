"""Pure-Python reference renderer.

Renders one pixel at a time through the public API:

    ray = context.unproject_point((x, y))
    color = scene.cast_and_shade(ray, background, light_name)
    context.put_pixel_unchecked(x, y, color)

It is slow but uses the exact float64 semantics of the geometry module, so it
is the ground truth the Taichi renderer is tested against. It also handles
any Shape subclass, not just the primitives the kernel knows about.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from raycaster.camera.context import GraphicsContext
from raycaster.preview.buffer import Color
from raycaster.scene.scene import Scene

logger = logging.getLogger(__name__)

# Background color for rays that hit nothing
BACKGROUND_COLOR: Color = (0, 150, 200)


def render_pixel(
    context: GraphicsContext,
    scene: Scene,
    x: int,
    y: int,
    *,
    light_name: Optional[str] = None,
    background: Color = BACKGROUND_COLOR,
) -> Color:
    """Compute the color of a single pixel without writing it."""
    ray = context.unproject_point((x, y))
    return scene.cast_and_shade(ray, background, light_name)


def render_reference(
    context: GraphicsContext,
    scene: Scene,
    *,
    light_name: Optional[str] = None,
    background: Color = BACKGROUND_COLOR,
    log: Optional[logging.Logger] = None,
) -> GraphicsContext:
    """Render every pixel of ``context`` from ``scene`` in pure Python.

    Args:
        context: Graphics context providing the camera and output buffer.
        scene: The scene to render. It must not be modified during the call.
        light_name: Light used for shading (default: first registered).
        background: Color written where rays hit nothing.
        log: Logger for progress messages (default: this module's logger).

    Returns:
        The same context, with its buffer filled.
    """
    log = log if log is not None else logger
    # Fail before the pixel loop when the light name is wrong
    scene.resolve_light(light_name)

    log.info(
        "Rendering %dx%d (reference, %d shapes)", context.width, context.height, len(scene)
    )
    start = time.perf_counter()
    for y in range(context.height):
        for x in range(context.width):
            color = render_pixel(
                context, scene, x, y, light_name=light_name, background=background
            )
            context.put_pixel_unchecked(x, y, color)
    log.info("Reference render finished in %.2fs", time.perf_counter() - start)
    return context
