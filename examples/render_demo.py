#!/usr/bin/env python3
"""Render the lit-sphere demo scene.

This script renders the standard demo scene: a unit sphere ten units in front
of the camera, shaded by a single point light. Debug axes are drawn on top of
the sphere and light poses, then the image is written as a PNG.

Usage:
    python examples/render_demo.py [options]

Options:
    --width WIDTH         Image width in pixels (default: 1001)
    --height HEIGHT       Image height in pixels (default: 1001)
    --output OUTPUT       Output file path (default: render.png)
    --backend BACKEND     "taichi" or "reference" (default: taichi)
    --arch ARCH           Taichi architecture, "gpu" or "cpu" (default: gpu)
    --selection POLICY    "nearest" or "farthest_near" (default: nearest)
    --projection KIND     "orthographic" or "perspective" (default: orthographic)
    --backdrop            Add a plane behind the sphere
    --no-axes             Skip the debug axes overlay
    --log-level LEVEL     Logging level (default: INFO)
    --preview             Show the result in a matplotlib window

Example:
    python examples/render_demo.py --width 256 --height 256 --backend reference
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import taichi as ti

from raycaster.config import ARCHES, BACKENDS, RenderConfig
from raycaster.errors import ConfigurationError
from raycaster.log import setup_default_logging
from raycaster.scene.scene import HitSelection

logger = logging.getLogger("render_demo")

AXIS_SIZE = 0.5


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the lit-sphere demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1001,
        help="Image width in pixels (default: 1001)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=1001,
        help="Image height in pixels (default: 1001)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="taichi",
        help="Renderer backend (default: taichi)",
    )
    parser.add_argument(
        "--arch",
        choices=ARCHES,
        default="gpu",
        help="Taichi architecture; falls back to cpu if gpu is unavailable (default: gpu)",
    )
    parser.add_argument(
        "--selection",
        choices=[s.value for s in HitSelection],
        default=HitSelection.NEAREST.value,
        help="Hit selection policy (default: nearest)",
    )
    parser.add_argument(
        "--projection",
        choices=("orthographic", "perspective"),
        default="orthographic",
        help="Camera projection (default: orthographic)",
    )
    parser.add_argument(
        "--backdrop",
        action="store_true",
        help="Add a plane behind the sphere",
    )
    parser.add_argument(
        "--no-axes",
        action="store_true",
        help="Skip the debug axes overlay",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a matplotlib window",
    )
    return parser.parse_args(argv)


def init_taichi(arch: str) -> None:
    """Initialize Taichi on the requested architecture.

    Uses GPU if requested and available, falls back to CPU.
    """
    if arch == "gpu":
        try:
            ti.init(arch=ti.gpu)
            logger.info("Using GPU backend")
            return
        except Exception:
            logger.warning("GPU backend unavailable, falling back to CPU", exc_info=True)
    ti.init(arch=ti.cpu)
    logger.info("Using CPU backend")


def render_demo(
    config: RenderConfig,
    *,
    backdrop: bool = False,
    draw_overlay: bool = True,
    preview: bool = False,
) -> Path:
    """Render the demo scene and save it to ``config.output``.

    Args:
        config: Render settings.
        backdrop: Whether to add a plane behind the sphere.
        draw_overlay: Whether to draw debug axes for the sphere and light.
        preview: Whether to show the result in a matplotlib window.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so Taichi is initialized before any kernel is compiled
    from raycaster.preview.display import show_preview
    from raycaster.preview.overlay import draw_axes
    from raycaster.render.kernel import Renderer
    from raycaster.render.reference import render_reference
    from raycaster.scene.demo import LIGHT_NAME, SPHERE_NAME, create_demo_scene

    params = config.demo_params()
    params.backdrop = backdrop
    scene, context = create_demo_scene(params)

    if config.backend == "taichi":
        Renderer(
            context, scene, light_name=config.light_name, background=config.background
        ).render()
    else:
        render_reference(
            context, scene, light_name=config.light_name, background=config.background
        )

    if draw_overlay:
        draw_axes(scene.get_shape(SPHERE_NAME).origin(), AXIS_SIZE, context)
        draw_axes(scene.get_light(LIGHT_NAME).pose, AXIS_SIZE, context)

    output_file = context.save(config.output)

    if preview:
        show_preview(context.buffer, title=f"{config.backend} - {config.width}x{config.height}")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_default_logging(args.log_level)

    try:
        config = RenderConfig.from_mapping(
            {
                "width": args.width,
                "height": args.height,
                "projection": {"kind": args.projection},
                "selection": args.selection,
                "backend": args.backend,
                "arch": args.arch,
                "output": args.output,
            }
        )
    except ConfigurationError as e:
        logger.error("Invalid settings: %s", e)
        return 1

    if config.backend == "taichi":
        init_taichi(config.arch)

    try:
        output_file = render_demo(
            config,
            backdrop=args.backdrop,
            draw_overlay=not args.no_axes,
            preview=args.preview,
        )
    except Exception:
        logger.exception("Render failed")
        return 1

    logger.info("Saved to: %s", output_file.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(main())
