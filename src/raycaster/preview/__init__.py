"""Preview module for output and visualization.

Components:
    buffer: RGB image buffer owned by the graphics context
    export: PNG export and loading via Pillow
    display: Matplotlib-based preview display
    overlay: Debug drawing of lines, pose axes, circles and cubes

The overlay functions draw through a GraphicsContext, so import them from
raycaster.preview.overlay directly.

Example:
    >>> from raycaster.preview import save_png, show_preview
    >>> save_png(context.buffer, "output.png")
    >>> show_preview(context.buffer, title="demo")
"""

from .buffer import BLACK, Color, ImageBuffer
from .display import show_preview
from .export import load_png, save_png, save_png_from_array

__all__ = [
    "ImageBuffer",
    "Color",
    "BLACK",
    # Display functions
    "show_preview",
    # Export functions
    "save_png",
    "save_png_from_array",
    "load_png",
]
