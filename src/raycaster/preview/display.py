"""Matplotlib-based preview display for rendered images.

Example:
    >>> from raycaster.preview.display import show_preview
    >>> show_preview(context.buffer, title="Demo scene")
"""

from __future__ import annotations

from typing import Any, Optional

from raycaster.preview.buffer import ImageBuffer


def show_preview(
    buffer: ImageBuffer,
    *,
    title: Optional[str] = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> Any:
    """Display an image buffer as a Matplotlib figure.

    Args:
        buffer: The image to show.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.

    Returns:
        The Matplotlib figure.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(buffer.to_array(), interpolation="nearest")
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {buffer.width}x{buffer.height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
    return fig
