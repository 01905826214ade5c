"""Image export utilities for rendered images.

This module saves and loads image buffers as 8-bit RGB PNG files via Pillow.

Example:
    >>> from raycaster.preview.buffer import ImageBuffer
    >>> from raycaster.preview.export import save_png
    >>> buffer = ImageBuffer(64, 64, fill=(0, 150, 200))
    >>> save_png(buffer, "background.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raycaster.preview.buffer import ImageBuffer


def save_png(buffer: ImageBuffer, filepath: Union[str, Path]) -> Path:
    """Save an image buffer as a PNG file.

    Args:
        buffer: The buffer to encode. Row 0 is written as the top row.
        filepath: Output file path (should end in .png). Parent directories
            are created if missing.

    Returns:
        The resolved output path.
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    save_png_from_array(buffer.to_array(), path)
    return path


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: Union[str, Path]) -> None:
    """Save a (H, W, 3) uint8 array as a PNG file.

    Raises:
        ValueError: If the array is not an RGB image.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) array, got shape {image.shape}")
    pil_image = PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
    pil_image.save(str(filepath))


def load_png(filepath: Union[str, Path]) -> npt.NDArray[np.uint8]:
    """Load a PNG file as a (H, W, 3) uint8 array."""
    with PILImage.open(str(filepath)) as img:
        return np.asarray(img.convert("RGB"), dtype=np.uint8)
