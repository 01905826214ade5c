"""RGB pixel buffer backing a render.

The buffer stores pixels exactly as they will be written to disk: an array of
shape (height, width, 3) with dtype uint8, row 0 at the top. Coordinate
flipping for the Y-up pixel convention is done by the graphics context, not
here.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
import numpy.typing as npt

from raycaster.errors import ConfigurationError

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)


class ImageBuffer:
    """Fixed-size RGB image in buffer (top-left origin) coordinates.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int, fill: Color = BLACK) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Image dimensions must be positive, got {width}x{height}"
            )
        self._width = int(width)
        self._height = int(height)
        self._data = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        self.fill(fill)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self._height, self._width, 3)

    def fill(self, color: Color) -> None:
        """Set every pixel to ``color``."""
        self._data[:, :] = _check_color(color)

    def set(self, col: int, row: int, color: Color) -> None:
        """Write one pixel in buffer coordinates (no bounds forgiveness)."""
        self._data[row, col] = color

    def get(self, col: int, row: int) -> Color:
        r, g, b = self._data[row, col]
        return (int(r), int(g), int(b))

    def blit(self, image: npt.NDArray[np.uint8]) -> None:
        """Replace the whole buffer with ``image``.

        Raises:
            ValueError: If the array shape does not match the buffer.
        """
        if image.shape != self._data.shape:
            raise ValueError(
                f"Image shape {image.shape} does not match buffer shape {self._data.shape}"
            )
        self._data[...] = image

    def to_array(self) -> npt.NDArray[np.uint8]:
        """Return a copy of the pixel data, shape (height, width, 3)."""
        return self._data.copy()

    def __repr__(self) -> str:
        return f"ImageBuffer(width={self._width}, height={self._height})"


def _check_color(color: Color) -> Color:
    if len(color) != 3 or any(not 0 <= int(c) <= 255 for c in color):
        raise ConfigurationError(f"Color must be three values in [0, 255], got {color!r}")
    return (int(color[0]), int(color[1]), int(color[2]))
