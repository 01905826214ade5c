"""Tests for the preview module.

This module tests the image buffer, PNG export and the matplotlib preview.

Note: The preview test switches matplotlib to the non-interactive Agg
backend so no window is opened.
"""

import numpy as np
import pytest
from PIL import Image as PILImage

from raycaster.errors import ConfigurationError
from raycaster.preview.buffer import BLACK, ImageBuffer
from raycaster.preview.export import load_png, save_png, save_png_from_array


class TestImageBuffer:
    """Tests for the RGB image buffer."""

    def test_shape_and_default_fill(self):
        buffer = ImageBuffer(4, 3)
        assert buffer.shape == (3, 4, 3)
        array = buffer.to_array()
        assert array.dtype == np.uint8
        assert (array == 0).all()

    def test_fill_and_get(self):
        buffer = ImageBuffer(2, 2, fill=(0, 150, 200))
        assert buffer.get(1, 1) == (0, 150, 200)
        buffer.fill(BLACK)
        assert buffer.get(0, 0) == BLACK

    def test_set_uses_buffer_coordinates(self):
        buffer = ImageBuffer(3, 2)
        buffer.set(2, 0, (1, 2, 3))
        assert tuple(buffer.to_array()[0, 2]) == (1, 2, 3)

    def test_to_array_is_a_copy(self):
        buffer = ImageBuffer(2, 2)
        array = buffer.to_array()
        array[0, 0] = (9, 9, 9)
        assert buffer.get(0, 0) == BLACK

    def test_invalid_fill_raises(self):
        with pytest.raises(ConfigurationError):
            ImageBuffer(2, 2, fill=(0, 300, 0))

    def test_invalid_size_raises(self):
        with pytest.raises(ConfigurationError):
            ImageBuffer(0, 5)

    def test_blit_shape_mismatch_raises(self):
        buffer = ImageBuffer(3, 2)
        with pytest.raises(ValueError):
            buffer.blit(np.zeros((3, 2, 3), dtype=np.uint8))


class TestSavePng:
    """Test PNG export functionality."""

    def test_save_png_creates_file(self, tmp_path):
        buffer = ImageBuffer(32, 16, fill=(0, 150, 200))
        buffer.set(0, 0, (255, 0, 0))

        out = save_png(buffer, tmp_path / "render.png")

        assert out.exists()
        img = PILImage.open(out)
        assert img.size == (32, 16)
        assert img.mode == "RGB"
        # Row 0 is the top row of the file
        assert img.getpixel((0, 0)) == (255, 0, 0)
        assert img.getpixel((31, 15)) == (0, 150, 200)

    def test_save_png_creates_parent_directories(self, tmp_path):
        out = save_png(ImageBuffer(2, 2), tmp_path / "a" / "b" / "render.png")
        assert out.exists()

    def test_load_png_round_trip(self, tmp_path):
        rng = np.random.default_rng(3)
        image = rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8)
        save_png_from_array(image, tmp_path / "noise.png")
        assert np.array_equal(load_png(tmp_path / "noise.png"), image)

    def test_save_png_from_array_rejects_grayscale(self, tmp_path):
        with pytest.raises(ValueError):
            save_png_from_array(np.zeros((4, 4), dtype=np.uint8), tmp_path / "gray.png")


class TestShowPreview:
    """Test the matplotlib preview without opening a window."""

    def test_show_preview_returns_figure(self):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from raycaster.preview.display import show_preview

        fig = show_preview(ImageBuffer(8, 8), title="test", block=False)
        try:
            assert fig.axes[0].get_title() == "test"
        finally:
            plt.close(fig)
