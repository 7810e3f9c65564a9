"""Tests for the preview module.

This module tests PNG export of rendered images:
- Array validation (shape and dtype)
- Lossless round trip through a PNG file
- Parent directory creation
- Renderer.save_image writing the current frame buffer
"""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage


def _gradient(height=6, width=9):
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[..., 0] = np.arange(width, dtype=np.uint8)[None, :] * 20
    image[..., 1] = np.arange(height, dtype=np.uint8)[:, None] * 30
    image[..., 2] = 7
    return image


class TestToPilImage:
    """Test array to Pillow conversion."""

    def test_valid_image(self):
        """Test an (H, W, 3) uint8 array converts to an RGB image."""
        from src.raycaster.preview.export import to_pil_image

        pil = to_pil_image(_gradient())
        assert pil.mode == "RGB"
        assert pil.size == (9, 6)

    def test_wrong_shape_raises(self):
        """Test grayscale and RGBA arrays are rejected."""
        from src.raycaster.preview.export import to_pil_image

        with pytest.raises(ValueError):
            to_pil_image(np.zeros((4, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            to_pil_image(np.zeros((4, 4, 4), dtype=np.uint8))

    def test_wrong_dtype_raises(self):
        """Test float images are rejected."""
        from src.raycaster.preview.export import to_pil_image

        with pytest.raises(ValueError):
            to_pil_image(np.zeros((4, 4, 3), dtype=np.float32))


class TestSavePng:
    """Test PNG export."""

    def test_round_trip_is_lossless(self, tmp_path: Path) -> None:
        """Test the saved pixels read back unchanged, row 0 at the top."""
        from src.raycaster.preview.export import save_png

        image = _gradient()
        path = save_png(image, tmp_path / "out.png")

        with PILImage.open(path) as loaded:
            np.testing.assert_array_equal(np.asarray(loaded.convert("RGB")), image)

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Test missing directories are created."""
        from src.raycaster.preview.export import save_png

        path = save_png(_gradient(), tmp_path / "a" / "b" / "frame.png")
        assert path.exists()

    def test_renderer_save_image(self, tmp_path: Path) -> None:
        """Test Renderer.save_image writes the rendered frame."""
        from src.raycaster.core.integrator import BACKGROUND_COLOR
        from src.raycaster.core.renderer import RenderConfig, Renderer

        renderer = Renderer(RenderConfig(width=12, height=10))
        image = renderer.render()
        path = tmp_path / "empty.png"
        renderer.save_image(str(path))

        with PILImage.open(path) as loaded:
            loaded_array = np.asarray(loaded.convert("RGB"))
        np.testing.assert_array_equal(loaded_array, image)
        assert tuple(loaded_array[0, 0]) == BACKGROUND_COLOR
