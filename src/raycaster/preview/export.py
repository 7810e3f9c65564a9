"""Image export utilities for rendered images.

The frame buffer is already 8-bit sRGB-ready data, so export is a lossless
write with no tone mapping or gamma step.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.raycaster.preview.export import save_png
    >>> from src.raycaster.core.renderer import Renderer
    >>>
    >>> image = renderer.render()
    >>> save_png(image, "output.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def to_pil_image(image: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Wrap a (height, width, 3) uint8 array in a Pillow image.

    Raises:
        ValueError: If the array is not (H, W, 3) uint8.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {image.dtype}")
    return PILImage.fromarray(np.ascontiguousarray(image))


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save a rendered image as a PNG file.

    Missing parent directories are created.

    Args:
        image: Image array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path (should end in .png).

    Returns:
        The path that was written.
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_pil_image(image).save(path, format="PNG")
    logger.info(f"Saved {image.shape[1]}x{image.shape[0]} image to {path}")
    return path
