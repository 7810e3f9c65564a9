"""Preview module for image output.

Components:
    export: PNG export of the 8-bit frame buffer via Pillow
"""

from src.raycaster.preview.export import save_png, to_pil_image

__all__ = [
    "save_png",
    "to_pil_image",
]
