"""Renderer facade tying camera, lights and frame buffer together.

This module provides RenderConfig, the complete description of a render job
apart from the geometry, and Renderer, a small wrapper around the integrator
that applies a configuration, renders and hands back the image.

The geometry itself is built separately with a SceneManager. Renderer only
reads it; the scene must not change while render() runs.

Example:
    >>> from src.raycaster.core.runtime import init_runtime
    >>> init_runtime("cpu")
    >>> from src.raycaster.core.renderer import RenderConfig, Renderer
    >>> from src.raycaster.scene.demo import create_demo_scene
    >>>
    >>> scene, config = create_demo_scene()
    >>> renderer = Renderer(config)
    >>> image = renderer.render()  # (height, width, 3) uint8
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Generator
from dataclasses import asdict, dataclass, replace
from typing import Any

import numpy as np
import numpy.typing as npt

from src.raycaster.camera.grid import GridCamera, setup_camera
from src.raycaster.core.integrator import (
    get_image_numpy,
    render_image,
    render_pixel,
    setup_render_target,
)
from src.raycaster.core.shading import Lighting, setup_lighting

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Camera, light and output settings for one render job.

    Attributes:
        eye: Camera position (x, y, z).
        sun: Sun position (x, y, z).
        ambient_light: Brightness of unlit points, in [0, 1].
        diffuse_light: Weight of the orientation-dependent term, in [0, 1].
        grid_size: Half-extent of the viewing grid (field of view).
        width: Output image width in pixels.
        height: Output image height in pixels.
        workers: CPU worker threads for the runtime; None uses every
            hardware thread. Only read by init_runtime.
        look_at: Center of the viewing grid.
    """

    eye: tuple[float, float, float] = (-5.0, 70.0, 0.0)
    sun: tuple[float, float, float] = (-80.0, 150.0, 80.0)
    ambient_light: float = 0.4
    diffuse_light: float = 0.2
    grid_size: float = 40.0
    width: int = 500
    height: int = 500
    workers: int | None = None
    look_at: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def camera(self) -> GridCamera:
        """The camera part of the configuration."""
        return GridCamera(eye=self.eye, grid_size=self.grid_size, look_at=self.look_at)

    def lighting(self) -> Lighting:
        """The light part of the configuration."""
        return Lighting(
            sun=self.sun,
            ambient_light=self.ambient_light,
            diffuse_light=self.diffuse_light,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export to a dictionary (for JSON serialization)."""
        data = asdict(self)
        for key in ("eye", "sun", "look_at"):
            data[key] = list(data[key])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Build a configuration from a dictionary; missing keys keep defaults.

        Raises:
            ValueError: If the dictionary contains unknown keys.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown render config keys: {sorted(unknown)}")
        kwargs = dict(data)
        for key in ("eye", "sun", "look_at"):
            if key in kwargs:
                kwargs[key] = tuple(float(c) for c in kwargs[key])
        return cls(**kwargs)


class Renderer:
    """Renders the current scene with a given configuration.

    Attributes:
        config: The active configuration.
    """

    def __init__(self, config: RenderConfig) -> None:
        """Apply the configuration.

        Raises:
            DegenerateCameraError: If the camera basis is undefined.
            ValueError: If any configuration value is out of range.
        """
        self.config = config
        self.apply()

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.config.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.config.height

    def apply(self) -> None:
        """Write camera, lights and frame buffer size to the Taichi fields."""
        setup_camera(self.config.camera())
        setup_lighting(self.config.lighting())
        setup_render_target(self.config.width, self.config.height)

    def move_eye(self, eye: tuple[float, float, float]) -> None:
        """Move the camera, keeping every other setting."""
        self.config = replace(self.config, eye=eye)
        setup_camera(self.config.camera())

    def render(self, serial: bool = False) -> npt.NDArray[np.uint8]:
        """Render the scene.

        Args:
            serial: Render on a single thread (same output, for verification).

        Returns:
            The image as a (height, width, 3) uint8 array.
        """
        start = time.perf_counter()
        render_image(serial=serial)
        image = get_image_numpy()
        logger.debug(
            f"Rendered {self.width}x{self.height} in {time.perf_counter() - start:.3f}s"
        )
        return image

    def render_pixel(self, row: int, col: int) -> tuple[int, int, int]:
        """Render a single pixel (for debugging and tests)."""
        return render_pixel(row, col)

    def render_orbit(
        self,
        radius: float,
        steps: int,
        frames: int,
        serial: bool = False,
    ) -> Generator[tuple[int, npt.NDArray[np.uint8]], None, None]:
        """Render frames with the eye circling the vertical axis.

        Frame k places the eye at ``(sin(a) * radius, eye.y, cos(a) * radius)``
        with ``a = 2 * pi * k / steps``; the eye height is kept.

        Args:
            radius: Orbit radius in the horizontal plane.
            steps: Number of frames for a full revolution.
            frames: Number of frames to render.
            serial: Render each frame on a single thread.

        Yields:
            Tuple of (frame_index, image).

        Raises:
            ValueError: If steps is not positive.
        """
        if steps <= 0:
            raise ValueError(f"steps must be positive, got {steps}")

        height = self.config.eye[1]
        for step in range(frames):
            angle = (step / steps) * 2.0 * math.pi
            self.move_eye((math.sin(angle) * radius, height, math.cos(angle) * radius))
            logger.info(f"Rendering orbit frame {step + 1}/{frames}")
            yield step, self.render(serial=serial)

    def save_image(self, filepath: str) -> None:
        """Save the current frame buffer as a PNG file."""
        from src.raycaster.preview.export import save_png

        save_png(get_image_numpy(), filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return f"Renderer(width={self.width}, height={self.height}, eye={self.config.eye})"
