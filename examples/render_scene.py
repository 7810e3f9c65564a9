#!/usr/bin/env python3
"""Render the demo scene or an OBJ mesh to PNG.

This script builds a scene (the built-in demo, or a Wavefront OBJ model on a
floor), configures the camera and sun, renders it with the ray caster and
saves the result. With --frames it renders an orbit: the eye circles the
vertical axis and every frame is written as a numbered PNG.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 500)
    --height HEIGHT     Image height in pixels (default: 500)
    --output OUTPUT     Output file path (default: render.png)
    --obj PATH          Render this OBJ file instead of the demo scene
    --y-offset DY       Vertical shift applied to the OBJ model
    --config PATH       JSON file with render settings (RenderConfig keys)
    --frames N          Render N orbit frames instead of a single image
    --steps N           Frames per full orbit revolution (default: 40)
    --radius R          Orbit radius (default: distance of the eye from the y axis)
    --workers N         Worker threads (default: all hardware threads)
    --arch ARCH         Taichi backend: cpu, gpu, cuda, vulkan (default: cpu)
    --serial            Render on one thread
    --verbose           Debug logging
    --quiet             Only log warnings and errors

Example:
    python -m examples.render_scene --obj models/teapot.obj --y-offset 1 --width 300 --height 300
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path

from src.raycaster.core.runtime import init_runtime
from src.raycaster.logging_config import setup_logging

logger = logging.getLogger("src.raycaster.examples")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene or an OBJ mesh.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels (default: 500)")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels (default: 500)")
    parser.add_argument("--output", type=str, default="render.png", help="Output file path (default: render.png)")
    parser.add_argument("--obj", type=str, default=None, help="Render this OBJ file instead of the demo scene")
    parser.add_argument("--y-offset", type=float, default=0.0, help="Vertical shift applied to the OBJ model")
    parser.add_argument("--config", type=str, default=None, help="JSON file with render settings")
    parser.add_argument("--frames", type=int, default=0, help="Render N orbit frames instead of one image")
    parser.add_argument("--steps", type=int, default=40, help="Frames per full orbit (default: 40)")
    parser.add_argument("--radius", type=float, default=None, help="Orbit radius")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads (default: all)")
    parser.add_argument(
        "--arch",
        type=str,
        default="cpu",
        choices=["cpu", "gpu", "cuda", "vulkan"],
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument("--serial", action="store_true", help="Render on one thread")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--verbose", action="store_true", help="Debug logging")
    group.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args()


def load_config_file(path: str | None) -> dict:
    """Read render settings from a JSON file (empty when no path is given)."""
    if not path:
        return {}
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return data


def build_config(args: argparse.Namespace, base, file_settings: dict):
    """Apply the config file and command-line overrides to a base config."""
    from dataclasses import replace

    from src.raycaster.core.renderer import RenderConfig

    config = base
    if file_settings:
        merged = config.to_dict()
        merged.update(file_settings)
        config = RenderConfig.from_dict(merged)

    overrides = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.workers is not None:
        overrides["workers"] = args.workers
    return replace(config, **overrides)


def frame_path(output: Path, index: int) -> Path:
    """Numbered file name for an orbit frame, e.g. render_0003.png."""
    return output.with_name(f"{output.stem}_{index:04d}{output.suffix or '.png'}")


def render_scene(args: argparse.Namespace, file_settings: dict) -> list[Path]:
    """Build the scene, render it and save the image(s).

    Returns:
        Paths of the files written.
    """
    # Lazy imports so Taichi is initialized before fields are declared
    from src.raycaster.core.renderer import RenderConfig, Renderer
    from src.raycaster.preview.export import save_png
    from src.raycaster.scene.demo import create_demo_scene
    from src.raycaster.scene.manager import SceneManager
    from src.raycaster.scene.wavefront import load_obj_into_scene

    if args.obj:
        scene = SceneManager()
        load_obj_into_scene(scene, args.obj, y_offset=args.y_offset)
        base = RenderConfig()
    else:
        scene, base = create_demo_scene()

    config = build_config(args, base, file_settings)
    logger.info(
        f"Scene ready: {scene.get_surface_count()} triangles "
        f"({scene.skipped} degenerate skipped)"
    )

    renderer = Renderer(config)
    output = Path(args.output)

    if args.frames <= 0:
        image = renderer.render(serial=args.serial)
        return [save_png(image, output)]

    radius = args.radius
    if radius is None:
        radius = math.hypot(config.eye[0], config.eye[2])
    written = []
    for index, image in renderer.render_orbit(radius, args.steps, args.frames, serial=args.serial):
        written.append(save_png(image, frame_path(output, index)))
    return written


def main() -> int:
    """Main entry point."""
    args = parse_args()

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    setup_logging(level)

    try:
        file_settings = load_config_file(args.config)
        workers = args.workers if args.workers is not None else file_settings.get("workers")
        init_runtime(args.arch, workers=workers)
        written = render_scene(args, file_settings)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error(f"Error: {e}")
        return 1

    logger.info(f"Wrote {len(written)} image(s), last: {written[-1].absolute()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
