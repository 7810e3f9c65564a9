"""Taichi runtime initialization.

The ray caster needs double precision (the FLOAT_EPS tolerances are far below
single precision resolution), so the runtime is always initialized with
``default_fp=ti.f64``. On the CPU backend the outer pixel loop is spread over
a fixed pool of ``workers`` threads.

ti.init() must run before any module that declares Taichi fields is imported
(camera, scene, shading, integrator).
"""

import logging
import os

import taichi as ti

logger = logging.getLogger(__name__)

_ARCHES = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
    "cuda": ti.cuda,
    "vulkan": ti.vulkan,
}


def default_worker_count() -> int:
    """Number of hardware threads available to this process."""
    return os.cpu_count() or 1


def init_runtime(arch: str = "cpu", workers: int | None = None, debug: bool = False) -> int:
    """Initialize Taichi for rendering.

    Args:
        arch: Backend name: "cpu", "gpu", "cuda" or "vulkan". The backend
            must support 64-bit floats.
        workers: Number of CPU worker threads. Defaults to the number of
            hardware threads.
        debug: Enable Taichi's debug mode (bounds checks).

    Returns:
        The worker count that was configured.

    Raises:
        ValueError: If the backend name is unknown or workers < 1.
    """
    if arch not in _ARCHES:
        raise ValueError(f"Unknown backend '{arch}', expected one of {sorted(_ARCHES)}")
    if workers is None:
        workers = default_worker_count()
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    ti.init(
        arch=_ARCHES[arch],
        default_fp=ti.f64,
        cpu_max_num_threads=workers,
        debug=debug,
    )
    logger.info(f"Taichi initialized: arch={arch}, workers={workers}")
    return workers
