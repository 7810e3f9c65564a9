"""Taichi-based triangle ray caster.

This package renders triangle-mesh scenes by casting one ray per pixel, with
ambient plus diffuse lighting from a single sun and hard shadows:
- Ray/plane and ray/triangle intersection with a 3-D inside test
- Grid camera mapping pixels to primary rays
- Shadow rays and half-space (back-face) lighting check
- Data-parallel render loop over the image on Taichi's CPU threads

Subpackages:
    core: Vector utilities, shading, render loop, runtime setup and renderer
    geometry: Plane and triangle primitives
    scene: Triangle storage, scene manager, shape builders, OBJ import
    camera: Grid camera ray generation
    preview: PNG export

Taichi must be initialized (see core.runtime.init_runtime) before importing
modules that declare fields: camera, scene, core.shading, core.integrator.
"""

__version__ = "0.1.0"
