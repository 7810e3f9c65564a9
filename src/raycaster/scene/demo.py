"""Built-in demo scenes.

The demo scene is a green floor with a blue tetrahedron and a red cube
standing on it, lit from above. It needs no input files and renders quickly,
so it is used by the example script and the integration tests.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.raycaster.scene.demo import create_demo_scene
    >>> from src.raycaster.core.renderer import Renderer
    >>>
    >>> scene, config = create_demo_scene()
    >>> image = Renderer(config).render()
"""

from src.raycaster.core.renderer import RenderConfig
from src.raycaster.scene.manager import SceneManager
from src.raycaster.scene.shapes import cube, floor_plane, tetrahedron

FLOOR_COLOR = (0, 255, 0)
TETRAHEDRON_COLOR = (0, 0, 255)
CUBE_COLOR = (255, 0, 0)


def create_demo_scene(width: int = 200, height: int = 200) -> tuple[SceneManager, RenderConfig]:
    """Create the demo scene and a matching render configuration.

    Args:
        width: Output image width in pixels.
        height: Output image height in pixels.

    Returns:
        Tuple of (scene, config).
    """
    scene = SceneManager()
    scene.add_shape(floor_plane((0.3, 0.0, 0.0), 5.0, 5.0), FLOOR_COLOR)
    scene.add_shape(
        tetrahedron(
            (-1.0, 0.0, 0.25),
            (1.0, 0.0, 0.25),
            (-1.0, 0.0, 2.25),
            (0.0, 1.0, 1.25),
        ),
        TETRAHEDRON_COLOR,
    )
    # Bottom face sits slightly above the floor to avoid coplanar surfaces
    scene.add_shape(cube((0.25, 0.51, -0.8), 1.0), CUBE_COLOR)

    config = RenderConfig(
        eye=(-5.0, 3.0, 1.25),
        sun=(0.0, 5.0, 0.0),
        ambient_light=0.4,
        diffuse_light=0.2,
        grid_size=2.5,
        width=width,
        height=height,
    )
    return scene, config
