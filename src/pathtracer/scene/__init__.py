"""Scene module: sphere arena, world aggregate, background and demo scenes.

Components:
    intersection: Sphere tables and the nearest-hit linear scan
    background: Environment color for escaping rays
    world: Python-side scene aggregate uploaded to the kernel tables
    scenes: Demo scenes returning a world, a camera and render settings

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for sphere geometry
    - Material IDs indexing the shared material table
"""

from .background import Background, BackgroundKind, background_color, setup_background
from .intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)
from .scenes import (
    SCENES,
    SceneSetup,
    defocus_scene,
    random_scene,
    random_scene_with_lights,
    three_spheres_scene,
)
from .world import World

__all__ = [
    "Background",
    "BackgroundKind",
    "background_color",
    "setup_background",
    "MAX_SPHERES",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "World",
    "SceneSetup",
    "SCENES",
    "three_spheres_scene",
    "defocus_scene",
    "random_scene",
    "random_scene_with_lights",
]
