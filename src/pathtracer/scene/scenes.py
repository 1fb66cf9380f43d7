"""Ready-made demo scenes.

Each factory returns a SceneSetup bundling the world, the camera and the
render settings the scene was composed for. Random scenes draw from a
NumPy generator seeded by the caller, so the same seed always builds the
same world.

Example:
    >>> from pathtracer.scene.scenes import random_scene
    >>> setup = random_scene(seed=7)
    >>> len(setup.world) > 4
    True
"""

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.camera.thin_lens import Camera
from pathtracer.config import RenderSettings
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials import Dielectric, DiffuseLight, Lambertian, Metal
from pathtracer.materials.material import Material
from pathtracer.scene.background import Background
from pathtracer.scene.world import World


@dataclass
class SceneSetup:
    """A world with the camera and settings it is meant to be rendered with."""

    world: World
    camera: Camera
    settings: RenderSettings


def _settings(width: int, aspect_ratio: float, samples_per_pixel: int, max_depth: int):
    return RenderSettings(
        width=width,
        height=int(width / aspect_ratio),
        samples_per_pixel=samples_per_pixel,
        max_depth=max_depth,
    )


def _add_ground_and_trio(world: World) -> None:
    world.add(Sphere((0.0, -100.5, -1.0), 100.0, Lambertian((0.8, 0.8, 0.0))))
    world.add(Sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.1, 0.2, 0.5))))
    world.add(Sphere((-1.0, 0.0, -1.0), 0.5, Dielectric((0.9, 0.9, 0.9), 1.5)))
    world.add(Sphere((1.0, 0.0, -1.0), 0.5, Metal((0.8, 0.6, 0.2), fuzz=1.0)))


def three_spheres_scene() -> SceneSetup:
    """Diffuse, glass and metal spheres on a large ground sphere, pinhole view."""
    aspect_ratio = 16.0 / 9.0
    world = World(Background.sky())
    _add_ground_and_trio(world)

    camera = Camera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        vfov=math.radians(90.0),
        aspect_ratio=aspect_ratio,
    )
    return SceneSetup(world, camera, _settings(400, aspect_ratio, 100, 50))


def defocus_scene() -> SceneSetup:
    """The three spheres seen from above with a wide aperture."""
    aspect_ratio = 16.0 / 9.0
    world = World(Background.sky())
    _add_ground_and_trio(world)

    lookfrom = (3.0, 3.0, 2.0)
    lookat = (0.0, 0.0, -1.0)
    camera = Camera(
        lookfrom=lookfrom,
        lookat=lookat,
        vup=(0.0, 1.0, 0.0),
        vfov=math.radians(20.0),
        aspect_ratio=aspect_ratio,
        aperture=2.0,
        focus_dist=math.dist(lookfrom, lookat),
    )
    return SceneSetup(world, camera, _settings(400, aspect_ratio, 200, 50))


def _random_material(rng: np.random.Generator) -> Material:
    choose_mat = rng.random()
    if choose_mat < 0.8:
        albedo = rng.random(3) * rng.random(3)
        return Lambertian(tuple(albedo))
    if choose_mat < 0.95:
        return Metal(tuple(rng.random(3)), fuzz=rng.uniform(0.0, 0.5))
    # Glass tinted by a random albedo, index of refraction kept above 1
    return Dielectric(tuple(rng.random(3)), rng.uniform(1.0, 3.0))


def _add_feature_spheres(world: World) -> None:
    world.add(Sphere((-4.0, 1.0, 0.0), 1.0, Lambertian((0.4, 0.2, 0.1))))
    world.add(Sphere((0.0, 1.0, 0.0), 1.0, Dielectric((1.0, 1.0, 1.0), 1.5)))
    world.add(Sphere((4.0, 1.0, 0.0), 1.0, Metal((0.7, 0.6, 0.5), fuzz=0.0)))


def _cover_camera(aspect_ratio: float) -> Camera:
    return Camera(
        lookfrom=(13.0, 2.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=math.radians(20.0),
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0,
    )


def random_scene(seed: int = 0) -> SceneSetup:
    """A grid of small random spheres around three large ones."""
    rng = np.random.default_rng(seed)
    world = World(Background.sky())
    world.add(Sphere((0.0, -1000.0, 0.0), 1000.0, Lambertian((0.5, 0.5, 0.5))))

    for a in range(-11, 11):
        for b in range(-11, 11):
            material = _random_material(rng)
            center = (a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if math.dist(center, (4.0, 0.2, 0.0)) > 0.9:
                world.add(Sphere(center, 0.2, material))

    _add_feature_spheres(world)

    aspect_ratio = 3.0 / 2.0
    return SceneSetup(
        world, _cover_camera(aspect_ratio), _settings(1200, aspect_ratio, 200, 50)
    )


def random_scene_with_lights(seed: int = 0) -> SceneSetup:
    """Scattered random spheres lit only by an emissive sphere, black sky."""
    rng = np.random.default_rng(seed)
    world = World(Background.black())
    world.add(Sphere((0.0, -1000.0, 0.0), 1000.0, Lambertian((0.5, 0.5, 0.5))))

    for a in range(-3, 3):
        for b in range(-3, 3):
            material = _random_material(rng)
            center = (a * 5.0 * rng.random(), 0.2, b * 5.0 * rng.random())
            if math.dist(center, (4.0, 0.2, 0.0)) > 0.9:
                world.add(Sphere(center, 0.2, material))

    _add_feature_spheres(world)
    world.add(Sphere((-5.0, 1.0, 2.0), 1.0, DiffuseLight((1.0, 1.0, 1.0))))

    aspect_ratio = 16.0 / 9.0
    return SceneSetup(
        world, _cover_camera(aspect_ratio), _settings(400, aspect_ratio, 50, 10)
    )


SCENES = {
    "three_spheres": lambda seed: three_spheres_scene(),
    "defocus": lambda seed: defocus_scene(),
    "random": random_scene,
    "random_lights": random_scene_with_lights,
}
