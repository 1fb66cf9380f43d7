"""Scene aggregate holding the spheres and background of a render.

The World keeps an ordered list of spheres on the Python side and packs
them, together with their materials, into the kernel tables when uploaded.
Materials shared by several spheres (or equal to each other) occupy a
single table slot.

Example:
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials import Lambertian, Metal
    >>> from pathtracer.scene.world import World
    >>> world = World()
    >>> ground = Lambertian(albedo=(0.8, 0.8, 0.0))
    >>> world.add(Sphere((0.0, -100.5, -1.0), 100.0, ground))
    0
    >>> world.add(Sphere((1.0, 0.0, -1.0), 0.5, Metal((0.8, 0.6, 0.2), fuzz=1.0)))
    1
    >>> world.upload()
"""

import logging
from collections.abc import Iterator

from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import MAX_MATERIALS, Material, add_material, clear_materials
from pathtracer.scene.background import Background, setup_background
from pathtracer.scene.intersection import MAX_SPHERES, add_sphere, clear_scene

logger = logging.getLogger(__name__)


class World:
    """An ordered collection of spheres plus a background.

    Attributes:
        background: The environment term for rays that escape the scene.
    """

    def __init__(self, background: Background | None = None) -> None:
        self.background = background if background is not None else Background.sky()
        self._objects: list[Sphere] = []

    def add(self, sphere: Sphere) -> int:
        """Append a sphere to the world.

        Args:
            sphere: The sphere to add.

        Returns:
            The index of the sphere in insertion order.

        Raises:
            TypeError: If the object is not a Sphere.
            RuntimeError: If the world already holds MAX_SPHERES spheres.
        """
        if not isinstance(sphere, Sphere):
            raise TypeError(f"Expected a Sphere, got {type(sphere).__name__}")
        if len(self._objects) >= MAX_SPHERES:
            raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
        self._objects.append(sphere)
        return len(self._objects) - 1

    def clear(self) -> None:
        """Remove every sphere from the world."""
        self._objects.clear()

    @property
    def objects(self) -> tuple[Sphere, ...]:
        """The spheres in insertion order."""
        return tuple(self._objects)

    def materials(self) -> list[Material]:
        """Distinct materials in first-use order."""
        seen: dict[Material, None] = {}
        for sphere in self._objects:
            seen.setdefault(sphere.material, None)
        return list(seen)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self._objects)

    def upload(self) -> None:
        """Pack spheres, materials and background into the kernel tables.

        Replaces whatever scene was previously uploaded.

        Raises:
            RuntimeError: If the distinct materials exceed MAX_MATERIALS.
        """
        materials = self.materials()
        if len(materials) > MAX_MATERIALS:
            raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

        clear_scene()
        clear_materials()

        material_ids = {material: add_material(material) for material in materials}
        for sphere in self._objects:
            add_sphere(sphere.center, sphere.radius, material_ids[sphere.material])

        setup_background(self.background)
        logger.debug(
            "Uploaded world: %d spheres, %d materials, background=%s",
            len(self._objects),
            len(materials),
            self.background.kind.name,
        )

    def __repr__(self) -> str:
        return f"World(spheres={len(self._objects)}, background={self.background!r})"
