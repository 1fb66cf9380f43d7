"""Lambertian (ideal diffuse) material implementation.

Scattered directions are the surface normal plus a random unit vector,
which distributes outgoing rays proportionally to cos(theta) around the
normal. The material always scatters and tints the light by its albedo.

Example:
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> ground = Lambertian(albedo=(0.5, 0.5, 0.5))
    >>> # Inside a kernel:
    >>> # direction, attenuation, did_scatter = scatter_lambertian(albedo, normal)
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti

from pathtracer.core.ray import near_zero, random_unit_vector, vec3
from pathtracer.materials.material import Material, MaterialKind, as_triple, validate_albedo


@dataclass(frozen=True)
class Lambertian(Material):
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
    """

    albedo: tuple[float, float, float]

    kind: ClassVar[MaterialKind] = MaterialKind.LAMBERTIAN

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", as_triple(self.albedo, "Albedo"))
        validate_albedo(self.albedo)

    def packed(self) -> tuple[tuple[float, float, float], float]:
        return self.albedo, 0.0


@ti.func
def scatter_lambertian(albedo: vec3, normal: vec3):
    """Sample a scattered direction for a Lambertian surface.

    Args:
        albedo: The diffuse reflectance color.
        normal: The unit surface normal, facing the incoming ray.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where
        did_scatter is always 1.
    """
    scattered_direction = normal + random_unit_vector()

    # The random unit vector can cancel the normal exactly
    if near_zero(scattered_direction):
        scattered_direction = normal

    return scattered_direction, albedo, 1
