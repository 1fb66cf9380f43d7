"""Metal (specular reflective) material implementation.

Metals reflect the incoming ray about the surface normal:
    R = I - 2(I . N)N

The reflected direction is perturbed by a random point in the unit sphere
scaled by the fuzz parameter. Rays perturbed below the surface are absorbed.

Example:
    >>> from pathtracer.materials.metal import Metal
    >>> brushed_gold = Metal(albedo=(0.8, 0.6, 0.2), fuzz=0.3)
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import normalize, random_in_unit_sphere, real, reflect, vec3
from pathtracer.materials.material import Material, MaterialKind, as_triple, validate_albedo


@dataclass(frozen=True)
class Metal(Material):
    """Metal material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Reflection blur in [0, 1]. 0 = perfect mirror.
    """

    albedo: tuple[float, float, float]
    fuzz: float = 0.0

    kind: ClassVar[MaterialKind] = MaterialKind.METAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", as_triple(self.albedo, "Albedo"))
        validate_albedo(self.albedo)
        if self.fuzz < 0.0 or self.fuzz > 1.0:
            raise ValueError(
                f"Fuzz = {self.fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum blur)."
            )

    def packed(self) -> tuple[tuple[float, float, float], float]:
        return self.albedo, self.fuzz


@ti.func
def scatter_metal(albedo: vec3, fuzz: real, incident_direction: vec3, normal: vec3):
    """Compute the scattered direction for a metal surface.

    Args:
        albedo: The reflective color.
        fuzz: Reflection blur in [0, 1].
        incident_direction: The incoming ray direction (any length).
        normal: The unit surface normal, facing the incoming ray.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where
        did_scatter is 0 if the perturbed ray points into the surface.
    """
    reflected = reflect(normalize(incident_direction), normal)
    scattered_direction = reflected + fuzz * random_in_unit_sphere()

    did_scatter = 0
    if tm.dot(scattered_direction, normal) > 0.0:
        did_scatter = 1

    return scattered_direction, albedo, did_scatter
