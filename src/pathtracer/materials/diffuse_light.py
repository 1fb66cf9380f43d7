"""Diffuse light (emissive) material.

Lights never scatter; they contribute their emission color to any path that
reaches them. Emission is not bounded by 1, so bright lights can illuminate
a scene rendered against a black background.
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti

from pathtracer.core.ray import vec3
from pathtracer.materials.material import Material, MaterialKind, as_triple


@dataclass(frozen=True)
class DiffuseLight(Material):
    """Emissive material.

    Attributes:
        emission: Emitted radiance (RGB, each component >= 0).
    """

    emission: tuple[float, float, float]

    kind: ClassVar[MaterialKind] = MaterialKind.DIFFUSE_LIGHT

    def __post_init__(self) -> None:
        object.__setattr__(self, "emission", as_triple(self.emission, "Emission"))
        for i, component in enumerate(self.emission):
            if component < 0.0:
                raise ValueError(f"Emission component {i} = {component} is negative.")

    def packed(self) -> tuple[tuple[float, float, float], float]:
        return self.emission, 0.0


@ti.func
def scatter_diffuse_light(normal: vec3):
    """Lights absorb every incoming ray.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) with
        did_scatter = 0.
    """
    return normal, vec3(0.0, 0.0, 0.0), 0


@ti.func
def emitted_diffuse_light(emission: vec3) -> vec3:
    """Radiance emitted by the light."""
    return emission
