"""Dielectric (glass/water) material implementation.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when (n1 / n2) * sin(theta1) > 1

The material randomly chooses between reflection and refraction based on
the Schlick reflectance, which increases at grazing angles. Unlike clear
glass, the transmitted and reflected light is tinted by an albedo.

Example:
    >>> from pathtracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(albedo=(1.0, 1.0, 1.0), refractive_index=1.5)
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import (
    normalize,
    real,
    reflect,
    refract,
    schlick_reflectance,
    vec3,
)
from pathtracer.materials.material import Material, MaterialKind, as_triple, validate_albedo


@dataclass(frozen=True)
class Dielectric(Material):
    """Dielectric material properties.

    Attributes:
        albedo: Tint applied to reflected and refracted light (RGB in [0, 1]).
        refractive_index: Index of refraction (> 0). Common values:
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    albedo: tuple[float, float, float] = (1.0, 1.0, 1.0)
    refractive_index: float = 1.5

    kind: ClassVar[MaterialKind] = MaterialKind.DIELECTRIC

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", as_triple(self.albedo, "Albedo"))
        validate_albedo(self.albedo)
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"Index of refraction = {self.refractive_index} must be positive."
            )

    def packed(self) -> tuple[tuple[float, float, float], float]:
        return self.albedo, self.refractive_index


@ti.func
def refraction_ratio_for(refractive_index: real, front_face: ti.i32) -> real:
    """Ratio n_incident / n_transmitted: 1/ir entering, ir leaving."""
    ratio = refractive_index
    if front_face == 1:
        ratio = 1.0 / refractive_index
    return ratio


@ti.func
def will_reflect(refraction_ratio: real, cos_theta: real) -> ti.i32:
    """Return 1 if total internal reflection occurs, 0 otherwise."""
    sin_theta = ti.sqrt(1.0 - cos_theta * cos_theta)
    return 1 if refraction_ratio * sin_theta > 1.0 else 0


@ti.func
def scatter_dielectric(
    albedo: vec3,
    refractive_index: real,
    incident_direction: vec3,
    normal: vec3,
    front_face: ti.i32,
):
    """Compute the scattered direction for a dielectric surface.

    Args:
        albedo: Tint of the scattered light.
        refractive_index: Index of refraction of the material.
        incident_direction: The incoming ray direction (any length).
        normal: The unit surface normal, facing the incoming ray.
        front_face: 1 if the ray enters the material, 0 if it leaves it.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where
        did_scatter is always 1.
    """
    refraction_ratio = refraction_ratio_for(refractive_index, front_face)

    unit_direction = normalize(incident_direction)
    cos_theta = tm.min(tm.dot(-unit_direction, normal), 1.0)

    cannot_refract = will_reflect(refraction_ratio, cos_theta)
    reflectance = schlick_reflectance(cos_theta, refraction_ratio)

    scattered_direction = vec3(0.0, 0.0, 0.0)
    if cannot_refract == 1 or reflectance > ti.random(ti.f64):
        scattered_direction = reflect(unit_direction, normal)
    else:
        scattered_direction = refract(unit_direction, normal, refraction_ratio)

    return scattered_direction, albedo, 1
