"""Material base type and the material table used by the kernels.

Materials form a closed tagged variant: every material is stored in one
structure-of-arrays table with a kind tag, a color (albedo, or emission for
lights) and a scalar parameter (fuzz for metals, refractive index for
dielectrics). Kernels dispatch on the tag.

Example:
    >>> from pathtracer.materials import Lambertian, add_material
    >>> material_id = add_material(Lambertian(albedo=(0.8, 0.3, 0.3)))
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

import taichi as ti

from pathtracer.core.ray import real, vec3


class MaterialKind(IntEnum):
    """Tag identifying the scattering behavior of a material."""

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2
    DIFFUSE_LIGHT = 3


@dataclass(frozen=True)
class Material:
    """Base class for material descriptions.

    Subclasses set ``kind`` and implement :meth:`packed`, which returns the
    (color, parameter) pair stored in the material table.
    """

    kind: ClassVar[MaterialKind]

    def packed(self) -> tuple[tuple[float, float, float], float]:
        raise NotImplementedError


def as_triple(value, name: str) -> tuple[float, float, float]:
    """Coerce a 3-component sequence to a tuple of floats.

    Raises:
        ValueError: If the sequence does not have exactly 3 components.
    """
    components = tuple(float(c) for c in value)
    if len(components) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(components)}")
    return components


def validate_albedo(albedo: tuple[float, float, float]) -> None:
    """Check that every albedo component lies in [0, 1].

    Raises:
        ValueError: If a component is outside [0, 1].
    """
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )


# =============================================================================
# Material Table (for scene-level material management)
# =============================================================================

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

material_kinds = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_colors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_MATERIALS)
material_params = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(material: Material) -> int:
    """Add a material to the table.

    Args:
        material: The material description.

    Returns:
        The material ID (index into the table).

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    color, param = material.packed()
    material_kinds[idx] = int(material.kind)
    material_colors[idx] = [color[0], color[1], color[2]]
    material_params[idx] = param
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the table."""
    return int(num_materials[None])


@ti.func
def get_material_kind(material_id: ti.i32) -> ti.i32:
    """Get the kind tag for a material ID, or -1 for an invalid ID."""
    result = -1
    if material_id >= 0 and material_id < num_materials[None]:
        result = material_kinds[material_id]
    return result


@ti.func
def get_material_color(material_id: ti.i32) -> vec3:
    """Get the albedo (or emission) color for a material ID."""
    return material_colors[material_id]


@ti.func
def get_material_param(material_id: ti.i32) -> real:
    """Get the scalar parameter (fuzz or refractive index) for a material ID."""
    return material_params[material_id]
