"""Materials module for the scatter/emit model.

Components:
    material: Kind tags, base class and the material table
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with fuzz
    dielectric: Glass-like refraction with Schlick reflectance
    diffuse_light: Emissive surfaces
    dispatch: Kind-tag dispatch used by the integrator

Materials are immutable frozen dataclasses on the Python side and rows of
a tagged-variant table on the kernel side.
"""

from .dielectric import Dielectric, scatter_dielectric, will_reflect
from .diffuse_light import DiffuseLight, emitted_diffuse_light, scatter_diffuse_light
from .dispatch import emitted, scatter
from .lambertian import Lambertian, scatter_lambertian
from .material import (
    MAX_MATERIALS,
    Material,
    MaterialKind,
    add_material,
    clear_materials,
    get_material_color,
    get_material_count,
    get_material_kind,
    get_material_param,
)
from .metal import Metal, scatter_metal

__all__ = [
    # Base
    "Material",
    "MaterialKind",
    "MAX_MATERIALS",
    "add_material",
    "clear_materials",
    "get_material_count",
    "get_material_kind",
    "get_material_color",
    "get_material_param",
    # Variants
    "Lambertian",
    "scatter_lambertian",
    "Metal",
    "scatter_metal",
    "Dielectric",
    "scatter_dielectric",
    "will_reflect",
    "DiffuseLight",
    "scatter_diffuse_light",
    "emitted_diffuse_light",
    # Dispatch
    "scatter",
    "emitted",
]
