"""Material dispatch for the scatter/emit contract.

Looks up the kind tag of the hit material and calls the matching scatter
or emission function. Every kind implements:

    scatter(ray_in, rec) -> (scattered_ray, attenuation, did_scatter)
    emitted(rec) -> color (zero for everything except lights)
"""

import taichi as ti

from pathtracer.core.ray import Ray, vec3
from pathtracer.materials.dielectric import scatter_dielectric
from pathtracer.materials.diffuse_light import emitted_diffuse_light, scatter_diffuse_light
from pathtracer.materials.lambertian import scatter_lambertian
from pathtracer.materials.material import (
    MaterialKind,
    get_material_color,
    get_material_kind,
    get_material_param,
)
from pathtracer.materials.metal import scatter_metal

# Kind tags as plain ints for use inside kernels
_LAMBERTIAN = int(MaterialKind.LAMBERTIAN)
_METAL = int(MaterialKind.METAL)
_DIELECTRIC = int(MaterialKind.DIELECTRIC)
_DIFFUSE_LIGHT = int(MaterialKind.DIFFUSE_LIGHT)


@ti.func
def scatter(ray_in: Ray, rec):
    """Scatter an incoming ray off the material recorded in rec.

    Args:
        ray_in: The ray that produced the hit.
        rec: The HitRecord of the intersection.

    Returns:
        A tuple of (scattered_ray, attenuation, did_scatter) where
        did_scatter is 1 if the ray continues and 0 if it was absorbed.
        An unknown material ID absorbs the ray.
    """
    kind = get_material_kind(rec.material_id)

    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0

    if kind == _LAMBERTIAN:
        albedo = get_material_color(rec.material_id)
        scattered_direction, attenuation, did_scatter = scatter_lambertian(albedo, rec.normal)

    elif kind == _METAL:
        albedo = get_material_color(rec.material_id)
        fuzz = get_material_param(rec.material_id)
        scattered_direction, attenuation, did_scatter = scatter_metal(
            albedo, fuzz, ray_in.direction, rec.normal
        )

    elif kind == _DIELECTRIC:
        albedo = get_material_color(rec.material_id)
        refractive_index = get_material_param(rec.material_id)
        scattered_direction, attenuation, did_scatter = scatter_dielectric(
            albedo, refractive_index, ray_in.direction, rec.normal, rec.front_face
        )

    elif kind == _DIFFUSE_LIGHT:
        scattered_direction, attenuation, did_scatter = scatter_diffuse_light(rec.normal)

    scattered = Ray(origin=rec.point, direction=scattered_direction)
    return scattered, attenuation, did_scatter


@ti.func
def emitted(rec) -> vec3:
    """Radiance emitted by the material recorded in rec."""
    emission = vec3(0.0, 0.0, 0.0)
    if get_material_kind(rec.material_id) == _DIFFUSE_LIGHT:
        emission = emitted_diffuse_light(get_material_color(rec.material_id))
    return emission
