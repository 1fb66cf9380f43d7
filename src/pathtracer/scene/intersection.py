"""Scene-level nearest-hit search.

Spheres are stored in Taichi fields (structure of arrays) and searched with
a linear scan. The scan keeps ``closest_so_far`` starting at t_max and
passes it as the upper bound of every subsequent sphere test, so only
strictly closer hits replace the current record and the earlier sphere wins
ties.

Example:
    >>> from pathtracer.scene.intersection import add_sphere, clear_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -1.0), 0.5, material_id=0)
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti

from pathtracer.core.ray import Ray, real
from pathtracer.geometry.sphere import HitRecord, SphereShape, hit_sphere, make_miss_record

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

sphere_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres from the scene tables."""
    num_spheres[None] = 0


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    material_id: int = 0,
) -> int:
    """Append a sphere to the scene tables.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID to associate with this sphere.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = [center[0], center[1], center[2]]
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene tables."""
    return int(num_spheres[None])


@ti.func
def intersect_scene(ray: Ray, t_min: real, t_max: real) -> HitRecord:
    """Find the closest sphere hit along a ray within (t_min, t_max).

    Args:
        ray: The ray to test.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.

    Returns:
        The HitRecord of the nearest intersection, or a miss record.
    """
    closest_so_far = t_max
    result = make_miss_record()

    for i in range(num_spheres[None]):
        sphere = SphereShape(center=sphere_centers[i], radius=sphere_radii[i])
        rec = hit_sphere(ray, sphere, t_min, closest_so_far, sphere_material_ids[i])
        if rec.hit == 1:
            closest_so_far = rec.t
            result = rec

    return result
