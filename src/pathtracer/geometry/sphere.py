"""Sphere primitive with ray-sphere intersection.

The intersection solves |origin + t * direction - center|^2 = radius^2 with
the half-b form of the quadratic:

    a = dot(direction, direction)
    half_b = dot(oc, direction), oc = origin - center
    c = dot(oc, oc) - radius^2
    discriminant = half_b^2 - a * c

Roots are tried nearest first and accepted only strictly inside
(t_min, t_max).

Example:
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials import Lambertian
    >>> ball = Sphere(center=(0.0, 0.0, -1.0), radius=0.5,
    ...               material=Lambertian(albedo=(0.1, 0.2, 0.5)))
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import Ray, ray_at, real, vec3
from pathtracer.materials.material import Material, as_triple


@dataclass(frozen=True)
class Sphere:
    """A scene sphere: geometry plus the material it is made of.

    Attributes:
        center: The center point of the sphere.
        radius: The radius (>= 0).
        material: The surface material. May be shared between spheres.
    """

    center: tuple[float, float, float]
    radius: float
    material: Material

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_triple(self.center, "Center"))
        object.__setattr__(self, "radius", float(self.radius))
        if self.radius < 0.0:
            raise ValueError(f"Sphere radius must be non-negative, got {self.radius}")
        if not isinstance(self.material, Material):
            raise TypeError(f"Expected a Material, got {type(self.material).__name__}")


@ti.dataclass
class SphereShape:
    """Kernel-side sphere geometry.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere.
    """

    center: vec3
    radius: real


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        hit: 1 if the ray intersected the surface, 0 otherwise.
        t: Ray parameter of the intersection. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
        normal: Unit normal, always facing against the incoming ray.
        front_face: 1 if the ray hit the outside of the surface, 0 if it
            hit from inside.
        material_id: ID of the surface material in the material table,
            -1 on a miss.
    """

    hit: ti.i32
    t: real
    point: vec3
    normal: vec3
    front_face: ti.i32
    material_id: ti.i32


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        material_id=-1,
    )


@ti.func
def hit_sphere(
    ray: Ray,
    sphere: SphereShape,
    t_min: real,
    t_max: real,
    material_id: ti.i32,
) -> HitRecord:
    """Test a ray against a sphere.

    Args:
        ray: The ray to test. The direction need not be normalized.
        sphere: The sphere geometry.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.
        material_id: Material ID copied into the record on a hit.

    Returns:
        A HitRecord; check its hit field. A discriminant <= 0 (including
        tangent rays) is a miss.
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    half_b = tm.dot(oc, ray.direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    rec = make_miss_record()

    if discriminant > 0.0:
        root = ti.sqrt(discriminant)

        t = (-half_b - root) / a
        valid = (t > t_min) and (t < t_max)

        if not valid:
            t = (-half_b + root) / a
            valid = (t > t_min) and (t < t_max)

        if valid:
            point = ray_at(ray, t)
            outward_normal = (point - sphere.center) / sphere.radius

            front_face = 0
            normal = -outward_normal
            if tm.dot(ray.direction, outward_normal) < 0.0:
                front_face = 1
                normal = outward_normal

            rec = HitRecord(
                hit=1,
                t=t,
                point=point,
                normal=normal,
                front_face=front_face,
                material_id=material_id,
            )

    return rec
