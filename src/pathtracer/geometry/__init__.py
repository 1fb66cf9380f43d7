"""Geometry module for the sphere primitive.

Components:
    sphere: Sphere description, kernel-side shape, hit record and the
        ray-sphere intersection routine

Intersection follows the pattern:
    rec = hit_sphere(ray, shape, t_min, t_max, material_id)
"""

from .sphere import HitRecord, Sphere, SphereShape, hit_sphere, make_miss_record

__all__ = [
    "Sphere",
    "SphereShape",
    "HitRecord",
    "hit_sphere",
    "make_miss_record",
]
