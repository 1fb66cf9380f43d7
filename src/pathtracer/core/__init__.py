"""Core rendering module.

Components:
    ray: Ray data structure, vector primitive and random generators
    image: Image buffer with the width * height invariant
    integrator: ray_color and the image assembly kernel
    renderer: Render driver with progress reporting and cancellation

The integrator resolves the light transport recursion as an explicit
depth-limited loop, accumulating emission and attenuation along each path,
and averages jittered samples per pixel for antialiasing.
"""

from .image import Color, Image
from .ray import (
    Ray,
    cross,
    degrees_to_radians,
    dot,
    length,
    length_squared,
    near_zero,
    normalize,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_real,
    random_unit_vector,
    ray_at,
    real,
    reflect,
    refract,
    schlick_reflectance,
    vec3,
)

# Note: integrator and renderer are NOT imported here because they declare
# Taichi fields through the scene and camera modules. Import them directly:
#   from pathtracer.core.renderer import Renderer

__all__ = [
    "Color",
    "Image",
    "Ray",
    "ray_at",
    "real",
    "vec3",
    "degrees_to_radians",
    "length",
    "length_squared",
    "dot",
    "cross",
    "normalize",
    "near_zero",
    "reflect",
    "refract",
    "schlick_reflectance",
    "random_real",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
]
