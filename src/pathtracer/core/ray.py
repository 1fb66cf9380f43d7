"""Ray data structure and vector utilities for the path tracer.

This module provides the Ray dataclass and the vector primitive used by the
camera, geometry and material code: dot/cross products, lengths, guarded
normalization, reflection, refraction and the random generators used for
Monte Carlo sampling. All operations are Taichi functions and run inside
kernels in double precision.

Example:
    >>> from pathtracer.config import init_taichi
    >>> init_taichi()
    >>> import taichi as ti
    >>> from pathtracer.core.ray import Ray, ray_at, vec3
    >>> @ti.kernel
    ... def point() -> vec3:
    ...     ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    ...     return ray_at(ray, 5.0)
"""

import math

import taichi as ti
import taichi.math as tm

# Double-precision scalar and 3D vector types
real = ti.f64
vec3 = ti.types.vector(3, ti.f64)

# Components below this magnitude are treated as zero
NEAR_ZERO_EPSILON = 1e-8

# Upper bound on rejection-sampling attempts (acceptance rate is ~52%)
MAX_REJECTION_ATTEMPTS = 100


@ti.dataclass
class Ray:
    """A half-line origin + t * direction.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Not required to be normalized.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: real) -> vec3:
    """Compute the point ray.origin + t * ray.direction."""
    return ray.origin + t * ray.direction


def degrees_to_radians(degrees: float) -> float:
    """Convert an angle in degrees to radians."""
    return degrees * math.tau / 360.0


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length_squared(v: vec3) -> real:
    """Compute the squared length of a vector."""
    return tm.dot(v, v)


@ti.func
def length(v: vec3) -> real:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def dot(a: vec3, b: vec3) -> real:
    """Compute the dot product a . b."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return tm.cross(a, b)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the direction of v, or the zero vector if v has
        zero length (instead of propagating NaN).
    """
    result = vec3(0.0, 0.0, 0.0)
    len_sq = tm.dot(v, v)
    if len_sq > 0.0:
        result = v / ti.sqrt(len_sq)
    return result


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Return 1 if every component of v is within NEAR_ZERO_EPSILON of zero."""
    s = NEAR_ZERO_EPSILON
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Reflect v about the normal n: v - 2 * dot(v, n) * n.

    Args:
        v: The incoming direction (pointing toward the surface).
        n: The unit surface normal.

    Returns:
        The reflected direction.
    """
    return v - 2.0 * tm.dot(v, n) * n


@ti.func
def refract(uv: vec3, n: vec3, etai_over_etat: real) -> vec3:
    """Refract a unit vector through a surface using Snell's law.

    The refracted ray is split into a component perpendicular to the normal,
    eta * (uv + cos_theta * n), and a component parallel to it,
    -sqrt(|1 - |r_perp|^2|) * n.

    Args:
        uv: The unit incoming direction.
        n: The unit surface normal, on the same side as the incoming ray.
        etai_over_etat: Ratio of refractive indices (incident / transmitted).

    Returns:
        The refracted direction. Callers are expected to handle total
        internal reflection before calling.
    """
    cos_theta = tm.min(tm.dot(-uv, n), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * n)
    r_out_parallel = -ti.sqrt(ti.abs(1.0 - tm.dot(r_out_perp, r_out_perp))) * n
    return r_out_perp + r_out_parallel


@ti.func
def schlick_reflectance(cosine: real, ref_idx: real) -> real:
    """Approximate the Fresnel reflectance with Schlick's formula.

    Args:
        cosine: Cosine of the angle between the incident ray and the normal.
        ref_idx: Ratio of refractive indices.

    Returns:
        r0 + (1 - r0) * (1 - cosine)^5 with r0 = ((1 - ref_idx) / (1 + ref_idx))^2.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * ((1.0 - cosine) ** 5)


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


@ti.func
def random_real(lo: real, hi: real) -> real:
    """Draw a uniform random number in [lo, hi)."""
    return lo + (hi - lo) * ti.random(ti.f64)


@ti.func
def random_in_unit_sphere() -> vec3:
    """Generate a random point strictly inside the unit sphere.

    Draws points uniformly from the [-1, 1]^3 cube and rejects them until
    one has squared length < 1.

    Returns:
        A random point with length_squared < 1.
    """
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for _ in range(MAX_REJECTION_ATTEMPTS):
        if not found:
            candidate = vec3(
                random_real(-1.0, 1.0),
                random_real(-1.0, 1.0),
                random_real(-1.0, 1.0),
            )
            if length_squared(candidate) < 1.0:
                p = candidate
                found = True
    return p


@ti.func
def random_unit_vector() -> vec3:
    """Generate a unit vector uniformly distributed on the sphere.

    Uses z ~ U(-1, 1) and azimuth ~ U(0, 2*pi) with r = sqrt(1 - z^2).

    Returns:
        A random unit vector.
    """
    a = random_real(0.0, 2.0 * tm.pi)
    z = random_real(-1.0, 1.0)
    r = ti.sqrt(1.0 - z * z)
    return vec3(r * ti.cos(a), r * ti.sin(a), z)


@ti.func
def random_in_unit_disk() -> vec3:
    """Generate a random point (x, y, 0) with x^2 + y^2 < 1.

    Used to sample the lens aperture for depth of field.
    """
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for _ in range(MAX_REJECTION_ATTEMPTS):
        if not found:
            candidate = vec3(random_real(-1.0, 1.0), random_real(-1.0, 1.0), 0.0)
            if length_squared(candidate) < 1.0:
                p = candidate
                found = True
    return p
