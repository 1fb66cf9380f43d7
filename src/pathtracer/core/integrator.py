"""Path tracing integrator for Monte Carlo light transport.

ray_color estimates the radiance arriving along a ray. The bounce recursion
is unrolled into a depth-limited loop that carries two quantities:

    radiance   += throughput * emitted      (at every hit)
    throughput *= attenuation               (at every scatter)

A path ends when it escapes (adding throughput * background), is absorbed
by its material, or runs out of depth (contributing nothing further). With
max_depth == 0 the result is always black.

The image kernel averages samples_per_pixel jittered camera rays per pixel
and stores the linear (not yet gamma corrected) average. Image rows run top
to bottom: row r samples the camera at t = (height - 1 - r + jitter) / height.

Example:
    >>> from pathtracer.config import init_taichi
    >>> init_taichi(seed=1)
    >>> from pathtracer.core.integrator import trace_ray
    >>> from pathtracer.scene.world import World
    >>> World().upload()
    >>> trace_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), max_depth=5)
    (0.5, 0.7, 1.0)
"""

import numpy as np
import taichi as ti

from pathtracer.camera.thin_lens import get_ray
from pathtracer.core.ray import Ray, vec3
from pathtracer.materials.dispatch import emitted, scatter
from pathtracer.scene.background import background_color
from pathtracer.scene.intersection import intersect_scene

# Hits closer than T_MIN are ignored to avoid self-intersection ("shadow acne")
T_MIN = 0.001
T_MAX = 1.0e30


@ti.func
def ray_color(ray: Ray, max_depth: ti.i32) -> vec3:
    """Estimate the radiance carried back along a ray.

    Args:
        ray: The ray to trace.
        max_depth: Maximum number of intersections along the path.

    Returns:
        The linear RGB radiance estimate.
    """
    radiance = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)

    origin = ray.origin
    direction = ray.direction

    # Taichi funcs cannot break out of loops; paths stop via the active flag
    active = 1

    for _ in range(max_depth):
        if active == 1:
            current = Ray(origin=origin, direction=direction)
            rec = intersect_scene(current, T_MIN, T_MAX)

            if rec.hit == 0:
                radiance += throughput * background_color(direction)
                active = 0
            else:
                radiance += throughput * emitted(rec)

                scattered, attenuation, did_scatter = scatter(current, rec)
                if did_scatter == 0:
                    active = 0
                else:
                    throughput *= attenuation
                    origin = scattered.origin
                    direction = scattered.direction

    return radiance


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows(
    pixels: ti.types.ndarray(dtype=ti.f64, ndim=3),
    row_start: ti.i32,
    row_end: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples_per_pixel: ti.i32,
    max_depth: ti.i32,
):
    """Render image rows [row_start, row_end) into pixels (height, width, 3)."""
    ti.loop_config(serialize=True)
    for row, x in ti.ndrange((row_start, row_end), width):
        j = height - 1 - row
        color = vec3(0.0, 0.0, 0.0)

        for _ in range(samples_per_pixel):
            s = (ti.cast(x, ti.f64) + ti.random(ti.f64)) / ti.cast(width, ti.f64)
            t = (ti.cast(j, ti.f64) + ti.random(ti.f64)) / ti.cast(height, ti.f64)
            color += ray_color(get_ray(s, t), max_depth)

        color /= ti.cast(samples_per_pixel, ti.f64)

        for c in ti.static(range(3)):
            pixels[row, x, c] = color[c]


_traced_color = ti.Vector.field(3, dtype=ti.f64, shape=())


@ti.kernel
def _trace_ray_kernel(origin: vec3, direction: vec3, max_depth: ti.i32):
    # Single-iteration outer loop keeps the loops inside ray_color serial
    for _ in range(1):
        _traced_color[None] = ray_color(Ray(origin=origin, direction=direction), max_depth)


# =============================================================================
# Public API
# =============================================================================


def render_rows(
    pixels: np.ndarray,
    row_start: int,
    row_end: int,
    samples_per_pixel: int,
    max_depth: int,
) -> None:
    """Render a band of rows into a (height, width, 3) float64 array.

    The world and camera must already be uploaded.

    Args:
        pixels: Destination array, modified in place.
        row_start: First row to render (0 = top of the image).
        row_end: One past the last row to render.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum path depth passed to ray_color.

    Raises:
        ValueError: If the array has the wrong shape or dtype, the rows are
            out of range, samples_per_pixel < 1 or max_depth < 0.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.float64:
        raise ValueError("pixels must be a float64 array of shape (height, width, 3)")
    if samples_per_pixel < 1:
        raise ValueError(f"samples_per_pixel must be at least 1, got {samples_per_pixel}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    height, width = pixels.shape[0], pixels.shape[1]
    if not 0 <= row_start <= row_end <= height:
        raise ValueError(f"Row range [{row_start}, {row_end}) is outside [0, {height})")
    if row_start == row_end or width == 0:
        return

    _render_rows(pixels, row_start, row_end, width, height, samples_per_pixel, max_depth)


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    max_depth: int,
) -> tuple[float, float, float]:
    """Evaluate ray_color for a single ray against the uploaded world.

    Useful for testing and debugging individual paths.

    Returns:
        Tuple of (R, G, B) linear color values.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    _trace_ray_kernel(vec3(*origin), vec3(*direction), max_depth)
    color = _traced_color[None]
    return (float(color[0]), float(color[1]), float(color[2]))
