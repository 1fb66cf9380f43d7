"""Taichi-based offline Monte Carlo path tracer.

This package renders scenes made of spheres with Lambertian, metal,
dielectric and emissive materials through a thin-lens camera. The
ray/scene/material code runs as Taichi kernels on the CPU backend in
double precision.

Subpackages:
    core: Ray and vector utilities, image buffer, integrator and render driver
    camera: Thin-lens camera with depth of field
    geometry: Sphere primitive and ray-sphere intersection
    materials: Tagged-variant material table and scatter/emit functions
    scene: Scene aggregate, background, nearest-hit search and demo scenes
    output: Gamma correction, quantization, PPM and raster encoders

Note that subpackages declaring Taichi fields must be imported after
``pathtracer.config.init_taichi()`` has been called.
"""

__version__ = "0.1.0"
