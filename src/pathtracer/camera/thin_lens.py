"""Thin-lens camera model with depth of field.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport lies on the focus plane, focus_dist in front of the camera.
Rays start at a random point on a lens disk of radius aperture / 2 and aim
at the matching point of the viewport, so geometry on the focus plane is
sharp and everything else is blurred. An aperture of 0 gives a pinhole.

Example:
    >>> import math
    >>> from pathtracer.camera.thin_lens import Camera, setup_camera
    >>> camera = Camera(
    ...     lookfrom=(3.0, 3.0, 2.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=math.radians(20.0),
    ...     aspect_ratio=16.0 / 9.0,
    ...     aperture=2.0,
    ...     focus_dist=5.196,
    ... )
    >>> geometry = setup_camera(camera)
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
import taichi as ti

from pathtracer.core.ray import Ray, random_in_unit_disk, real, vec3
from pathtracer.errors import DegenerateGeometryError

logger = logging.getLogger(__name__)

# Below this length the up vector is treated as parallel to the view direction
_PARALLEL_EPSILON = 1e-12


@dataclass(frozen=True)
class Camera:
    """User-facing camera parameters.

    Attributes:
        lookfrom: Camera position in world space.
        lookat: Point the camera is looking at.
        vup: Up direction for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in radians.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 disables depth of field.
        focus_dist: Distance from the camera to the plane in focus.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    aperture: float = 0.0
    focus_dist: float = 1.0


@dataclass(frozen=True)
class CameraGeometry:
    """Derived, immutable camera geometry.

    Attributes:
        origin: Center of the lens.
        u: Right direction.
        v: Up direction.
        w: Backward direction (opposite the view direction).
        horizontal: Full viewport width vector on the focus plane.
        vertical: Full viewport height vector on the focus plane.
        lower_left_corner: Lower-left corner of the viewport.
        lens_radius: Radius of the lens disk.
    """

    origin: tuple[float, float, float]
    u: tuple[float, float, float]
    v: tuple[float, float, float]
    w: tuple[float, float, float]
    horizontal: tuple[float, float, float]
    vertical: tuple[float, float, float]
    lower_left_corner: tuple[float, float, float]
    lens_radius: float


def _as_tuple(vector: np.ndarray) -> tuple[float, float, float]:
    return (float(vector[0]), float(vector[1]), float(vector[2]))


def compute_camera_geometry(camera: Camera) -> CameraGeometry:
    """Derive the camera basis and viewport from the user parameters.

    Args:
        camera: Camera configuration.

    Returns:
        The derived CameraGeometry.

    Raises:
        DegenerateGeometryError: If lookfrom equals lookat, vup is parallel
            to the view direction, vfov is outside (0, pi), aspect_ratio or
            focus_dist is not positive, or aperture is negative.
    """
    if not 0.0 < camera.vfov < math.pi:
        raise DegenerateGeometryError(
            f"Vertical field of view must be in (0, pi) radians, got {camera.vfov}"
        )
    if camera.aspect_ratio <= 0.0:
        raise DegenerateGeometryError(
            f"Aspect ratio must be positive, got {camera.aspect_ratio}"
        )
    if camera.aperture < 0.0:
        raise DegenerateGeometryError(f"Aperture must be non-negative, got {camera.aperture}")
    if camera.focus_dist <= 0.0:
        raise DegenerateGeometryError(
            f"Focus distance must be positive, got {camera.focus_dist}"
        )

    h = math.tan(camera.vfov / 2.0)
    viewport_height = 2.0 * h
    viewport_width = camera.aspect_ratio * viewport_height

    lookfrom = np.array(camera.lookfrom, dtype=np.float64)
    lookat = np.array(camera.lookat, dtype=np.float64)
    vup = np.array(camera.vup, dtype=np.float64)

    w = lookfrom - lookat
    w_length = np.linalg.norm(w)
    if w_length == 0.0:
        raise DegenerateGeometryError("lookfrom and lookat must be different points")
    w = w / w_length

    u = np.cross(vup, w)
    u_length = np.linalg.norm(u)
    if u_length < _PARALLEL_EPSILON:
        raise DegenerateGeometryError("vup must not be parallel to the view direction")
    u = u / u_length

    v = np.cross(w, u)

    horizontal = camera.focus_dist * viewport_width * u
    vertical = camera.focus_dist * viewport_height * v
    lower_left = lookfrom - horizontal / 2.0 - vertical / 2.0 - camera.focus_dist * w

    return CameraGeometry(
        origin=_as_tuple(lookfrom),
        u=_as_tuple(u),
        v=_as_tuple(v),
        w=_as_tuple(w),
        horizontal=_as_tuple(horizontal),
        vertical=_as_tuple(vertical),
        lower_left_corner=_as_tuple(lower_left),
        lens_radius=camera.aperture / 2.0,
    )


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f64, shape=())
_camera_u = ti.Vector.field(3, dtype=ti.f64, shape=())
_camera_v = ti.Vector.field(3, dtype=ti.f64, shape=())
_camera_w = ti.Vector.field(3, dtype=ti.f64, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f64, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f64, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f64, shape=())
_lens_radius = ti.field(dtype=ti.f64, shape=())


def setup_camera(camera: Camera) -> CameraGeometry:
    """Compute the camera geometry and upload it for use in kernels.

    Must be called before rendering.

    Args:
        camera: Camera configuration.

    Returns:
        The derived geometry that was uploaded.

    Raises:
        DegenerateGeometryError: If the parameters do not define a camera.
    """
    geometry = compute_camera_geometry(camera)

    _camera_origin[None] = list(geometry.origin)
    _camera_u[None] = list(geometry.u)
    _camera_v[None] = list(geometry.v)
    _camera_w[None] = list(geometry.w)
    _viewport_horizontal[None] = list(geometry.horizontal)
    _viewport_vertical[None] = list(geometry.vertical)
    _lower_left_corner[None] = list(geometry.lower_left_corner)
    _lens_radius[None] = geometry.lens_radius

    logger.debug(
        "Camera set up: origin=%s lens_radius=%.4f", geometry.origin, geometry.lens_radius
    )
    return geometry


@ti.func
def get_ray(s: real, t: real) -> Ray:
    """Generate a ray through normalized screen coordinates (s, t).

    s = 0 is the left edge and s = 1 the right edge; t = 0 is the bottom
    edge and t = 1 the top edge. The direction is not normalized.
    """
    rd = _lens_radius[None] * random_in_unit_disk()
    offset = _camera_u[None] * rd.x + _camera_v[None] * rd.y

    origin = _camera_origin[None] + offset
    direction = (
        _lower_left_corner[None]
        + s * _viewport_horizontal[None]
        + t * _viewport_vertical[None]
        - _camera_origin[None]
        - offset
    )
    return Ray(origin=origin, direction=direction)


def get_camera_info() -> dict[str, tuple[float, float, float] | float]:
    """Read back the uploaded camera state, for debugging and tests."""

    def read(field) -> tuple[float, float, float]:
        value = field[None]
        return (float(value[0]), float(value[1]), float(value[2]))

    return {
        "origin": read(_camera_origin),
        "u": read(_camera_u),
        "v": read(_camera_v),
        "w": read(_camera_w),
        "horizontal": read(_viewport_horizontal),
        "vertical": read(_viewport_vertical),
        "lower_left": read(_lower_left_corner),
        "lens_radius": float(_lens_radius[None]),
    }
