"""Camera module for primary ray generation.

Components:
    thin_lens: Look-at camera with a circular lens for depth of field

Ray generation uses normalized screen coordinates:
    s in [0, 1]: left to right across the image
    t in [0, 1]: bottom to top across the image
"""

from .thin_lens import (
    Camera,
    CameraGeometry,
    compute_camera_geometry,
    get_camera_info,
    get_ray,
    setup_camera,
)

__all__ = [
    "Camera",
    "CameraGeometry",
    "compute_camera_geometry",
    "setup_camera",
    "get_ray",
    "get_camera_info",
]
