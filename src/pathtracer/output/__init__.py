"""Output module for converting and saving rendered images.

Components:
    display: Gamma correction, clamping and 8-bit quantization
    export: PPM (P3) and Pillow raster encoders
"""

from .display import MAX_INTENSITY, apply_gamma, compute_rmse, quantize, to_rgb8
from .export import PixelCallback, encode_ppm, rgb_callback, save_raster, write_ppm

__all__ = [
    "MAX_INTENSITY",
    "apply_gamma",
    "quantize",
    "to_rgb8",
    "compute_rmse",
    "PixelCallback",
    "encode_ppm",
    "write_ppm",
    "save_raster",
    "rgb_callback",
]
