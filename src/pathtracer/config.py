"""Render configuration and Taichi runtime initialization.

Example:
    >>> from pathtracer.config import RenderSettings, init_taichi
    >>> init_taichi(seed=7)
    >>> settings = RenderSettings(width=400, height=225, samples_per_pixel=50)
    >>> settings.aspect_ratio
    1.7777777777777777
"""

import logging
from dataclasses import dataclass

import taichi as ti

logger = logging.getLogger(__name__)

# Defaults match the three-sphere demo scene
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 225
DEFAULT_SAMPLES_PER_PIXEL = 100
DEFAULT_MAX_DEPTH = 50
DEFAULT_BAND_ROWS = 16


@dataclass(frozen=True)
class RenderSettings:
    """Plain input values for one render.

    The sampler seed is not part of the settings: it is fixed once per
    process by init_taichi.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum number of scatter events per path.
        band_rows: Number of rows rendered between cancellation checks.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    max_depth: int = DEFAULT_MAX_DEPTH
    band_rows: int = DEFAULT_BAND_ROWS

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Image dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(
                f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.band_rows < 1:
            raise ValueError(f"band_rows must be at least 1, got {self.band_rows}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height (1.0 for an empty image)."""
        if self.height == 0:
            return 1.0
        return self.width / self.height


def init_taichi(seed: int = 0, debug: bool = False) -> None:
    """Initialize the Taichi runtime for rendering.

    Always uses the CPU backend with double-precision floats. Must be called
    once, before importing modules that declare Taichi fields.

    Args:
        seed: Seed for Taichi's random number generator. Renders in the
            same process continue the stream, so only a fresh process
            started with the same seed repeats an image.
        debug: Enable Taichi debug mode (bounds checking).
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=seed, debug=debug)
    logger.debug("Taichi initialized (arch=cpu, fp=f64, seed=%d)", seed)
