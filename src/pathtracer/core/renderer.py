"""Render driver: uploads a scene and fills an Image band by band.

The image is rendered in bands of ``settings.band_rows`` rows, top to
bottom. Between bands the renderer reports progress and checks for
cooperative cancellation, so long renders can be interrupted without
killing the process.

Example:
    >>> from pathtracer.config import RenderSettings, init_taichi
    >>> init_taichi(seed=3)
    >>> from pathtracer.core.renderer import Renderer
    >>> from pathtracer.scene.scenes import three_spheres_scene
    >>> setup = three_spheres_scene()
    >>> renderer = Renderer(setup.world, setup.camera, RenderSettings(64, 36, 4, 10))
    >>> image = renderer.render(callback=lambda done, total: print(f"{done}/{total}"))
"""

import logging
import time
from collections.abc import Callable, Generator

import numpy as np

from pathtracer.camera.thin_lens import Camera, setup_camera
from pathtracer.config import RenderSettings
from pathtracer.core.image import Image
from pathtracer.core.integrator import render_rows
from pathtracer.errors import RenderCancelledError
from pathtracer.scene.world import World

logger = logging.getLogger(__name__)

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Returns True when the render should stop
CancelCheck = Callable[[], bool]


class Renderer:
    """Renders a world through a camera into an Image.

    Attributes:
        world: The scene to render.
        camera: The camera parameters.
        settings: Image size, sampling and banding settings.
    """

    def __init__(self, world: World, camera: Camera, settings: RenderSettings) -> None:
        self.world = world
        self.camera = camera
        self.settings = settings

    def prepare(self) -> None:
        """Upload the world and camera to the kernel tables.

        Raises:
            DegenerateGeometryError: If the camera parameters are degenerate.
            RuntimeError: If the world exceeds the table capacities.
        """
        setup_camera(self.camera)
        self.world.upload()

    def render_bands(self, pixels: np.ndarray) -> Generator[tuple[int, int], None, None]:
        """Render into pixels band by band, yielding progress after each band.

        The world and camera must already be uploaded (see prepare).

        Args:
            pixels: Destination float64 array of shape (height, width, 3).

        Yields:
            Tuple of (rows_done, total_rows).
        """
        settings = self.settings
        total = settings.height
        for start in range(0, total, settings.band_rows):
            end = min(start + settings.band_rows, total)
            render_rows(pixels, start, end, settings.samples_per_pixel, settings.max_depth)
            logger.debug("Rendered rows %d-%d of %d", start, end, total)
            yield (end, total)

    def render(
        self,
        callback: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
    ) -> Image:
        """Render the full image.

        Args:
            callback: Optional function called after each band with
                (rows_done, total_rows).
            should_cancel: Optional function checked before each band; a
                True result stops the render.

        Returns:
            The rendered Image holding linear averaged colors.

        Raises:
            RenderCancelledError: If should_cancel returned True.
            DegenerateGeometryError: If the camera parameters are degenerate.
        """
        settings = self.settings
        pixels = np.zeros((settings.height, settings.width, 3), dtype=np.float64)

        self.prepare()
        logger.info(
            "Rendering %dx%d, %d spp, depth %d, %d spheres",
            settings.width,
            settings.height,
            settings.samples_per_pixel,
            settings.max_depth,
            len(self.world),
        )

        start_time = time.perf_counter()
        self._check_cancel(should_cancel, 0)
        for rows_done, total in self.render_bands(pixels):
            if callback is not None:
                callback(rows_done, total)
            if rows_done < total:
                self._check_cancel(should_cancel, rows_done)

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return Image.from_array(pixels)

    def _check_cancel(self, should_cancel: CancelCheck | None, rows_done: int) -> None:
        if should_cancel is not None and should_cancel():
            total = self.settings.height
            logger.info("Render cancelled after %d of %d rows", rows_done, total)
            raise RenderCancelledError(rows_done, total)


def render(
    world: World,
    camera: Camera,
    settings: RenderSettings | None = None,
    callback: ProgressCallback | None = None,
    should_cancel: CancelCheck | None = None,
) -> Image:
    """Render a world in one call. See Renderer.render."""
    if settings is None:
        settings = RenderSettings()
    return Renderer(world, camera, settings).render(callback, should_cancel)
