"""Tests for the render driver.

Tests cover:
- Output image size and consistency
- Band-by-band progress reporting
- Cooperative cancellation
- Empty images
"""

import math

import numpy as np
import pytest

from pathtracer.config import RenderSettings
from pathtracer.errors import RenderCancelledError


def _small_world():
    from pathtracer.geometry.sphere import Sphere
    from pathtracer.materials import Lambertian
    from pathtracer.scene.world import World

    world = World()
    world.add(Sphere((0.0, -100.5, -1.0), 100.0, Lambertian((0.5, 0.5, 0.5))))
    world.add(Sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.1, 0.2, 0.5))))
    return world


class TestRender:
    """Tests for Renderer.render."""

    def test_image_has_requested_size(self, pinhole_camera):
        from pathtracer.core.renderer import Renderer

        settings = RenderSettings(width=6, height=4, samples_per_pixel=2, max_depth=5)
        image = Renderer(_small_world(), pinhole_camera, settings).render()

        assert (image.width, image.height) == (6, 4)
        assert image.pixel_count == 24
        image.check_dimensions()

    def test_pixels_are_finite_and_non_negative(self, pinhole_camera):
        from pathtracer.core.renderer import render

        settings = RenderSettings(width=5, height=5, samples_per_pixel=2, max_depth=10)
        image = render(_small_world(), pinhole_camera, settings)

        assert np.all(np.isfinite(image.pixels))
        assert np.all(image.pixels >= 0.0)
        assert np.all(image.pixels <= 1.0)

    def test_sky_on_top_ground_below(self, pinhole_camera):
        """Test row 0 shows the sky and the last row shows the dark ground."""
        from pathtracer.core.renderer import render
        from pathtracer.geometry.sphere import Sphere
        from pathtracer.materials import Lambertian
        from pathtracer.scene.world import World

        world = World()
        world.add(Sphere((0.0, -100.5, -1.0), 100.0, Lambertian((0.0, 0.0, 0.0))))
        settings = RenderSettings(width=4, height=8, samples_per_pixel=2, max_depth=5)
        pixels = render(world, pinhole_camera, settings).to_array()

        assert np.all(pixels[0] > 0.4)
        assert np.all(pixels[-1] == 0.0)

    def test_empty_image(self, pinhole_camera):
        from pathtracer.core.renderer import render

        calls = []
        settings = RenderSettings(width=0, height=0)
        image = render(
            _small_world(), pinhole_camera, settings, callback=lambda d, t: calls.append(d)
        )

        assert image.pixel_count == 0
        assert calls == []

    def test_degenerate_camera_raises_before_rendering(self):
        from pathtracer.camera.thin_lens import Camera
        from pathtracer.core.renderer import render
        from pathtracer.errors import DegenerateGeometryError

        camera = Camera(
            lookfrom=(1.0, 1.0, 1.0),
            lookat=(1.0, 1.0, 1.0),
            vup=(0.0, 1.0, 0.0),
            vfov=math.radians(60.0),
            aspect_ratio=1.0,
        )
        with pytest.raises(DegenerateGeometryError):
            render(_small_world(), camera, RenderSettings(width=2, height=2))


class TestProgress:
    """Tests for progress reporting and cancellation."""

    def test_callback_reports_each_band(self, pinhole_camera):
        from pathtracer.core.renderer import Renderer

        progress = []
        settings = RenderSettings(
            width=3, height=10, samples_per_pixel=1, max_depth=2, band_rows=4
        )
        Renderer(_small_world(), pinhole_camera, settings).render(
            callback=lambda done, total: progress.append((done, total))
        )

        assert progress == [(4, 10), (8, 10), (10, 10)]

    def test_cancel_before_first_band(self, pinhole_camera):
        from pathtracer.core.renderer import Renderer

        progress = []
        settings = RenderSettings(width=3, height=6, samples_per_pixel=1, max_depth=2)
        renderer = Renderer(_small_world(), pinhole_camera, settings)

        with pytest.raises(RenderCancelledError) as exc_info:
            renderer.render(callback=lambda d, t: progress.append(d), should_cancel=lambda: True)

        assert exc_info.value.rows_completed == 0
        assert exc_info.value.total_rows == 6
        assert progress == []

    def test_cancel_between_bands(self, pinhole_camera):
        from pathtracer.core.renderer import Renderer

        checks = []

        def should_cancel():
            checks.append(True)
            return len(checks) > 2

        settings = RenderSettings(
            width=3, height=9, samples_per_pixel=1, max_depth=2, band_rows=2
        )
        with pytest.raises(RenderCancelledError) as exc_info:
            Renderer(_small_world(), pinhole_camera, settings).render(should_cancel=should_cancel)

        # Checked before band 1, after band 1, after band 2
        assert exc_info.value.rows_completed == 4
        assert "4/9" in str(exc_info.value)

    def test_no_cancel_after_last_band(self, pinhole_camera):
        """Test a request arriving after the final band does not discard the image."""
        from pathtracer.core.renderer import Renderer

        checks = []

        def should_cancel():
            checks.append(True)
            return len(checks) > 1

        settings = RenderSettings(
            width=2, height=3, samples_per_pixel=1, max_depth=2, band_rows=3
        )
        image = Renderer(_small_world(), pinhole_camera, settings).render(
            should_cancel=should_cancel
        )

        assert image.pixel_count == 6
        assert len(checks) == 1

    def test_render_bands_generator(self, pinhole_camera):
        from pathtracer.core.renderer import Renderer

        settings = RenderSettings(
            width=2, height=5, samples_per_pixel=1, max_depth=50, band_rows=2
        )
        renderer = Renderer(_small_world(), pinhole_camera, settings)
        renderer.prepare()

        pixels = np.zeros((5, 2, 3), dtype=np.float64)
        assert list(renderer.render_bands(pixels)) == [(2, 5), (4, 5), (5, 5)]
        assert np.all(pixels > 0.0)
