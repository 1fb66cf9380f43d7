"""Tests for the demo scene factories."""

import pytest

from pathtracer.config import RenderSettings


class TestFixedScenes:
    """Tests for the hand-placed scenes."""

    def test_three_spheres(self):
        from pathtracer.materials import Dielectric, Lambertian, Metal
        from pathtracer.scene.background import Background
        from pathtracer.scene.scenes import three_spheres_scene

        setup = three_spheres_scene()
        assert len(setup.world) == 4
        assert setup.world.background == Background.sky()
        kinds = [type(s.material) for s in setup.world]
        assert kinds == [Lambertian, Lambertian, Dielectric, Metal]
        assert (setup.settings.width, setup.settings.height) == (400, 225)
        assert setup.camera.aperture == 0.0

    def test_defocus_focuses_on_center_sphere(self):
        from pathtracer.scene.scenes import defocus_scene

        setup = defocus_scene()
        assert setup.camera.aperture == 2.0
        assert setup.camera.focus_dist == pytest.approx(27.0**0.5)

    def test_scenes_upload(self):
        from pathtracer.scene.intersection import get_sphere_count
        from pathtracer.scene.scenes import three_spheres_scene

        three_spheres_scene().world.upload()
        assert get_sphere_count() == 4


class TestRandomScenes:
    """Tests for the seeded random scenes."""

    def test_random_scene_contents(self):
        from pathtracer.scene.scenes import random_scene

        setup = random_scene(seed=3)
        # Ground, up to 22 * 22 small spheres, three feature spheres
        assert 4 < len(setup.world) <= 1 + 22 * 22 + 3
        small = [s for s in setup.world if s.radius == 0.2]
        assert all(s.center[1] == 0.2 for s in small)
        assert setup.settings == RenderSettings(
            width=1200, height=800, samples_per_pixel=200, max_depth=50
        )

    def test_same_seed_same_world(self):
        from pathtracer.scene.scenes import random_scene

        first = random_scene(seed=11).world.objects
        second = random_scene(seed=11).world.objects
        assert first == second

    def test_different_seed_different_world(self):
        from pathtracer.scene.scenes import random_scene

        assert random_scene(seed=1).world.objects != random_scene(seed=2).world.objects

    def test_random_materials_are_valid(self):
        from pathtracer.materials import Dielectric
        from pathtracer.scene.scenes import random_scene

        for sphere in random_scene(seed=5).world:
            if isinstance(sphere.material, Dielectric):
                assert sphere.material.refractive_index >= 1.0

    def test_lights_scene(self):
        from pathtracer.materials import DiffuseLight
        from pathtracer.scene.background import Background
        from pathtracer.scene.scenes import random_scene_with_lights

        setup = random_scene_with_lights(seed=0)
        assert setup.world.background == Background.black()
        lights = [s for s in setup.world if isinstance(s.material, DiffuseLight)]
        assert len(lights) == 1
        assert lights[0].center == (-5.0, 1.0, 2.0)
        assert (setup.settings.width, setup.settings.height) == (400, 225)
        assert setup.settings.max_depth == 10

    def test_registry(self):
        from pathtracer.scene.scenes import SCENES

        assert set(SCENES) == {"three_spheres", "defocus", "random", "random_lights"}
        for factory in SCENES.values():
            setup = factory(0)
            assert setup.camera.aspect_ratio == pytest.approx(setup.settings.aspect_ratio, rel=0.01)
