"""Tests for the World aggregate and the background term.

Tests cover:
- add / clear / len / iteration
- Material deduplication on upload
- Upload into the sphere and material tables
- Gradient and solid backgrounds
"""

import pytest
import taichi as ti


def _background(direction):
    from pathtracer.core.ray import vec3
    from pathtracer.scene.background import background_color

    result = ti.Vector.field(3, dtype=ti.f64, shape=())

    @ti.kernel
    def test_kernel(d: vec3):
        result[None] = background_color(d)

    test_kernel(vec3(*direction))
    return result[None].to_numpy()


class TestWorldContainer:
    """Tests for the Python-side container."""

    def test_add_returns_insertion_index(self):
        from pathtracer.geometry.sphere import Sphere
        from pathtracer.materials import Lambertian
        from pathtracer.scene.world import World

        world = World()
        material = Lambertian((0.5, 0.5, 0.5))
        assert world.add(Sphere((0.0, 0.0, -1.0), 0.5, material)) == 0
        assert world.add(Sphere((0.0, -100.5, -1.0), 100.0, material)) == 1
        assert len(world) == 2
        assert [s.radius for s in world] == [0.5, 100.0]

    def test_clear(self):
        from pathtracer.geometry.sphere import Sphere
        from pathtracer.materials import Lambertian
        from pathtracer.scene.world import World

        world = World()
        world.add(Sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.5, 0.5, 0.5))))
        world.clear()
        assert len(world) == 0
        assert world.objects == ()

    def test_add_rejects_non_sphere(self):
        from pathtracer.scene.world import World

        with pytest.raises(TypeError):
            World().add("sphere")

    def test_default_background_is_sky(self):
        from pathtracer.scene.background import Background
        from pathtracer.scene.world import World

        assert World().background == Background.sky()

    def test_materials_deduplicated_in_first_use_order(self):
        from pathtracer.geometry.sphere import Sphere
        from pathtracer.materials import Lambertian, Metal
        from pathtracer.scene.world import World

        world = World()
        grey = Lambertian((0.5, 0.5, 0.5))
        gold = Metal((0.8, 0.6, 0.2), 0.3)
        world.add(Sphere((0.0, 0.0, 0.0), 1.0, grey))
        world.add(Sphere((2.0, 0.0, 0.0), 1.0, gold))
        world.add(Sphere((4.0, 0.0, 0.0), 1.0, Lambertian([0.5, 0.5, 0.5])))

        assert world.materials() == [grey, gold]


class TestWorldUpload:
    """Tests for World.upload."""

    def test_upload_fills_tables(self):
        from pathtracer.geometry.sphere import Sphere
        from pathtracer.materials import Lambertian, Metal, get_material_count
        from pathtracer.scene.intersection import (
            get_sphere_count,
            sphere_material_ids,
            sphere_radii,
        )
        from pathtracer.scene.world import World

        world = World()
        grey = Lambertian((0.5, 0.5, 0.5))
        world.add(Sphere((0.0, 0.0, 0.0), 1.0, grey))
        world.add(Sphere((2.0, 0.0, 0.0), 0.5, Metal((0.8, 0.8, 0.8))))
        world.add(Sphere((4.0, 0.0, 0.0), 0.25, grey))
        world.upload()

        assert get_sphere_count() == 3
        assert get_material_count() == 2
        assert [sphere_material_ids[i] for i in range(3)] == [0, 1, 0]
        assert [sphere_radii[i] for i in range(3)] == pytest.approx([1.0, 0.5, 0.25])

    def test_upload_replaces_previous_world(self):
        from pathtracer.geometry.sphere import Sphere
        from pathtracer.materials import Lambertian
        from pathtracer.scene.intersection import get_sphere_count
        from pathtracer.scene.world import World

        first = World()
        for x in range(5):
            first.add(Sphere((float(x), 0.0, 0.0), 0.1, Lambertian((0.5, 0.5, 0.5))))
        first.upload()

        second = World()
        second.add(Sphere((0.0, 0.0, 0.0), 1.0, Lambertian((0.1, 0.1, 0.1))))
        second.upload()
        assert get_sphere_count() == 1

    def test_upload_sets_background(self):
        from pathtracer.scene.background import Background
        from pathtracer.scene.world import World

        World(Background.solid((0.2, 0.3, 0.4))).upload()
        assert _background((0.0, 1.0, 0.0)) == pytest.approx([0.2, 0.3, 0.4])


class TestBackground:
    """Tests for the background term."""

    def test_sky_straight_down_is_white(self):
        assert _background((0.0, -1.0, 0.0)) == pytest.approx([1.0, 1.0, 1.0])

    def test_sky_straight_up_is_blue(self):
        assert _background((0.0, 1.0, 0.0)) == pytest.approx([0.5, 0.7, 1.0])

    def test_sky_horizontal_is_midpoint(self):
        """Test t = 0.5 for a horizontal ray of any length."""
        assert _background((0.0, 0.0, -7.0)) == pytest.approx([0.75, 0.85, 1.0])

    def test_black_background(self):
        from pathtracer.scene.background import Background, setup_background

        setup_background(Background.black())
        assert _background((0.3, 0.5, -1.0)) == pytest.approx([0.0, 0.0, 0.0])

    def test_custom_gradient(self):
        from pathtracer.scene.background import Background, setup_background

        setup_background(Background.gradient((0.0, 0.0, 0.0), (1.0, 0.0, 0.0)))
        assert _background((0.0, 1.0, 0.0)) == pytest.approx([1.0, 0.0, 0.0])

    def test_negative_color_rejected(self):
        from pathtracer.scene.background import Background

        with pytest.raises(ValueError):
            Background.solid((-1.0, 0.0, 0.0))
