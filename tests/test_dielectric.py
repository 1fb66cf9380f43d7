"""Unit tests for the Dielectric material module.

Tests cover:
- Refraction ratio selection by face
- Total internal reflection (TIR)
- Schlick-driven random reflection
- Attenuation equals the albedo
- IOR and albedo validation
"""

import math

import numpy as np
import pytest
import taichi as ti


def _scatter_dielectric(incident, normal, front_face, ior=1.5, n=1):
    """Run scatter_dielectric n times and return (directions, did_scatter, attenuation)."""
    from pathtracer.core.ray import vec3
    from pathtracer.materials.dielectric import scatter_dielectric

    directions = ti.Vector.field(3, dtype=ti.f64, shape=n)
    scattered = ti.field(dtype=ti.i32, shape=n)
    attenuation = ti.Vector.field(3, dtype=ti.f64, shape=n)

    @ti.kernel
    def test_kernel(inc: vec3, nrm: vec3, ff: ti.i32, ir: ti.f64):
        for i in range(n):
            d, atten, did_scatter = scatter_dielectric(vec3(0.9, 0.9, 0.9), ir, inc, nrm, ff)
            directions[i] = d
            scattered[i] = did_scatter
            attenuation[i] = atten

    test_kernel(vec3(*incident), vec3(*normal), front_face, ior)
    return directions.to_numpy(), scattered.to_numpy(), attenuation.to_numpy()


class TestDielectricDescription:
    """Tests for the Python-side Dielectric dataclass."""

    def test_defaults(self):
        from pathtracer.materials import Dielectric

        glass = Dielectric()
        assert glass.albedo == (1.0, 1.0, 1.0)
        assert glass.packed() == ((1.0, 1.0, 1.0), 1.5)

    @pytest.mark.parametrize("ior", [0.0, -1.5])
    def test_non_positive_ior(self, ior):
        from pathtracer.materials import Dielectric

        with pytest.raises(ValueError, match="positive"):
            Dielectric((1.0, 1.0, 1.0), ior)


class TestRefractionRatio:
    """Tests for refraction_ratio_for and will_reflect."""

    def test_ratio_by_face(self):
        from pathtracer.materials.dielectric import refraction_ratio_for

        result = ti.field(dtype=ti.f64, shape=2)

        @ti.kernel
        def test_kernel():
            result[0] = refraction_ratio_for(1.5, 1)
            result[1] = refraction_ratio_for(1.5, 0)

        test_kernel()
        assert result[0] == pytest.approx(1.0 / 1.5)
        assert result[1] == pytest.approx(1.5)

    def test_total_internal_reflection_detected(self):
        """Test a steep ray leaving glass cannot refract."""
        from pathtracer.materials.dielectric import refraction_ratio_for, will_reflect

        result = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            # 60 degrees from the normal: 1.5 * sin(60) > 1
            result[0] = will_reflect(refraction_ratio_for(1.5, 0), 0.5)
            # The same ray entering glass always refracts
            result[1] = will_reflect(refraction_ratio_for(1.5, 1), 0.5)
            # Normal incidence never reflects totally
            result[2] = will_reflect(1.5, 1.0)

        test_kernel()
        assert result[0] == 1
        assert result[1] == 0
        assert result[2] == 0


class TestDielectricScatter:
    """Tests for scatter_dielectric."""

    def test_total_internal_reflection_always_reflects(self):
        s = math.sqrt(3.0) / 2.0
        directions, scattered, _ = _scatter_dielectric(
            (s, -0.5, 0.0), (0.0, 1.0, 0.0), front_face=0, n=200
        )
        assert np.all(scattered == 1)
        assert np.allclose(directions, [s, 0.5, 0.0])

    def test_normal_incidence_mostly_refracts(self):
        """Test that at normal incidence about r0 = 4% of rays reflect."""
        directions, scattered, attenuation = _scatter_dielectric(
            (0.0, -1.0, 0.0), (0.0, 1.0, 0.0), front_face=1, n=4000
        )
        assert np.all(scattered == 1)
        assert np.allclose(attenuation, [0.9, 0.9, 0.9])

        reflected = directions[:, 1] > 0.0
        assert np.allclose(directions[reflected], [0.0, 1.0, 0.0])
        assert np.allclose(directions[~reflected], [0.0, -1.0, 0.0])
        assert reflected.mean() == pytest.approx(0.04, abs=0.02)

    def test_ior_one_passes_straight_through_at_normal_incidence(self):
        directions, _, _ = _scatter_dielectric(
            (0.0, 0.0, -1.0), (0.0, 0.0, 1.0), front_face=1, ior=1.0, n=50
        )
        assert np.allclose(directions, [0.0, 0.0, -1.0])
