"""Tests for RenderSettings validation."""

from dataclasses import fields

import pytest

from pathtracer.config import DEFAULT_BAND_ROWS, RenderSettings


class TestRenderSettings:
    def test_defaults(self):
        settings = RenderSettings()
        assert (settings.width, settings.height) == (400, 225)
        assert settings.samples_per_pixel == 100
        assert settings.max_depth == 50
        assert settings.band_rows == DEFAULT_BAND_ROWS

    def test_aspect_ratio(self):
        assert RenderSettings(width=300, height=200).aspect_ratio == pytest.approx(1.5)
        assert RenderSettings(width=0, height=0).aspect_ratio == 1.0

    def test_zero_depth_allowed(self):
        assert RenderSettings(max_depth=0).max_depth == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"width": -1},
            {"height": -5},
            {"samples_per_pixel": 0},
            {"max_depth": -1},
            {"band_rows": 0},
        ],
    )
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            RenderSettings(**overrides)

    def test_frozen(self):
        settings = RenderSettings()
        with pytest.raises(AttributeError):
            settings.width = 10

    def test_seed_is_not_a_setting(self):
        """Test the sampler seed can only be chosen through init_taichi."""
        assert "seed" not in {f.name for f in fields(RenderSettings)}
        with pytest.raises(TypeError):
            RenderSettings(seed=5)
