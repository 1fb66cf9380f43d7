"""Background (environment) term for rays that escape the scene.

Two kinds are supported:
    - GRADIENT: vertical blend from ``bottom`` to ``top`` driven by the
      y component of the unit ray direction, t = 0.5 * (unit.y + 1)
    - SOLID: a constant color (black for scenes lit only by emitters)

Example:
    >>> from pathtracer.scene.background import Background
    >>> sky = Background.sky()
    >>> night = Background.black()
"""

from dataclasses import dataclass
from enum import IntEnum

import taichi as ti

from pathtracer.core.ray import normalize, vec3
from pathtracer.materials.material import as_triple

WHITE = (1.0, 1.0, 1.0)
SKY_BLUE = (0.5, 0.7, 1.0)


class BackgroundKind(IntEnum):
    """How the background color is computed."""

    GRADIENT = 0
    SOLID = 1


@dataclass(frozen=True)
class Background:
    """Environment color seen by rays that hit nothing.

    Attributes:
        kind: Gradient or solid.
        bottom: Color for straight-down rays (gradient) or the solid color.
        top: Color for straight-up rays (ignored for solid backgrounds).
    """

    kind: BackgroundKind = BackgroundKind.GRADIENT
    bottom: tuple[float, float, float] = WHITE
    top: tuple[float, float, float] = SKY_BLUE

    def __post_init__(self) -> None:
        for name in ("bottom", "top"):
            color = as_triple(getattr(self, name), f"Background {name}")
            object.__setattr__(self, name, color)
            if any(c < 0.0 for c in color):
                raise ValueError(f"Background {name} color must be 3 non-negative values")

    @classmethod
    def sky(cls) -> "Background":
        """White-to-sky-blue vertical gradient."""
        return cls(BackgroundKind.GRADIENT, WHITE, SKY_BLUE)

    @classmethod
    def gradient(
        cls,
        bottom: tuple[float, float, float],
        top: tuple[float, float, float],
    ) -> "Background":
        """Vertical gradient between two colors."""
        return cls(BackgroundKind.GRADIENT, bottom, top)

    @classmethod
    def solid(cls, color: tuple[float, float, float]) -> "Background":
        """Constant background color."""
        return cls(BackgroundKind.SOLID, color, color)

    @classmethod
    def black(cls) -> "Background":
        """Flat black, for enclosed or emitter-lit scenes."""
        return cls.solid((0.0, 0.0, 0.0))


_GRADIENT = int(BackgroundKind.GRADIENT)

_background_kind = ti.field(dtype=ti.i32, shape=())
_background_bottom = ti.Vector.field(3, dtype=ti.f64, shape=())
_background_top = ti.Vector.field(3, dtype=ti.f64, shape=())


def setup_background(background: Background) -> None:
    """Upload the background parameters for use in kernels."""
    _background_kind[None] = int(background.kind)
    _background_bottom[None] = list(background.bottom)
    _background_top[None] = list(background.top)


@ti.func
def background_color(direction: vec3) -> vec3:
    """Color returned by a ray with the given direction that hits nothing."""
    color = _background_bottom[None]
    if _background_kind[None] == _GRADIENT:
        unit_direction = normalize(direction)
        t = 0.5 * (unit_direction.y + 1.0)
        color = (1.0 - t) * _background_bottom[None] + t * _background_top[None]
    return color
