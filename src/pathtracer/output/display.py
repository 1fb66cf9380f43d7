"""Conversion of linear render output to 8-bit display values.

The pipeline applied to every channel is:
    1. Gamma 2 correction: c -> sqrt(c)
    2. Clamping to [0, 0.999]
    3. Quantization: int(256 * c), giving integers in [0, 255]

Example:
    >>> from pathtracer.core.image import Image
    >>> from pathtracer.output.display import to_rgb8
    >>> img = Image(width=1, height=1, pixels=[(0.25, 1.0, 4.0)])
    >>> to_rgb8(img).tolist()
    [[[128, 255, 255]]]
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from pathtracer.core.image import Image

# Upper clamp applied before quantization so 256 * c stays below 256
MAX_INTENSITY = 0.999


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = 2.0,
) -> npt.NDArray[np.float64]:
    """Apply gamma correction: out = in^(1/gamma).

    Negative values are clamped to 0 first to avoid NaN.

    Args:
        image: Linear values of any shape.
        gamma: Gamma value (default 2.0, i.e. square root).

    Returns:
        Gamma corrected values as float64.
    """
    image = np.maximum(np.asarray(image, dtype=np.float64), 0.0)
    if gamma == 1.0:
        return image
    if gamma == 2.0:
        return np.sqrt(image)
    return np.power(image, 1.0 / gamma)


def quantize(values: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Clamp gamma-corrected values to [0, 0.999] and scale to 0-255."""
    clamped = np.clip(values, 0.0, MAX_INTENSITY)
    return (256.0 * clamped).astype(np.uint8)


def to_rgb8(image: Image, gamma: float = 2.0) -> npt.NDArray[np.uint8]:
    """Convert an Image to an 8-bit array of shape (height, width, 3).

    Raises:
        InconsistentDimensionsError: If the pixel buffer does not hold
            width * height pixels.
    """
    return quantize(apply_gamma(image.to_array(), gamma))


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")
    if image_a.size == 0:
        return 0.0

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
