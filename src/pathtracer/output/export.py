"""Image export: PPM (P3) text and raster formats via Pillow.

Every encoder checks the image dimensions first, so an inconsistent image
raises InconsistentDimensionsError before any file is opened. Pixels are
written in buffer order, rows top-to-bottom, for every format.

Supported formats:
    - PPM P3 (plain text, written directly)
    - PNG, JPEG and anything else Pillow can save

Example:
    >>> from pathtracer.output.export import save_raster, write_ppm
    >>> write_ppm(image, "render.ppm")
    >>> save_raster(image, "render.png")
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from PIL import Image as PILImage

from pathtracer.core.image import Image
from pathtracer.output.display import to_rgb8

logger = logging.getLogger(__name__)

# (x, y) -> (r, g, b) byte triple, row 0 at the top
PixelCallback = Callable[[int, int], tuple[int, int, int]]


def encode_ppm(image: Image) -> str:
    """Encode an image as PPM P3 text.

    The header is ``P3\\n{width} {height}\\n255\\n``, followed by one
    ``R G B`` line per pixel.

    Raises:
        InconsistentDimensionsError: If the pixel buffer does not hold
            width * height pixels.
    """
    rgb = to_rgb8(image)
    lines = [f"P3\n{image.width} {image.height}\n255\n"]
    lines.extend(f"{r} {g} {b}\n" for r, g, b in rgb.reshape(-1, 3).tolist())
    return "".join(lines)


def write_ppm(image: Image, filepath: str | Path) -> None:
    """Write an image to a PPM P3 file.

    Raises:
        InconsistentDimensionsError: If the dimensions are inconsistent.
            Nothing is written in that case.
        OSError: If the file cannot be written.
    """
    content = encode_ppm(image)
    with open(filepath, "w", encoding="ascii") as f:
        f.write(content)
    logger.info("Wrote %dx%d PPM to %s", image.width, image.height, filepath)


def save_raster(image: Image, filepath: str | Path, format: str | None = None) -> None:
    """Save an image as an 8-bit RGB raster file through Pillow.

    Args:
        image: The rendered image.
        filepath: Output file path.
        format: Pillow format name (e.g. "PNG", "JPEG"). Inferred from the
            file extension when omitted.

    Raises:
        InconsistentDimensionsError: If the dimensions are inconsistent.
        ValueError: If the image is empty, or the format is unknown.
        OSError: If the file cannot be written.
    """
    rgb = to_rgb8(image)
    if rgb.size == 0:
        raise ValueError("Cannot save an empty image in a raster format")

    pil_image = PILImage.fromarray(rgb)
    pil_image.save(filepath, format=format)
    logger.info("Wrote %dx%d image to %s", image.width, image.height, filepath)


def rgb_callback(image: Image) -> PixelCallback:
    """Expose an image through a generic ``(x, y) -> (r, g, b)`` callback.

    Useful for feeding encoders that pull pixels one by one.

    Raises:
        InconsistentDimensionsError: If the dimensions are inconsistent.
    """
    rgb = to_rgb8(image)

    def pixel(x: int, y: int) -> tuple[int, int, int]:
        if not (0 <= x < image.width and 0 <= y < image.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {image.width}x{image.height} image")
        r, g, b = rgb[y, x]
        return (int(r), int(g), int(b))

    return pixel
