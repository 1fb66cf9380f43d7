"""Image buffer filled by the render loop.

The buffer stores one linear RGB triple per pixel in a flat array of
``width * height`` entries, row-major with rows ordered top-to-bottom. The
same order is used by every encoder, so no vertical flip happens anywhere.

Example:
    >>> from pathtracer.core.image import Image
    >>> img = Image(width=4, height=2)
    >>> img.set_pixel(3, 1, (1.0, 0.5, 0.25))
    >>> img.pixel_count
    8
"""

import numpy as np
import numpy.typing as npt

from pathtracer.errors import InconsistentDimensionsError

# Linear RGB color, each channel in [0, inf)
Color = tuple[float, float, float]


class Image:
    """A width x height grid of linear RGB colors.

    ``width`` and ``height`` are plain attributes and may be changed after
    construction; :meth:`check_dimensions` detects the resulting mismatch.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Float64 array of shape (pixel_count, 3).
    """

    def __init__(
        self,
        width: int,
        height: int,
        pixels: npt.ArrayLike | None = None,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        if pixels is None:
            self.pixels = np.zeros((width * height, 3), dtype=np.float64)
        else:
            self.pixels = np.asarray(pixels, dtype=np.float64).reshape(-1, 3)

    @classmethod
    def from_array(cls, array: npt.NDArray[np.floating]) -> "Image":
        """Build an image from an array of shape (height, width, 3)."""
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (H, W, 3), got {array.shape}")
        height, width = array.shape[0], array.shape[1]
        return cls(width, height, array.reshape(height * width, 3))

    @property
    def pixel_count(self) -> int:
        """Number of pixels held by the buffer."""
        return int(self.pixels.shape[0])

    def check_dimensions(self) -> None:
        """Verify that the buffer holds exactly width * height pixels.

        Raises:
            InconsistentDimensionsError: If the counts differ.
        """
        if self.width * self.height != self.pixel_count:
            raise InconsistentDimensionsError(
                height=self.height,
                width=self.width,
                pixel_count=self.pixel_count,
            )

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> Color:
        """Get the color at column x, row y (row 0 is the top row)."""
        r, g, b = self.pixels[self._index(x, y)]
        return (float(r), float(g), float(b))

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the color at column x, row y (row 0 is the top row)."""
        self.pixels[self._index(x, y)] = color

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return the pixels as an array of shape (height, width, 3).

        Raises:
            InconsistentDimensionsError: If the buffer length is inconsistent.
        """
        self.check_dimensions()
        return self.pixels.reshape(self.height, self.width, 3)

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height}, pixels={self.pixel_count})"
