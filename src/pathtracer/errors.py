"""Exception types raised by the renderer.

Parameter validation elsewhere in the package raises plain ``ValueError``
and capacity overflow raises ``RuntimeError``. The classes below cover the
conditions callers are expected to handle explicitly.
"""


class RenderError(Exception):
    """Base class for renderer errors."""


class InconsistentDimensionsError(RenderError):
    """The pixel buffer length does not match ``width * height``.

    Raised immediately before an image is encoded, before any file is
    opened.

    Attributes:
        height: Image height at the time of the check.
        width: Image width at the time of the check.
        pixel_count: Number of pixels actually held by the buffer.
    """

    def __init__(self, height: int, width: int, pixel_count: int) -> None:
        self.height = height
        self.width = width
        self.pixel_count = pixel_count
        super().__init__(
            f"The size {height}*{width} does not equal the number of pixels {pixel_count}"
        )


class DegenerateGeometryError(RenderError, ValueError):
    """Geometry that cannot produce a valid frame (e.g. zero-length view direction)."""


class RenderCancelledError(RenderError):
    """A render was stopped by its cancellation check.

    Attributes:
        rows_completed: Number of image rows finished before cancellation.
        total_rows: Total number of rows in the image.
    """

    def __init__(self, rows_completed: int, total_rows: int) -> None:
        self.rows_completed = rows_completed
        self.total_rows = total_rows
        super().__init__(f"Render cancelled after {rows_completed}/{total_rows} rows")
