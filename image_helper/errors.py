"""Exception types raised by the transforms.

Clipboard problems are never raised; `read_clipboard_image` reports them as None.
"""


class ImageHelperError(Exception):
    """Base class for all image_helper errors."""


class InvalidArgument(ImageHelperError, ValueError):
    """Non-positive dimensions, out-of-range crop regions, unknown pixel formats."""


class UnsupportedPayload(ImageHelperError, TypeError):
    """A renderable wraps something that is not a materialized RasterImage."""


class AllocationFailure(ImageHelperError, MemoryError):
    """The backing pixel buffer could not be created."""
