"""Stateless raster-image transforms.

Scale, crop, binarize, grayscale, alpha removal, inversion, rotation, cloning and
clipboard reads over numpy-backed `RasterImage` values.
"""

from .errors import AllocationFailure, ImageHelperError, InvalidArgument, UnsupportedPayload
from .image_engine import (
    AffineTransform,
    ImageTransformEngine,
    Interpolation,
    PixelFormat,
    RasterImage,
    allocate,
)
from .ops import (
    INVERT_TABLE,
    ClipboardService,
    QtClipboardService,
    ScaledRenderable,
    clone,
    convert_image_2_binary,
    invert,
    read_clipboard_image,
    remove_alpha,
    rotate,
    rotated_bounds,
    scale_renderable,
    scale_to_size,
    subregion,
    to_binary,
    to_grayscale,
    validate_crop_bounds,
)

__all__ = [
    "INVERT_TABLE",
    "AffineTransform",
    "AllocationFailure",
    "ClipboardService",
    "ImageHelperError",
    "ImageTransformEngine",
    "Interpolation",
    "InvalidArgument",
    "PixelFormat",
    "QtClipboardService",
    "RasterImage",
    "ScaledRenderable",
    "UnsupportedPayload",
    "allocate",
    "clone",
    "convert_image_2_binary",
    "invert",
    "read_clipboard_image",
    "remove_alpha",
    "rotate",
    "rotated_bounds",
    "scale_renderable",
    "scale_to_size",
    "subregion",
    "to_binary",
    "to_grayscale",
    "validate_crop_bounds",
]
