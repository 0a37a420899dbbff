"""Image Engine - raster storage, compositing and the transform facade.

Usage:
    from image_helper.image_engine import ImageTransformEngine, allocate, PixelFormat

    engine = ImageTransformEngine()
    img = allocate(64, 48, PixelFormat.ARGB)
    rotated = engine.rotate(img, 30.0)
"""

from .compositor import AffineTransform, Interpolation, fill, paint
from .engine import ImageTransformEngine
from .raster import PixelFormat, RasterImage, allocate

__all__ = [
    "AffineTransform",
    "ImageTransformEngine",
    "Interpolation",
    "PixelFormat",
    "RasterImage",
    "allocate",
    "fill",
    "paint",
]
