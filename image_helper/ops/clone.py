from __future__ import annotations

from image_helper.image_engine.raster import RasterImage


def clone(image: RasterImage) -> RasterImage:
    """Deep copy: same format and premultiplication flag, no shared storage."""
    return RasterImage(image.copy_data(), image.pixel_format, image.alpha_premultiplied)
