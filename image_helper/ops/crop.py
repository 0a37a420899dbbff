"""Sub-image extraction."""

from __future__ import annotations

from image_helper.errors import InvalidArgument
from image_helper.image_engine.raster import RasterImage, opaque_or_alpha_format
from image_helper.logger import get_logger

_logger = get_logger("crop")


def validate_crop_bounds(img_width: int, img_height: int, crop: tuple[int, int, int, int]) -> bool:
    """Check that crop (left, top, width, height) lies fully inside the image."""
    left, top, width, height = crop
    if left < 0 or top < 0:
        return False
    if width <= 0 or height <= 0:
        return False
    return left + width <= img_width and top + height <= img_height


def subregion(image: RasterImage, x: int, y: int, width: int, height: int) -> RasterImage:
    """Copy the `width` x `height` region at (`x`, `y`) into a new image.

    The result is RGB, or ARGB when `image` has alpha, whatever the source format.
    It does not share storage with `image`.

    Raises:
        InvalidArgument: if the region is empty or not fully inside `image`.
    """
    crop = (x, y, width, height)
    if not validate_crop_bounds(image.width, image.height, crop):
        raise InvalidArgument(f"crop {crop} outside {image.width}x{image.height} image")

    fmt = opaque_or_alpha_format(image)
    region = image.to_pil().convert(fmt.pil_mode).crop((x, y, x + width, y + height)).copy()
    out = RasterImage.from_pil(region, fmt)
    _logger.debug("cropped %s at %s -> %s", image, crop, out)
    return out
