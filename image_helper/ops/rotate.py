"""Rotation about the image centre into the minimal axis-aligned bounding box."""

from __future__ import annotations

import math

from image_helper.errors import InvalidArgument
from image_helper.image_engine.compositor import AffineTransform, Interpolation, paint
from image_helper.image_engine.raster import RasterImage, allocate
from image_helper.logger import get_logger

_logger = get_logger("rotate")


def rotated_bounds(width: int, height: int, angle_degrees: float) -> tuple[int, int]:
    """Size of the smallest axis-aligned box holding a width x height rect rotated by the angle."""
    if not math.isfinite(angle_degrees):
        raise InvalidArgument(f"rotation angle must be finite, got {angle_degrees!r}")
    theta = math.radians(angle_degrees)
    sin = abs(math.sin(theta))
    cos = abs(math.cos(theta))
    new_w = int(math.floor(width * cos + height * sin))
    new_h = int(math.floor(height * cos + width * sin))
    return new_w, new_h


def rotate(
    image: RasterImage,
    angle_degrees: float,
    interpolation: Interpolation | str = Interpolation.BICUBIC,
) -> RasterImage:
    """Rotate `image` by `angle_degrees` (clockwise on screen, y axis pointing down).

    The output keeps the input's pixel format and grows to the rotated bounding box.
    Uncovered corners keep the zero fill: transparent for ARGB, black otherwise.
    The offset and pivot are whole pixels (halves truncated toward zero), so odd size
    differences shift the content by up to one pixel toward the top-left.

    Raises:
        InvalidArgument: if `angle_degrees` is NaN or infinite.
    """
    w, h = image.width, image.height
    new_w, new_h = rotated_bounds(w, h, angle_degrees)
    out = allocate(new_w, new_h, image.pixel_format, image.alpha_premultiplied)

    theta = math.radians(angle_degrees)
    transform = (
        AffineTransform.identity()
        .translate(int((new_w - w) / 2), int((new_h - h) / 2))
        .rotate(theta, w // 2, h // 2)
    )
    paint(out, image, transform, interpolation)
    _logger.debug("rotated %s by %.3f deg -> %s", image, angle_degrees, out)
    return out
