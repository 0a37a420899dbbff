"""Scaling helpers.

Scaling always normalizes the pixel format: images without alpha come back as RGB,
images with alpha as ARGB. GRAY and BINARY inputs are widened.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from image_helper.errors import UnsupportedPayload
from image_helper.image_engine.compositor import Interpolation
from image_helper.image_engine.raster import RasterImage, check_dimensions, opaque_or_alpha_format
from image_helper.logger import get_logger

_logger = get_logger("scale")

IDENTITY_SCALE_TOLERANCE = 0.001


@dataclass
class ScaledRenderable:
    """A renderable paired with auxiliary data that scaling carries but never uses.

    Fields:
        image: The wrapped renderable; only a `RasterImage` can be scaled.
        thumbnails: Preview images attached to the renderable.
        metadata: Free-form metadata attached to the renderable.
    """

    image: Any
    thumbnails: list[Any] = field(default_factory=list)
    metadata: dict[str, Any] | None = None


def scale_to_size(
    image: RasterImage,
    target_width: int,
    target_height: int,
    interpolation: Interpolation | str = Interpolation.BICUBIC,
) -> RasterImage:
    """Stretch `image` onto a new `target_width` x `target_height` image.

    The aspect ratio is not preserved.
    """
    size = check_dimensions(target_width, target_height)
    fmt = opaque_or_alpha_format(image)
    resized = image.to_pil().convert(fmt.pil_mode).resize(size, Interpolation(interpolation).resampling)
    out = RasterImage.from_pil(resized, fmt)
    _logger.debug("scaled %s -> %s", image, out)
    return out


def scale_renderable(
    renderable: ScaledRenderable,
    scale: float,
    interpolation: Interpolation | str = Interpolation.BICUBIC,
    tolerance: float = IDENTITY_SCALE_TOLERANCE,
) -> ScaledRenderable:
    """Scale the raster inside `renderable` by `scale`.

    Returns `renderable` itself when `scale` is within `tolerance` of 1.0. Otherwise
    the result carries no thumbnails or metadata.

    Raises:
        UnsupportedPayload: if the wrapped image is not a `RasterImage`.
    """
    source = renderable.image
    if not isinstance(source, RasterImage):
        raise UnsupportedPayload(
            f"renderable must wrap a RasterImage, got {type(source).__name__}"
        )

    if abs(scale - 1.0) < tolerance:
        return renderable

    target = scale_to_size(source, int(scale * source.width), int(scale * source.height), interpolation)
    return ScaledRenderable(target)
