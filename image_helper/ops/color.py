"""Colour-space reductions: binary, grayscale, alpha removal and inversion."""

from __future__ import annotations

import warnings

import numpy as np
from PIL import Image

from image_helper.image_engine.raster import PixelFormat, RasterImage
from image_helper.logger import get_logger

_logger = get_logger("color")

WHITE = (255, 255, 255)

# index -> 255 - index; shared, never written
INVERT_TABLE = np.arange(255, -1, -1, dtype=np.uint8)
INVERT_TABLE.flags.writeable = False


def to_grayscale(image: RasterImage) -> RasterImage:
    """Return an 8-bit grayscale copy using ITU-R 601-2 luma weights.

    Alpha is dropped; the result is always opaque.
    """
    if image.pixel_format is PixelFormat.GRAY:
        return RasterImage(image.copy_data(), PixelFormat.GRAY)
    return RasterImage.from_pil(image.to_pil().convert("L"), PixelFormat.GRAY)


def to_binary(image: RasterImage, dither: bool = True) -> RasterImage:
    """Return a 1-bit black/white rendition of `image`.

    With `dither`, Floyd-Steinberg error diffusion is applied to the luma image;
    otherwise luma values of 128 and above become white. Output is deterministic.
    """
    if image.pixel_format is PixelFormat.BINARY:
        return RasterImage(image.copy_data(), PixelFormat.BINARY)

    gray = image.to_pil().convert("L")
    mode = Image.Dither.FLOYDSTEINBERG if dither else Image.Dither.NONE
    bw = gray.convert("1", dither=mode)
    _logger.debug("binarized %s (dither=%s)", image, dither)
    return RasterImage.from_pil(bw, PixelFormat.BINARY)


def convert_image_2_binary(image: RasterImage) -> RasterImage:
    """Deprecated: use `to_binary`."""
    warnings.warn(
        "convert_image_2_binary is deprecated, use to_binary instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return to_binary(image)


def remove_alpha(image: RasterImage) -> RasterImage:
    """Flatten `image` onto white.

    Images without an alpha channel are returned as-is (same instance).
    """
    if not image.has_alpha:
        return image

    canvas = Image.new("RGBA", image.size, WHITE + (255,))
    flattened = Image.alpha_composite(canvas, image.to_pil().convert("RGBA")).convert("RGB")
    return RasterImage.from_pil(flattened, PixelFormat.RGB)


def invert(image: RasterImage) -> RasterImage:
    """Invert colour channels through `INVERT_TABLE`; alpha is passed through.

    The pixel format and the premultiplied flag are preserved; premultiplied colour
    samples go through the table like straight ones.
    """
    px = image.pixels
    fmt = image.pixel_format
    if fmt is PixelFormat.BINARY:
        out = ~px
    elif fmt is PixelFormat.ARGB:
        out = np.empty_like(px)
        out[..., :3] = INVERT_TABLE[px[..., :3]]
        out[..., 3] = px[..., 3]
    else:
        out = INVERT_TABLE[px]
    return RasterImage(np.ascontiguousarray(out), fmt, image.alpha_premultiplied)
