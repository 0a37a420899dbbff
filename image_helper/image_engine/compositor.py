"""Compositing primitive: draw one RasterImage into another under an affine transform.

Resampling and blending are delegated to Pillow: the source is warped with
`Image.transform(..., Image.Transform.AFFINE, ...)` (Pillow maps destination pixel
centres back through the inverse matrix and premultiplies RGBA for bicubic
sampling) and composited source-over with `Image.alpha_composite`. Points
outside the source rectangle stay transparent and leave the destination
untouched.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from PIL import Image

from image_helper.errors import InvalidArgument
from image_helper.logger import get_logger

from .raster import RasterImage

_logger = get_logger("compositor")

TRANSPARENT = (0, 0, 0, 0)


class Interpolation(str, Enum):
    NEAREST = "nearest"
    BICUBIC = "bicubic"

    @property
    def resampling(self) -> Image.Resampling:
        if self is Interpolation.NEAREST:
            return Image.Resampling.NEAREST
        return Image.Resampling.BICUBIC


@dataclass(frozen=True)
class AffineTransform:
    """2x3 affine matrix: x' = a*x + b*y + c, y' = d*x + e*y + f.

    Builder methods concatenate on the right like Java2D/Qt painters:
    `t.translate(...).rotate(...)` rotates first, then translates.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 1.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> AffineTransform:
        return cls(c=float(tx), f=float(ty))

    @classmethod
    def scaling(cls, sx: float, sy: float) -> AffineTransform:
        return cls(a=float(sx), e=float(sy))

    @classmethod
    def rotation(cls, theta: float, cx: float = 0.0, cy: float = 0.0) -> AffineTransform:
        """Rotation by `theta` radians about (cx, cy)."""
        cos, sin = math.cos(theta), math.sin(theta)
        rot = cls(a=cos, b=-sin, d=sin, e=cos)
        if cx == 0 and cy == 0:
            return rot
        return cls.translation(cx, cy).then(rot).then(cls.translation(-cx, -cy))

    def then(self, other: AffineTransform) -> AffineTransform:
        """Return self * other, i.e. `other` is applied to points first."""
        return AffineTransform(
            a=self.a * other.a + self.b * other.d,
            b=self.a * other.b + self.b * other.e,
            c=self.a * other.c + self.b * other.f + self.c,
            d=self.d * other.a + self.e * other.d,
            e=self.d * other.b + self.e * other.e,
            f=self.d * other.c + self.e * other.f + self.f,
        )

    def translate(self, tx: float, ty: float) -> AffineTransform:
        return self.then(AffineTransform.translation(tx, ty))

    def scale(self, sx: float, sy: float) -> AffineTransform:
        return self.then(AffineTransform.scaling(sx, sy))

    def rotate(self, theta: float, cx: float = 0.0, cy: float = 0.0) -> AffineTransform:
        return self.then(AffineTransform.rotation(theta, cx, cy))

    @property
    def determinant(self) -> float:
        return self.a * self.e - self.b * self.d

    def inverse(self) -> AffineTransform:
        det = self.determinant
        if det == 0 or not math.isfinite(det):
            raise InvalidArgument(f"transform is not invertible: {self}")
        return AffineTransform(
            a=self.e / det,
            b=-self.b / det,
            c=(self.b * self.f - self.e * self.c) / det,
            d=-self.d / det,
            e=self.a / det,
            f=(self.d * self.c - self.a * self.f) / det,
        )

    def apply(self, x, y):
        """Map points (scalars or numpy arrays) through the transform."""
        return self.a * x + self.b * y + self.c, self.d * x + self.e * y + self.f


    @property
    def coefficients(self) -> tuple[float, float, float, float, float, float]:
        """(a, b, c, d, e, f), the data layout of Pillow's AFFINE transform."""
        return self.a, self.b, self.c, self.d, self.e, self.f


def _commit(dest: RasterImage, composed: Image.Image) -> None:
    """Write a Pillow image back into `dest`'s buffer in `dest`'s own format."""
    converted = RasterImage.from_pil(composed, dest.pixel_format, dest.alpha_premultiplied)
    dest.buffer[...] = converted.pixels


def paint(
    dest: RasterImage,
    source: RasterImage,
    transform: AffineTransform | None = None,
    interpolation: Interpolation | str = Interpolation.BICUBIC,
) -> None:
    """Draw `source` into `dest` (in place) under `transform` with source-over blending.

    `transform` maps source coordinates to destination coordinates. `source` is only read.
    """
    interp = Interpolation(interpolation)
    inv = (transform or AffineTransform.identity()).inverse()

    layer = source.to_pil().convert("RGBA").transform(
        dest.size,
        Image.Transform.AFFINE,
        inv.coefficients,
        resample=interp.resampling,
        fillcolor=TRANSPARENT,
    )
    if layer.getextrema()[3][1] == 0:
        _logger.debug("paint: source %s does not cover %s", source, dest)
        return
    _commit(dest, Image.alpha_composite(dest.to_pil().convert("RGBA"), layer))


def fill(
    dest: RasterImage,
    color: Sequence[int],
    rect: tuple[int, int, int, int] | None = None,
) -> None:
    """Replace pixels of `dest` inside `rect` (x, y, w, h; whole image if None) with `color`.

    `color` is (r, g, b) or (r, g, b, a) with straight alpha. The rectangle is clipped.
    """
    if len(color) not in (3, 4):
        raise InvalidArgument(f"color must have 3 or 4 components, got {color!r}")
    rgba = tuple(int(c) for c in color) + ((255,) if len(color) == 3 else ())

    box = (0, 0, dest.width, dest.height)
    if rect is not None:
        x, y, w, h = rect
        box = (max(0, x), max(0, y), min(dest.width, x + w), min(dest.height, y + h))
        if box[0] >= box[2] or box[1] >= box[3]:
            return
    canvas = dest.to_pil().convert("RGBA")
    canvas.paste(rgba, box)
    _commit(dest, canvas)
