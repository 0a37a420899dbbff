"""Raster storage primitive.

`RasterImage` is a numpy-backed pixel buffer with an immutable pixel format.
Transforms in `image_helper.ops` read their inputs through the read-only
`pixels` view and write only into buffers they allocated themselves.
"""

from __future__ import annotations

import operator
from enum import Enum
from typing import Any

import numpy as np
from PIL import Image

from image_helper.errors import AllocationFailure, InvalidArgument
from image_helper.logger import get_logger

_logger = get_logger("raster")

RGB_CHANNELS = 3
RGBA_CHANNELS = 4

_PIL_MODES = {"rgb": "RGB", "argb": "RGBA", "gray": "L", "binary": "1"}


class PixelFormat(str, Enum):
    """Supported pixel layouts.

    ARGB buffers are stored in R, G, B, A channel order; the name follows the
    colour model, not the byte order.
    """

    RGB = "rgb"
    ARGB = "argb"
    GRAY = "gray"
    BINARY = "binary"

    @property
    def has_alpha(self) -> bool:
        return self is PixelFormat.ARGB

    @property
    def channels(self) -> int:
        if self is PixelFormat.RGB:
            return RGB_CHANNELS
        if self is PixelFormat.ARGB:
            return RGBA_CHANNELS
        return 1

    @property
    def pil_mode(self) -> str:
        return _PIL_MODES[self.value]

    @property
    def dtype(self) -> Any:
        return np.bool_ if self is PixelFormat.BINARY else np.uint8

    def shape(self, width: int, height: int) -> tuple[int, ...]:
        if self.channels == 1:
            return (height, width)
        return (height, width, self.channels)


def _coerce_format(fmt: PixelFormat | str) -> PixelFormat:
    try:
        return PixelFormat(fmt)
    except ValueError as e:
        raise InvalidArgument(f"unknown pixel format: {fmt!r}") from e


def _coerce_dimension(name: str, value: Any) -> int:
    try:
        v = operator.index(value)
    except TypeError as e:
        raise InvalidArgument(f"{name} must be an integer, got {value!r}") from e
    if v <= 0:
        raise InvalidArgument(f"{name} must be positive, got {v}")
    return v


def _format_for_array(arr: np.ndarray) -> PixelFormat:
    if arr.ndim == 2:
        return PixelFormat.BINARY if arr.dtype == np.bool_ else PixelFormat.GRAY
    if arr.ndim == 3 and arr.shape[2] == RGB_CHANNELS:
        return PixelFormat.RGB
    if arr.ndim == 3 and arr.shape[2] == RGBA_CHANNELS:
        return PixelFormat.ARGB
    raise InvalidArgument(f"cannot infer pixel format from array shape {arr.shape}")


class RasterImage:
    """A width x height pixel buffer in one of the `PixelFormat` layouts."""

    __slots__ = ("_buffer", "_format", "_premultiplied")

    def __init__(self, buffer: np.ndarray, pixel_format: PixelFormat | str, alpha_premultiplied: bool = False):
        fmt = _coerce_format(pixel_format)
        if alpha_premultiplied and not fmt.has_alpha:
            raise InvalidArgument(f"alpha_premultiplied requires an alpha format, got {fmt.value}")
        if buffer.ndim < 2:
            raise InvalidArgument(f"buffer must be at least 2-D, got shape {buffer.shape}")
        height, width = buffer.shape[0], buffer.shape[1]
        if width <= 0 or height <= 0:
            raise InvalidArgument(f"image dimensions must be positive, got {width}x{height}")
        if buffer.shape != fmt.shape(width, height) or buffer.dtype != fmt.dtype:
            raise InvalidArgument(
                f"buffer {buffer.shape}/{buffer.dtype} does not match format {fmt.value} at {width}x{height}"
            )
        self._buffer = buffer
        self._format = fmt
        self._premultiplied = bool(alpha_premultiplied)

    @classmethod
    def from_array(
        cls,
        array: Any,
        pixel_format: PixelFormat | str | None = None,
        alpha_premultiplied: bool = False,
    ) -> RasterImage:
        """Build an image from a copy of `array`.

        Without `pixel_format`, a 2-D bool array is BINARY, a 2-D array is GRAY and
        (h, w, 3) / (h, w, 4) arrays are RGB / ARGB.
        """
        arr = np.asarray(array)
        fmt = _coerce_format(pixel_format) if pixel_format is not None else _format_for_array(arr)
        if fmt is PixelFormat.BINARY:
            data = arr.astype(np.bool_, copy=True)
        else:
            if arr.dtype != np.uint8:
                if not np.issubdtype(arr.dtype, np.integer) or (arr.size and (arr.min() < 0 or arr.max() > 255)):
                    raise InvalidArgument(f"pixel values must be uint8-compatible, got dtype {arr.dtype}")
            data = arr.astype(np.uint8, copy=True)
        return cls(np.ascontiguousarray(data), fmt, alpha_premultiplied)

    @classmethod
    def from_pil(
        cls,
        pil_image: Image.Image,
        pixel_format: PixelFormat | str,
        alpha_premultiplied: bool = False,
    ) -> RasterImage:
        """Copy a Pillow image into a new RasterImage, converting it to `pixel_format`.

        Colour to BINARY goes through luma and a plain 128 threshold (no dithering).
        """
        fmt = _coerce_format(pixel_format)
        mode = "RGBa" if alpha_premultiplied and fmt.has_alpha else fmt.pil_mode
        converted = pil_image
        if fmt is PixelFormat.BINARY and converted.mode != "1":
            converted = converted.convert("L").convert("1", dither=Image.Dither.NONE)
        elif mode == "RGBa" and converted.mode != "RGBa":
            converted = converted.convert("RGBA").convert("RGBa")
        elif converted.mode != mode:
            converted = converted.convert(mode)

        w, h = converted.size
        raw = np.frombuffer(converted.tobytes(), dtype=np.uint8)
        if fmt is PixelFormat.BINARY:
            data = np.unpackbits(raw.reshape(h, -1), axis=1)[:, :w].astype(np.bool_)
        else:
            data = raw.reshape(fmt.shape(w, h)).copy()
        return cls(np.ascontiguousarray(data), fmt, alpha_premultiplied)

    def to_pil(self) -> Image.Image:
        """Pillow copy of the pixels. Premultiplied ARGB comes back as straight RGBA."""
        if self._premultiplied:
            return Image.frombytes("RGBa", self.size, self._buffer.tobytes()).convert("RGBA")
        return Image.frombytes(self._format.pil_mode, self.size, self.to_bytes())

    # -- queries -------------------------------------------------------
    @property
    def width(self) -> int:
        return int(self._buffer.shape[1])

    @property
    def height(self) -> int:
        return int(self._buffer.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def pixel_format(self) -> PixelFormat:
        return self._format

    @property
    def has_alpha(self) -> bool:
        return self._format.has_alpha

    @property
    def alpha_premultiplied(self) -> bool:
        return self._premultiplied

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the pixel buffer."""
        view = self._buffer.view()
        view.flags.writeable = False
        return view

    @property
    def buffer(self) -> np.ndarray:
        """Live, writable pixel storage. Shared with this image only."""
        return self._buffer

    def copy_data(self) -> np.ndarray:
        return self._buffer.copy()

    def to_bytes(self) -> bytes:
        """Packed buffer: one byte per sample, or MSB-first packed bits per row for BINARY."""
        if self._format is PixelFormat.BINARY:
            return np.packbits(self._buffer, axis=1).tobytes()
        return self._buffer.tobytes()

    # -- pixel access --------------------------------------------------
    def _check_xy(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidArgument(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")

    def get_pixel(self, x: int, y: int) -> int | tuple[int, ...]:
        self._check_xy(x, y)
        value = self._buffer[y, x]
        if self._format.channels == 1:
            return int(value)
        return tuple(int(v) for v in value)

    def set_pixel(self, x: int, y: int, value: int | tuple[int, ...]) -> None:
        self._check_xy(x, y)
        if self._format.channels == 1:
            if not isinstance(value, (int, np.integer, bool, np.bool_)):
                raise InvalidArgument(f"{self._format.value} pixel must be a scalar, got {value!r}")
            self._buffer[y, x] = bool(value) if self._format is PixelFormat.BINARY else int(value)
            return
        vals = tuple(value) if not isinstance(value, (int, np.integer)) else ()
        if len(vals) != self._format.channels:
            raise InvalidArgument(f"{self._format.value} pixel needs {self._format.channels} channels, got {value!r}")
        self._buffer[y, x] = vals

    # -- dunder --------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return (
            self._format is other._format
            and self._premultiplied == other._premultiplied
            and self._buffer.shape == other._buffer.shape
            and bool(np.array_equal(self._buffer, other._buffer))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        extra = ", premultiplied" if self._premultiplied else ""
        return f"RasterImage({self.width}x{self.height}, {self._format.value}{extra})"


def allocate(
    width: int,
    height: int,
    pixel_format: PixelFormat | str = PixelFormat.RGB,
    alpha_premultiplied: bool = False,
) -> RasterImage:
    """Allocate a zero-filled image.

    Zero means black for RGB/GRAY/BINARY and transparent black for ARGB.
    """
    fmt = _coerce_format(pixel_format)
    w, h = check_dimensions(width, height)
    try:
        buf = np.zeros(fmt.shape(w, h), dtype=fmt.dtype)
    except (MemoryError, ValueError) as e:
        _logger.error("allocation of %dx%d %s failed: %s", w, h, fmt.value, e)
        raise AllocationFailure(f"cannot allocate {w}x{h} {fmt.value} image") from e
    return RasterImage(buf, fmt, alpha_premultiplied)


def check_dimensions(width: Any, height: Any) -> tuple[int, int]:
    """Validate a target size; raises InvalidArgument unless both are positive integers."""
    return _coerce_dimension("width", width), _coerce_dimension("height", height)


def opaque_or_alpha_format(image: RasterImage) -> PixelFormat:
    """RGB for images without an alpha channel, ARGB otherwise."""
    return PixelFormat.ARGB if image.has_alpha else PixelFormat.RGB
