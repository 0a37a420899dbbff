"""Clipboard access.

The system clipboard is reached through a `ClipboardService` so callers (and tests)
can inject their own. `QtClipboardService` is the PySide6-backed implementation;
PySide6 is imported lazily so the rest of the package works without Qt.
"""

from __future__ import annotations

from typing import Any, Protocol

import numpy as np

from image_helper.image_engine.raster import RGB_CHANNELS, RGBA_CHANNELS, PixelFormat, RasterImage
from image_helper.logger import get_logger

_logger = get_logger("clipboard")


class ClipboardService(Protocol):
    def get_image_data(self) -> Any:
        """Return the clipboard's image content, or None when there is none."""
        ...


def qimage_to_raster(qimage: Any) -> RasterImage | None:
    """Copy a QImage into a RasterImage (ARGB, GRAY or RGB). Null images give None."""
    from PySide6.QtGui import QImage

    if qimage is None or qimage.isNull():
        return None

    if qimage.hasAlphaChannel():
        qt_format, pixel_format, channels = QImage.Format.Format_RGBA8888, PixelFormat.ARGB, RGBA_CHANNELS
    elif qimage.isGrayscale():
        qt_format, pixel_format, channels = QImage.Format.Format_Grayscale8, PixelFormat.GRAY, 1
    else:
        qt_format, pixel_format, channels = QImage.Format.Format_RGB888, PixelFormat.RGB, RGB_CHANNELS

    converted = qimage.convertToFormat(qt_format)
    width, height = converted.width(), converted.height()
    bytes_per_line = converted.bytesPerLine()
    # Rows are padded to 32-bit boundaries; drop the padding
    rows = np.frombuffer(converted.constBits(), dtype=np.uint8, count=bytes_per_line * height)
    rows = rows.reshape(height, bytes_per_line)[:, : width * channels]
    shape = (height, width) if channels == 1 else (height, width, channels)
    return RasterImage(rows.reshape(shape).copy(), pixel_format)


class QtClipboardService:
    """`ClipboardService` backed by `QGuiApplication.clipboard()`."""

    def get_image_data(self) -> RasterImage | None:
        from PySide6.QtGui import QGuiApplication

        if QGuiApplication.instance() is None:
            _logger.warning("clipboard unavailable: no Qt application instance")
            return None

        cb = QGuiApplication.clipboard()
        if cb is None:
            _logger.warning("clipboard unavailable")
            return None
        return qimage_to_raster(cb.image())


def read_clipboard_image(clipboard_service: ClipboardService | None = None) -> RasterImage | None:
    """Return the clipboard image, or None.

    Empty clipboard, non-image content and any failure while reading all give None.
    """
    service = clipboard_service if clipboard_service is not None else QtClipboardService()
    try:
        data = service.get_image_data()
    except Exception as e:
        _logger.debug("clipboard read failed: %s", e)
        return None
    if not isinstance(data, RasterImage):
        if data is not None:
            _logger.debug("clipboard holds non-raster content: %s", type(data).__name__)
        return None
    return data
