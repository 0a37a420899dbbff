import numpy as np
import pytest

from image_helper.image_engine.raster import PixelFormat, RasterImage, allocate
from image_helper.ops.clipboard import QtClipboardService, read_clipboard_image


class FakeClipboard:
    def __init__(self, data=None, error: Exception | None = None):
        self.data = data
        self.error = error
        self.calls = 0

    def get_image_data(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.data


def test_returns_clipboard_image():
    img = allocate(3, 2, PixelFormat.ARGB)
    service = FakeClipboard(img)
    assert read_clipboard_image(service) is img
    assert service.calls == 1


def test_empty_clipboard_gives_none():
    assert read_clipboard_image(FakeClipboard(None)) is None


def test_non_image_content_gives_none():
    assert read_clipboard_image(FakeClipboard("some text")) is None


@pytest.mark.parametrize("error", [PermissionError("denied"), RuntimeError("service gone"), ValueError("flavor")])
def test_read_failures_collapse_to_none(error):
    assert read_clipboard_image(FakeClipboard(error=error)) is None


# ---------- Qt-backed service ----------
def _to_qimage(image):
    from PySide6.QtGui import QImage

    qt_format = {
        PixelFormat.ARGB: QImage.Format.Format_RGBA8888,
        PixelFormat.RGB: QImage.Format.Format_RGB888,
        PixelFormat.GRAY: QImage.Format.Format_Grayscale8,
    }[image.pixel_format]
    arr = image.copy_data()
    # .copy() detaches the QImage from the numpy buffer
    return QImage(arr.data, image.width, image.height, arr.strides[0], qt_format).copy()


def _colourful(width, height, channels, seed=5):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)


@pytest.mark.parametrize(
    "array",
    [
        _colourful(5, 3, 3),
        _colourful(4, 4, 4),
        np.arange(15, dtype=np.uint8).reshape(3, 5),
    ],
    ids=["rgb", "argb", "gray"],
)
def test_qimage_round_trip(array):
    pytest.importorskip("PySide6.QtGui")
    from image_helper.ops.clipboard import qimage_to_raster

    img = RasterImage.from_array(array)
    back = qimage_to_raster(_to_qimage(img))
    assert back == img


def test_null_qimage_gives_none():
    QtGui = pytest.importorskip("PySide6.QtGui")
    from image_helper.ops.clipboard import qimage_to_raster

    assert qimage_to_raster(QtGui.QImage()) is None


def test_qt_clipboard_service_reads_system_clipboard():
    QtGui = pytest.importorskip("PySide6.QtGui")
    if QtGui.QGuiApplication.instance() is None:
        pytest.skip("no Qt application")
    cb = QtGui.QGuiApplication.clipboard()
    if cb is None:
        pytest.skip("clipboard unavailable")

    img = RasterImage.from_array(_colourful(6, 4, 3))
    cb.setImage(_to_qimage(img))
    try:
        assert read_clipboard_image(QtClipboardService()) == img
    finally:
        cb.clear()
    assert read_clipboard_image(QtClipboardService()) is None


def test_qimage_conversion_is_not_exported():
    import image_helper
    import image_helper.ops.clipboard as clipboard

    assert not hasattr(clipboard, "raster_to_qimage")
    assert "raster_to_qimage" not in image_helper.__all__
