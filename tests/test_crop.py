import numpy as np
import pytest

from image_helper.errors import InvalidArgument
from image_helper.image_engine.raster import PixelFormat, RasterImage, allocate
from image_helper.ops.crop import subregion, validate_crop_bounds


def test_validate_crop_bounds():
    # Test valid crop bounds
    assert validate_crop_bounds(400, 300, (50, 50, 100, 100)) is True
    assert validate_crop_bounds(100, 100, (0, 0, 50, 50)) is True
    assert validate_crop_bounds(100, 100, (0, 0, 100, 100)) is True

    # Test invalid crop bounds
    assert validate_crop_bounds(400, 300, (-10, 50, 100, 100)) is False  # negative left
    assert validate_crop_bounds(400, 300, (50, -10, 100, 100)) is False  # negative top
    assert validate_crop_bounds(400, 300, (50, 50, 0, 100)) is False  # zero width
    assert validate_crop_bounds(400, 300, (50, 50, 100, 0)) is False  # zero height
    assert validate_crop_bounds(400, 300, (350, 50, 100, 100)) is False  # exceeds width
    assert validate_crop_bounds(400, 300, (50, 250, 100, 100)) is False  # exceeds height


def _ramp(width, height):
    arr = np.arange(width * height * 3, dtype=np.uint32).reshape(height, width, 3) % 256
    return RasterImage.from_array(arr.astype(np.uint8))


def test_subregion_copies_pixels():
    img = _ramp(6, 5)
    out = subregion(img, 2, 1, 3, 2)
    assert out.size == (3, 2)
    assert np.array_equal(out.pixels, img.pixels[1:3, 2:5])


def test_subregion_does_not_share_storage():
    img = _ramp(4, 4)
    out = subregion(img, 0, 0, 2, 2)
    out.set_pixel(0, 0, (1, 1, 1))
    assert img.get_pixel(0, 0) == (0, 1, 2)
    assert not np.shares_memory(out.buffer, img.buffer)


def test_subregion_normalizes_format():
    gray = allocate(4, 4, PixelFormat.GRAY)
    gray.buffer[...] = 77
    out = subregion(gray, 1, 1, 2, 2)
    assert out.pixel_format is PixelFormat.RGB
    assert out.get_pixel(0, 0) == (77, 77, 77)

    binary = allocate(4, 4, PixelFormat.BINARY)
    assert subregion(binary, 0, 0, 1, 1).pixel_format is PixelFormat.RGB

    argb = allocate(4, 4, PixelFormat.ARGB)
    argb.buffer[...] = (10, 20, 30, 255)
    out = subregion(argb, 2, 2, 2, 2)
    assert out.pixel_format is PixelFormat.ARGB
    assert out.get_pixel(1, 1) == (10, 20, 30, 255)


@pytest.mark.parametrize(
    "region",
    [(-1, 0, 2, 2), (0, -1, 2, 2), (3, 0, 2, 2), (0, 3, 2, 2), (0, 0, 0, 2), (0, 0, 2, 0), (0, 0, 5, 1)],
)
def test_subregion_out_of_bounds_fails_fast(region):
    with pytest.raises(InvalidArgument):
        subregion(_ramp(4, 4), *region)
