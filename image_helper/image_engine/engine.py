"""Image Transform Engine - facade over the transform functions.

`ImageTransformEngine` holds no image state. It only carries the injected
collaborators (settings and clipboard service) and fills in configured
defaults before delegating to `image_helper.ops`.
"""

from __future__ import annotations

from image_helper.logger import get_logger
from image_helper.ops.clipboard import ClipboardService, QtClipboardService, read_clipboard_image
from image_helper.ops.clone import clone
from image_helper.ops.color import invert, remove_alpha, to_binary, to_grayscale
from image_helper.ops.crop import subregion
from image_helper.ops.rotate import rotate
from image_helper.ops.scale import ScaledRenderable, scale_renderable, scale_to_size
from image_helper.settings_manager import SettingsManager

from .compositor import Interpolation
from .raster import RasterImage

_logger = get_logger("engine")


class ImageTransformEngine:
    """Single entry point for raster transforms and clipboard reads.

    Explicit keyword arguments always win over values from `settings`.
    """

    def __init__(self, settings: SettingsManager | None = None, clipboard_service: ClipboardService | None = None):
        self._settings = settings if settings is not None else SettingsManager()
        self._clipboard = clipboard_service if clipboard_service is not None else QtClipboardService()

    @property
    def settings(self) -> SettingsManager:
        return self._settings

    def _interpolation(self, interpolation: Interpolation | str | None) -> Interpolation:
        if interpolation is None:
            return self._settings.interpolation
        return Interpolation(interpolation)

    # -- geometry ------------------------------------------------------
    def scale_to_size(
        self,
        image: RasterImage,
        target_width: int,
        target_height: int,
        interpolation: Interpolation | str | None = None,
    ) -> RasterImage:
        return scale_to_size(image, target_width, target_height, self._interpolation(interpolation))

    def scale_renderable(
        self,
        renderable: ScaledRenderable,
        factor: float,
        interpolation: Interpolation | str | None = None,
    ) -> ScaledRenderable:
        return scale_renderable(
            renderable,
            factor,
            self._interpolation(interpolation),
            tolerance=self._settings.scale_identity_tolerance,
        )

    def subregion(self, image: RasterImage, x: int, y: int, width: int, height: int) -> RasterImage:
        return subregion(image, x, y, width, height)

    def rotate(
        self,
        image: RasterImage,
        angle_degrees: float,
        interpolation: Interpolation | str | None = None,
    ) -> RasterImage:
        return rotate(image, angle_degrees, self._interpolation(interpolation))

    # -- colour --------------------------------------------------------
    def to_binary(self, image: RasterImage, dither: bool | None = None) -> RasterImage:
        if dither is None:
            dither = self._settings.binary_dither
        return to_binary(image, dither=dither)

    def to_grayscale(self, image: RasterImage) -> RasterImage:
        return to_grayscale(image)

    def remove_alpha(self, image: RasterImage) -> RasterImage:
        return remove_alpha(image)

    def invert(self, image: RasterImage) -> RasterImage:
        return invert(image)

    # -- copies --------------------------------------------------------
    def clone(self, image: RasterImage) -> RasterImage:
        return clone(image)

    def read_clipboard_image(self) -> RasterImage | None:
        image = read_clipboard_image(self._clipboard)
        _logger.debug("clipboard image: %s", image)
        return image
