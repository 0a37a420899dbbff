"""Pure transform functions.

Every function reads its input image and returns a newly allocated one; inputs
are never modified. The documented exceptions return the input instance
unchanged: `remove_alpha` on an image without alpha, and `scale_renderable`
with a scale of ~1.0.
"""

from .clipboard import ClipboardService, QtClipboardService, read_clipboard_image
from .clone import clone
from .color import INVERT_TABLE, convert_image_2_binary, invert, remove_alpha, to_binary, to_grayscale
from .crop import subregion, validate_crop_bounds
from .rotate import rotate, rotated_bounds
from .scale import ScaledRenderable, scale_renderable, scale_to_size

__all__ = [
    "INVERT_TABLE",
    "ClipboardService",
    "QtClipboardService",
    "ScaledRenderable",
    "clone",
    "convert_image_2_binary",
    "invert",
    "read_clipboard_image",
    "remove_alpha",
    "rotate",
    "rotated_bounds",
    "scale_renderable",
    "scale_to_size",
    "subregion",
    "to_binary",
    "to_grayscale",
    "validate_crop_bounds",
]
