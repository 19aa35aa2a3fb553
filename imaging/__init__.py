"""
Image I/O and display helpers around the filtering core.

The filtering package only deals in raw RGBA buffers. This package
decodes uploaded files into buffers, validates uploads, reads single
pixels for inspection, and encodes results for download.
"""

from .codec import ImageDecodeError, decode_image, encode_png, load_image, save_image
from .export import KERNEL_SIZE_OPTIONS, KernelSizeOption, download_filename
from .inspection import PixelInfo, inspect_pixel, rgb_to_hsl
from .uploads import (
    INVALID_TYPE,
    NO_FILE,
    TOO_LARGE,
    UploadValidation,
    format_file_size,
    validate_upload,
)

__all__ = [
    "ImageDecodeError",
    "decode_image",
    "encode_png",
    "load_image",
    "save_image",
    "KERNEL_SIZE_OPTIONS",
    "KernelSizeOption",
    "download_filename",
    "PixelInfo",
    "inspect_pixel",
    "rgb_to_hsl",
    "INVALID_TYPE",
    "NO_FILE",
    "TOO_LARGE",
    "UploadValidation",
    "format_file_size",
    "validate_upload",
]
