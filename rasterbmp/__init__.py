"""Float RGB rasters and a 24-bit BMP writer."""

from .bmp import BitmapExportError, encode_bitmap, save_bitmap
from .cli import main
from .fill import fill_gradient, fill_pixels, fill_rows
from .parameters import GradientParameters
from .raster import Color, OutOfBoundsError, RasterBuffer

__all__ = [
    "main",
    "BitmapExportError",
    "encode_bitmap",
    "save_bitmap",
    "fill_gradient",
    "fill_pixels",
    "fill_rows",
    "GradientParameters",
    "Color",
    "OutOfBoundsError",
    "RasterBuffer",
]
