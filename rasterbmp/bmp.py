"""BMP writer for 24-bit RGB rasters."""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import BinaryIO, Iterator

import numpy as np

from .raster import OutOfBoundsError, RasterBuffer

logger = logging.getLogger(__name__)

FILE_HEADER_SIZE = 14
DIB_HEADER_SIZE = 40
PIXEL_DATA_OFFSET = FILE_HEADER_SIZE + DIB_HEADER_SIZE
BITS_PER_PIXEL = 24
BYTES_PER_PIXEL = BITS_PER_PIXEL // 8
BI_RGB = 0
PIXELS_PER_METRE = 2835  # 72 dpi
MAX_DIMENSION = 2**31 - 1  # signed 32-bit width/height fields
MAX_FILE_SIZE = 2**32 - 1  # unsigned 32-bit file size field


class BitmapExportError(OSError):
    """Raised when a bitmap cannot be written to disk."""


def row_padding(width: int) -> int:
    return (4 - (width * BYTES_PER_PIXEL) % 4) % 4


def row_stride(width: int) -> int:
    """Bytes per stored row, padding included."""

    return width * BYTES_PER_PIXEL + row_padding(width)


def file_size(height: int, width: int) -> int:
    return PIXEL_DATA_OFFSET + row_stride(width) * height


def check_dimensions(height: int, width: int) -> int:
    """Return the file size for ``height x width``, or raise if BMP headers cannot hold it."""

    if height > MAX_DIMENSION or width > MAX_DIMENSION:
        raise BitmapExportError(
            f"image of {height}x{width} exceeds the BMP limit of {MAX_DIMENSION} pixels per side"
        )
    size = file_size(height, width)
    if size > MAX_FILE_SIZE:
        raise BitmapExportError(
            f"image of {height}x{width} needs {size} bytes, above the BMP limit of {MAX_FILE_SIZE}"
        )
    return size


def pack_file_header(size: int) -> bytes:
    return struct.pack("<2sIHHI", b"BM", size, 0, 0, PIXEL_DATA_OFFSET)


def pack_dib_header(height: int, width: int) -> bytes:
    return struct.pack(
        "<IiiHHIIiiII",
        DIB_HEADER_SIZE,
        width,
        height,
        1,  # colour planes
        BITS_PER_PIXEL,
        BI_RGB,
        0,  # image size, may be zero for BI_RGB
        PIXELS_PER_METRE,
        PIXELS_PER_METRE,
        0,  # colours in table
        0,  # important colours
    )


def to_bytes(channels: np.ndarray) -> np.ndarray:
    """Convert float samples to bytes as ``floor(value * 255)`` modulo 256.

    Out-of-range samples wrap rather than saturate.
    """

    channels = np.asarray(channels, dtype=np.float32)
    with np.errstate(invalid="ignore", over="ignore"):
        scaled = np.floor(channels * np.float32(255.0)).astype(np.int64)
    return (scaled & 0xFF).astype(np.uint8)


def encode_rows(buffer: RasterBuffer) -> Iterator[bytes]:
    """Yield the stored pixel rows, bottom row of the image first."""

    width = buffer.width
    line = np.zeros(row_stride(width), dtype=np.uint8)
    for row in range(buffer.height - 1, -1, -1):
        samples = buffer.row_view(row)
        # RGB -> BGR
        line[: width * BYTES_PER_PIXEL] = to_bytes(samples[:, ::-1]).reshape(-1)
        yield line.tobytes()


def encode_bitmap(buffer: RasterBuffer) -> bytes:
    """Return the complete BMP file for ``buffer`` as bytes."""

    height, width = buffer.shape
    parts = [pack_file_header(check_dimensions(height, width)), pack_dib_header(height, width)]
    parts.extend(encode_rows(buffer))
    return b"".join(parts)


def _write(fh: BinaryIO, data: bytes, message: str) -> None:
    try:
        written = fh.write(data)
    except OSError as exc:
        raise BitmapExportError(f"{message}: {exc}") from exc
    if written is not None and written != len(data):
        raise BitmapExportError(f"{message}: wrote {written} of {len(data)} bytes")


def save_bitmap(path: str | Path, buffer: RasterBuffer) -> Path:
    """Save ``buffer`` as a 24-bit BMP image at ``path``.

    The file is created or truncated. If a write fails part way through the
    partial file is left on disk. Images too large for the BMP headers are
    rejected before ``path`` is touched.
    """

    path = Path(path)
    height, width = buffer.shape
    size = check_dimensions(height, width)

    try:
        fh = path.open("wb")
    except OSError as exc:
        raise BitmapExportError(f"failed to create file {path}: {exc}") from exc

    with fh:
        _write(fh, pack_file_header(size), "failed to write BMP header")
        _write(fh, pack_dib_header(height, width), "failed to write DIB header")
        try:
            for line in encode_rows(buffer):
                _write(fh, line, "failed to write pixel data")
            fh.flush()
        except OutOfBoundsError as exc:
            raise BitmapExportError(f"failed to write pixel data: {exc}") from exc
        except BitmapExportError:
            raise
        except OSError as exc:
            raise BitmapExportError(f"failed to write pixel data: {exc}") from exc

    logger.debug("Wrote %s (%dx%d, %d bytes)", path, width, height, size)
    return path
