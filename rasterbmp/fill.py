"""Parallel row fills for :class:`~rasterbmp.raster.RasterBuffer`."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional

import numpy as np

from .raster import Color, RasterBuffer

logger = logging.getLogger(__name__)

RowShader = Callable[[int, int], np.ndarray]
PixelShader = Callable[[int, int], Color]


def fill_rows(
    buffer: RasterBuffer,
    shade_row: RowShader,
    max_workers: Optional[int] = None,
) -> RasterBuffer:
    """Fill ``buffer`` with one task per row.

    ``shade_row(row, width)`` must return something broadcastable to
    ``(width, 3)``. Each task writes only its own row, so no locking is
    needed. All tasks are joined before returning and the first task error,
    if any, is re-raised here.
    """

    height, width = buffer.shape
    if height == 0:
        return buffer

    workers = max_workers if max_workers is not None else min(32, (os.cpu_count() or 1) + 4)

    def _fill(row: int) -> None:
        buffer.row_view(row)[:] = shade_row(row, width)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures: List[Future[None]] = [pool.submit(_fill, row) for row in range(height)]
        for fut in futures:
            fut.result()

    logger.debug("Filled %d rows using %d workers", height, workers)
    return buffer


def fill_pixels(
    buffer: RasterBuffer,
    shader: PixelShader,
    max_workers: Optional[int] = None,
) -> RasterBuffer:
    """Per-pixel variant of :func:`fill_rows`; ``shader(row, col)`` returns a Color."""

    def _shade_row(row: int, width: int) -> np.ndarray:
        return np.array(
            [shader(row, col).as_tuple() for col in range(width)],
            dtype=np.float32,
        ).reshape(width, 3)

    return fill_rows(buffer, _shade_row, max_workers=max_workers)


def gradient_row(row: int, width: int, height: int, blue: float = 0.5) -> np.ndarray:
    """Return one row of the sample gradient.

    Red follows the row (``row / height``), green follows the column
    (``col / width``) and blue is constant.
    """

    line = np.empty((width, 3), dtype=np.float32)
    line[:, 0] = np.float32(row) / np.float32(height)
    line[:, 1] = np.arange(width, dtype=np.float32) / np.float32(width)
    line[:, 2] = blue
    return line


def fill_gradient(
    buffer: RasterBuffer,
    blue: float = 0.5,
    max_workers: Optional[int] = None,
) -> RasterBuffer:
    height = buffer.height
    return fill_rows(
        buffer,
        lambda row, width: gradient_row(row, width, height, blue),
        max_workers=max_workers,
    )
