"""In-memory RGB raster with bounds-checked accessors.

Coordinates are always ``(row, col)``: ``row`` runs top to bottom over
``[0, height)`` and ``col`` runs left to right over ``[0, width)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np


class OutOfBoundsError(IndexError):
    """Raised when a coordinate falls outside the buffer."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"out of bounds (row={row}, col={col}) for {height}x{width} buffer"
        )
        self.row = row
        self.col = col
        self.height = height
        self.width = width


@dataclass(frozen=True)
class Color:
    """RGB sample with channels nominally in ``[0, 1]``.

    Channels are rounded to 32-bit float precision, matching the storage of
    :class:`RasterBuffer`.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            object.__setattr__(self, name, float(np.float32(getattr(self, name))))

    @classmethod
    def black(cls) -> "Color":
        return cls(0.0, 0.0, 0.0)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)


class RasterBuffer:
    """Fixed-size ``height x width`` grid of :class:`Color` samples."""

    def __init__(self, height: int, width: int) -> None:
        height = int(height)
        width = int(width)
        if height < 0 or width < 0:
            raise ValueError(f"Buffer dimensions must be non-negative, got {height}x{width}")
        self._height = height
        self._width = width
        self._pixels = np.zeros((height, width, 3), dtype=np.float32)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._height, self._width)

    @property
    def pixels(self) -> np.ndarray:
        """Read-only ``(height, width, 3)`` float32 view of the samples."""

        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def __repr__(self) -> str:
        return f"RasterBuffer(height={self._height}, width={self._width})"

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self._height and 0 <= col < self._width):
            raise OutOfBoundsError(row, col, self._height, self._width)

    def get(self, row: int, col: int) -> Color:
        self._check(row, col)
        r, g, b = self._pixels[row, col]
        return Color(float(r), float(g), float(b))

    def set(self, color: Color, row: int, col: int) -> None:
        self._check(row, col)
        self._pixels[row, col] = (color.r, color.g, color.b)

    def row_view(self, row: int) -> np.ndarray:
        """Return a writable ``(width, 3)`` view of ``row``.

        Writes through the view skip the per-pixel bounds check; the row
        itself is still validated.
        """

        if not 0 <= row < self._height:
            raise OutOfBoundsError(row, 0, self._height, self._width)
        return self._pixels[row]

    def rows(self) -> Iterator[np.ndarray]:
        for row in range(self._height):
            yield self.pixels[row]
