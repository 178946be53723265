from __future__ import annotations

import numpy as np
import pytest

from rasterbmp.raster import Color, OutOfBoundsError, RasterBuffer


@pytest.mark.parametrize("height,width", [(0, 0), (0, 4), (3, 0), (5, 10)])
def test_new_buffer_has_requested_shape_and_is_black(height, width):
    image = RasterBuffer(height, width)
    assert image.shape == (height, width)
    assert image.pixels.shape == (height, width, 3)
    rows = list(image.rows())
    assert len(rows) == height
    assert all(len(row) == width for row in rows)
    assert not np.any(image.pixels)


def test_negative_dimensions_are_rejected():
    with pytest.raises(ValueError):
        RasterBuffer(-1, 2)


def test_set_then_get_returns_written_color():
    image = RasterBuffer(4, 3)
    color = Color(0.1, 0.25, 0.9)
    image.set(color, 3, 2)
    assert image.get(3, 2) == color
    assert image.get(0, 0) == Color.black()


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (4, 0), (0, 3), (10, 10)])
def test_out_of_range_access_fails_without_mutation(row, col):
    image = RasterBuffer(4, 3)
    with pytest.raises(OutOfBoundsError):
        image.get(row, col)
    with pytest.raises(OutOfBoundsError) as excinfo:
        image.set(Color(1.0, 1.0, 1.0), row, col)
    assert (excinfo.value.row, excinfo.value.col) == (row, col)
    assert not np.any(image.pixels)


def test_pixels_view_is_read_only():
    image = RasterBuffer(2, 2)
    with pytest.raises(ValueError):
        image.pixels[0, 0, 0] = 1.0


def test_row_view_writes_through_and_checks_row():
    image = RasterBuffer(2, 3)
    image.row_view(1)[:] = (0.5, 0.25, 0.0)
    assert image.get(1, 2) == Color(0.5, 0.25, 0.0)
    assert image.get(0, 2) == Color.black()
    with pytest.raises(OutOfBoundsError):
        image.row_view(2)
