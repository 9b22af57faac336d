# -*- coding: utf-8 -*-
"""
Mandelbrot functions. Render one band of rows on the calling thread.
"""

__all__ = ["render", "render_rows"]

from .mandel_common import band_plane, escape_time, intensity, pixel_to_point

from numba import njit


@njit('void(u1[:], UniTuple(i8,2), c16, c16, i8)', nogil=True)
def render(pixels, bounds, upper_left, lower_right, limit):
    """
    Fill a width x height grayscale buffer, row-major, with the escape-time
    intensities of the plane rectangle it represents.
    """
    width, height = bounds

    if pixels.shape[0] != width * height:
        raise AssertionError("pixel buffer length does not match its bounds")

    for row in range(height):
        for column in range(width):
            point = pixel_to_point(bounds, (column, row), upper_left, lower_right)
            pixels[row * width + column] = intensity(escape_time(point, limit))


@njit('void(u1[:], UniTuple(i8,2), i8, i8, c16, c16, i8)', nogil=True)
def render_rows(band, bounds, top, rows, upper_left, lower_right, limit):
    """
    Fill the band holding image rows [top, top + rows). Each row is mapped
    through its own one-row strip of the full plane, so the pixels do not
    depend on how the image is cut into bands.
    """
    width = bounds[0]

    if band.shape[0] != width * rows:
        raise AssertionError("band length does not match its rows")

    for y in range(rows):
        row_upper_left, row_lower_right = band_plane(
            bounds, top + y, 1, upper_left, lower_right )
        render(
            band[y * width:(y + 1) * width], (width, 1),
            row_upper_left, row_lower_right, limit )
