# -*- coding: utf-8 -*-
"""
Mandelbrot functions. Loop over the rows using Numba's parfor loop.
"""

__all__ = ["mandelbrot"]

from .mandel_for import render_rows

from numba import njit, prange, set_parallel_chunksize


@njit('void(u1[:], UniTuple(i8,2), c16, c16, i8)', nogil=True, parallel=True)
def mandelbrot(pixels, bounds, upper_left, lower_right, limit):

    width, height = bounds

    if pixels.shape[0] != width * height:
        raise AssertionError("pixel buffer length does not match its bounds")

    # One row per chunk; the cost per row varies widely across the set.
    set_parallel_chunksize(1)
    for top in prange(height):
        render_rows(
            pixels[top * width:(top + 1) * width], bounds, top, 1,
            upper_left, lower_right, limit )
