# -*- coding: utf-8 -*-
"""
Common functions for mandel_for, mandel_queue, and mandel_parfor.
"""

__all__ = ["escape_time", "intensity", "pixel_to_point", "band_plane"]

import os

from .base import ESCAPE_RADIUS_2, INDETERMINATE

os.environ.setdefault('NUMBA_DISABLE_INTEL_SVML', str(1))
os.environ.setdefault('NUMBA_LOOP_VECTORIZE', str(0))
os.environ.setdefault('NUMBA_SLP_VECTORIZE', str(0))
os.environ.setdefault('NUMBA_OPT', str(3))

from numba import njit, uint8


@njit('i8(c16, i8)', nogil=True)
def escape_time(c, limit):
    """
    Return the iteration at which the orbit of c leaves the circle of
    radius 2, or INDETERMINATE if it stays inside for limit iterations.
    The check runs before each update, so the first test is on z = 0.
    """
    creal = c.real
    cimag = c.imag
    zreal = 0.0
    zimag = 0.0

    # Compute z = z^2 + c.
    for i in range(limit):
        zreal_sqr = zreal * zreal
        zimag_sqr = zimag * zimag

        if zreal_sqr + zimag_sqr > ESCAPE_RADIUS_2:
            return i

        zimag = 2.0 * zreal * zimag + cimag
        zreal = zreal_sqr - zimag_sqr + creal

    return INDETERMINATE


@njit('u1(i8)', nogil=True)
def intensity(count):

    # Probable members are black, quick escapes are bright.
    if count == INDETERMINATE:
        return uint8(0)

    return uint8(255 - count % 256)


@njit('c16(UniTuple(i8,2), UniTuple(i8,2), c16, c16)', nogil=True)
def pixel_to_point(bounds, pixel, upper_left, lower_right):
    """
    Map the (column, row) pixel of a width x height grid to the complex
    plane rectangle spanned by upper_left and lower_right.
    Rows grow downward while the imaginary part shrinks.
    """
    width = lower_right.real - upper_left.real
    height = upper_left.imag - lower_right.imag

    return complex(
        upper_left.real + pixel[0] * width / bounds[0],
        upper_left.imag - pixel[1] * height / bounds[1] )


@njit('UniTuple(c16,2)(UniTuple(i8,2), i8, i8, c16, c16)', nogil=True)
def band_plane(bounds, top, rows, upper_left, lower_right):
    """
    Return the plane rectangle covered by rows [top, top + rows) of the image.
    """
    band_upper_left = pixel_to_point(bounds, (0, top), upper_left, lower_right)
    band_lower_right = pixel_to_point(
        bounds, (bounds[0], top + rows), upper_left, lower_right )

    return band_upper_left, band_lower_right
