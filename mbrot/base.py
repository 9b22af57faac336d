# -*- coding: utf-8 -*-
"""
Provides the base class and the row-band partitioning.
"""

__all__ = ["ESCAPE_RADIUS_2", "INDETERMINATE", "LIMIT", "RenderError",
           "Base", "partition"]

ESCAPE_RADIUS_2 = 4.0
INDETERMINATE = -1
LIMIT = 255


class RenderError(RuntimeError):
    """
    Raised after the join when one or more workers failed to render a band.
    """


def partition(height, rows_per_band=1):
    """
    Split the image rows into contiguous (top, rows) bands.
    The last band is shorter when rows_per_band does not divide height.
    """
    if rows_per_band < 1:
        raise ValueError(f"rows_per_band must be positive: {rows_per_band}")

    bands = list()
    for top in range(0, height, rows_per_band):
        stop = top + rows_per_band
        bands.append((top, (stop if stop <= height else height) - top))

    return bands


class Base(object):

    @staticmethod
    def divide_up(dividend, divisor):
        """
        Helper funtion to get the next up value for integer division.
        """
        return dividend // divisor + 1 if dividend % divisor else dividend // divisor

