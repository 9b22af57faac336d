# -*- coding: utf-8 -*-

import sys

import numpy as np
import pytest

from mbrot.base import RenderError, partition
from mbrot.mandel_queue import render_bands

UPPER_LEFT = complex(-1.20, 0.35)
LOWER_RIGHT = complex(-1.0, 0.20)


def _render(bounds, **kwargs):
    pixels = np.zeros((bounds[0] * bounds[1],), dtype=np.uint8)
    render_bands(pixels, bounds, UPPER_LEFT, LOWER_RIGHT, **kwargs)
    return pixels


@pytest.mark.parametrize("height, rows_per_band", [
    (1, 1), (10, 1), (10, 3), (10, 10), (10, 12), (7, 2)])
def test_partition_covers_rows_once(height, rows_per_band):
    bands = partition(height, rows_per_band)

    rows = [top + i for top, count in bands for i in range(count)]
    assert rows == list(range(height))
    assert all(0 < count <= rows_per_band for _, count in bands)


def test_partition_shapes():
    assert partition(10, 3) == [(0, 3), (3, 3), (6, 3), (9, 1)]
    assert partition(3) == [(0, 1), (1, 1), (2, 1)]


def test_partition_rejects_empty_bands():
    with pytest.raises(ValueError):
        partition(10, 0)


@pytest.mark.parametrize("num_threads", [2, 3, 8, 64])
def test_thread_count_does_not_change_output(num_threads):
    bounds = (40, 30)
    expected = _render(bounds, num_threads=1)
    assert _render(bounds, num_threads=num_threads).tobytes() == expected.tobytes()


def test_every_pixel_is_written():
    bounds = (9, 13)
    for num_threads in (1, 4):
        for rows_per_band in (1, 2, 5, 13):
            pixels = np.zeros((9 * 13,), dtype=np.uint8)
            render_bands(
                pixels, bounds, complex(3.0, 3.0), complex(4.0, 2.0),
                num_threads=num_threads, rows_per_band=rows_per_band)
            assert (pixels == 254).all()


def test_single_pixel_at_center():
    pixels = np.zeros((1,), dtype=np.uint8)
    render_bands(pixels, (1, 1), 0j, 0j, num_threads=4)
    assert pixels.tolist() == [0]


def test_limit_is_passed_to_bands():
    pixels = np.full((4,), 7, dtype=np.uint8)
    render_bands(pixels, (2, 2), complex(3.0, 3.0), complex(4.0, 2.0), limit=1)
    assert pixels.tolist() == [0, 0, 0, 0]


def test_shape_mismatch_fails():
    pixels = np.zeros((10,), dtype=np.uint8)
    with pytest.raises(AssertionError):
        render_bands(pixels, (4, 3), UPPER_LEFT, LOWER_RIGHT)


def test_worker_failure_is_raised():
    pixels = np.zeros((12,), dtype=np.uint8)
    with pytest.raises(RenderError, match="first at row 0"):
        render_bands(pixels, (4, 3), "upper", "lower", num_threads=2)


@pytest.mark.skipif(not sys.platform.startswith('linux'), reason="fork is safe on linux only")
def test_forked_workers_match_threads():
    bounds = (32, 24)
    expected = _render(bounds, num_threads=3)
    forked = _render(bounds, num_threads=3, use_fork=True)
    assert forked.tobytes() == expected.tobytes()
    assert forked.any()


@pytest.mark.parametrize("rows_per_band", [2, 7, 30, 250])
def test_band_height_does_not_change_output(rows_per_band):
    bounds = (1000, 750)
    expected = _render(bounds, num_threads=4)

    for num_threads in (3, 7):
        pixels = _render(bounds, num_threads=num_threads, rows_per_band=rows_per_band)
        assert pixels.tobytes() == expected.tobytes()
