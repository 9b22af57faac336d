# -*- coding: utf-8 -*-
"""
Render the Mandelbrot Set by row bands using a pool of consumers fed by a queue.
Each band is a disjoint slice of the pixel buffer, so no locking is needed.
"""

__all__ = ["render_bands"]

import numpy as np

from multiprocessing import RawArray

from .base import LIMIT, RenderError, partition
from .mandel_for import render_rows
from .parallel import select


def _cpu_task(pixels, bounds, upper_left, lower_right, limit, queue_data, queue_error):

    width = bounds[0]
    failed = False

    # Drain the queue even after a failure so the producer never blocks.
    while True:
        args = queue_data.get()
        if args is None: break
        if failed: continue

        top, rows = args
        try:
            render_rows(
                pixels[top * width:(top + rows) * width], bounds, top, rows,
                upper_left, lower_right, limit )
        except Exception as exc:
            queue_error.put((top, repr(exc)))
            failed = True


def render_bands(pixels, bounds, upper_left, lower_right, limit=LIMIT,
                 num_threads=1, rows_per_band=1, use_fork=False):
    """
    Render the full image into pixels, one task per band of rows_per_band
    rows, and wait for every band to complete.

    With use_fork, consumers are forked processes writing into shared memory
    that is copied back into pixels after the join.
    """
    width, height = bounds

    if pixels.shape != (width * height,):
        raise AssertionError(
            f"pixel buffer of shape {pixels.shape} does not match {width}x{height}")

    Queue, Thread = select(use_fork)
    bands = partition(height, rows_per_band)
    num_threads = max(1, min(num_threads, len(bands)))

    if use_fork:
        shm_output = RawArray(np.ctypeslib.ctypes.c_uint8, int(width * height))
        output = np.ctypeslib.as_array(shm_output)
    else:
        output = pixels

    queue_data = Queue()
    queue_error = Queue()

    # Spawn workers.
    args = (output, bounds, upper_left, lower_right, limit, queue_data, queue_error)
    consumers = list()
    for _ in range(num_threads):
        consumers.append(Thread(target=_cpu_task, args=args))
        consumers[-1].start()

    # Submit the bands followed by one stop marker per consumer.
    for band in bands:
        queue_data.put(band)
    for _ in range(num_threads):
        queue_data.put(None)

    for c in consumers:
        c.join()

    errors = list()
    while not queue_error.empty():
        errors.append(queue_error.get())

    if use_fork:
        for c in consumers:
            if c.exitcode != 0:
                errors.append((None, f"worker {c.pid} exited with code {c.exitcode}"))

    if errors:
        top, mesg = min(errors, key=lambda e: -1 if e[0] is None else e[0])
        raise RenderError(f"{len(errors)} band(s) failed; first at row {top}: {mesg}")

    if output is not pixels:
        pixels[:] = output
