#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Render the Mandelbrot Set on the CPU using a queue of row bands.

By default the consumers are threads; the kernels release the GIL.
Specify --use-fork=1 to run the consumers as forked processes instead.
Specify --rows-per-band=0 for one coarse band per thread.
"""

import sys

from mbrot.option import Option
from mbrot.interface import ImageFile
from mbrot.mandel_queue import render_bands
from mbrot.parallel import FORK_AVAILABLE

class App(ImageFile):

    def __init__(self, opt):
        super().__init__(opt)

        if self.rows_per_band == 0:
            self.rows_per_band = self.divide_up(self.height, self.num_threads)

        self.num_threads = min(
            self.num_threads, self.divide_up(self.height, self.rows_per_band))
        self.use_fork = self.use_fork and FORK_AVAILABLE

        self.log("[CPU] number of threads {}".format(self.num_threads))
        self.log("[CPU] rows per band {}, use fork {}".format(
            self.rows_per_band, int(self.use_fork)))

    def render(self):

        render_bands(
            self.pixels, self.bounds, self.upper_left, self.lower_right,
            self.limit, self.num_threads, self.rows_per_band, self.use_fork )


def main(argv=None):

    mandel = App(Option(argv))
    try:
        return mandel.run()
    finally:
        mandel.exit()


if __name__ == '__main__':

    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
