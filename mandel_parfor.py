#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Render the Mandelbrot Set on the CPU using Numba's parfor loop.
"""

import sys

import numba

from mbrot.option import Option
from mbrot.interface import ImageFile
from mbrot.mandel_parfor import mandelbrot

class App(ImageFile):

    def __init__(self, opt):
        super().__init__(opt)

        # Silently limit the number of threads to the size of the numba pool.
        self.num_threads = max(1, min(
            self.num_threads, self.height, numba.config.NUMBA_NUM_THREADS))
        numba.set_num_threads(self.num_threads)

        self.log("[CPU] number of threads {}".format(self.num_threads))

    def render(self):

        mandelbrot(
            self.pixels, self.bounds, self.upper_left, self.lower_right,
            self.limit )


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
