#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Render the Mandelbrot Set on a single CPU thread.
"""

import sys

from mbrot.option import Option
from mbrot.interface import ImageFile
from mbrot.mandel_for import render

class App(ImageFile):

    def __init__(self, opt):
        super().__init__(opt)

        self.log("[CPU] number of threads 1")

    def render(self):

        render(
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
