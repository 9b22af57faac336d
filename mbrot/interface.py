# -*- coding: utf-8 -*-
"""
Provides the image file interface shared by the front-end scripts.
"""

__all__ = ["ImageFile", "write_image"]

import os, sys, tempfile
import numpy as np

from os.path import basename, dirname, splitext
from timeit import default_timer as timer
from PIL import Image

from .base import Base


def write_image(filename, pixels, bounds):
    """
    Write the grayscale pixels, whose dimensions are given by bounds, to
    filename. The image is encoded into a temporary file next to the target
    and renamed into place, so a failed write leaves no partial file.
    """
    width, height = bounds
    if pixels.shape != (width * height,):
        raise AssertionError(
            f"pixel buffer of shape {pixels.shape} does not match {width}x{height}")

    # Only formats Pillow can write; the rest fall back to PNG.
    ext = splitext(filename)[1].lower()
    fmt = Image.registered_extensions().get(ext, 'PNG')
    if fmt not in Image.SAVE:
        fmt = 'PNG'

    img = Image.frombuffer("L", (width, height), pixels, "raw", "L", 0, 1)

    # Honor the umask like a plainly created file; mkstemp uses 0600.
    umask = os.umask(0)
    os.umask(umask)

    fd, temp_path = tempfile.mkstemp(
        prefix=".{}.".format(basename(filename)), dir=dirname(filename) or ".")
    try:
        with os.fdopen(fd, "wb") as f:
            img.save(f, format=fmt)
        os.chmod(temp_path, 0o666 & ~umask)
        os.replace(temp_path, filename)
    except BaseException:
        os.unlink(temp_path)
        raise


class ImageFile(Base):

    def __init__(self, opt):

        self.filename = opt.filename
        self.width = opt.width
        self.height = opt.height
        self.upper_left = opt.upper_left
        self.lower_right = opt.lower_right
        self.limit = opt.limit
        self.num_threads = opt.num_threads
        self.rows_per_band = opt.rows_per_band
        self.use_fork = opt.use_fork
        self.quiet = opt.quiet

        self.pixels = np.zeros((self.width * self.height,), dtype=np.uint8)


    @property
    def bounds(self):
        return (self.width, self.height)


    def log(self, mesg):

        if not self.quiet:
            print(mesg)


    def print_info(self):

        self.log("[IMG] image size   : {}x{}".format(
            self.width, self.height))
        self.log("[IMG] upper left   : {:.16f}, {:.16f}".format(
            self.upper_left.real, self.upper_left.imag))
        self.log("[IMG] lower right  : {:.16f}, {:.16f}".format(
            self.lower_right.real, self.lower_right.imag))
        self.log("[IMG] iterations   : {}".format(self.limit))


    def render(self):

        raise NotImplementedError


    def run(self):
        """
        Render the image, hand the finished buffer to the image file and
        return the process exit status.
        """
        self.print_info()

        start_time = timer()
        self.render()
        self.log("      compute time : {:.3f} seconds".format(timer() - start_time))

        # The buffer is complete and no longer mutated.
        self.pixels.flags.writeable = False

        try:
            write_image(self.filename, self.pixels, self.bounds)
        except (OSError, ValueError) as exc:
            self.error(f"error writing image file '{self.filename}': {exc}")
            return 1

        self.log(f"image saved as {self.filename}")
        return 0


    def error(self, mesg):

        prog = basename(sys.argv[0]) or 'mandel'
        print(f"{prog}: error: {mesg}", file=sys.stderr)


    def exit(self):

        del self.pixels
