# -*- coding: utf-8 -*-

import os
import stat

import numpy as np
import pytest

from PIL import Image

from mbrot.interface import write_image


def test_write_png(tmp_path):
    pixels = np.arange(12, dtype=np.uint8) * 20
    filename = tmp_path / "mandel.png"

    write_image(str(filename), pixels, (4, 3))

    with Image.open(filename) as img:
        assert img.format == "PNG"
        assert img.mode == "L"
        assert img.size == (4, 3)
        assert img.tobytes() == pixels.tobytes()

    assert [p.name for p in tmp_path.iterdir()] == ["mandel.png"]


def test_format_follows_extension(tmp_path):
    pixels = np.zeros((6,), dtype=np.uint8)

    write_image(str(tmp_path / "mandel.bmp"), pixels, (3, 2))
    write_image(str(tmp_path / "mandel.out"), pixels, (3, 2))

    with Image.open(tmp_path / "mandel.bmp") as img:
        assert img.format == "BMP"
    with Image.open(tmp_path / "mandel.out") as img:
        assert img.format == "PNG"


def test_read_only_buffer(tmp_path):
    pixels = np.full((4,), 200, dtype=np.uint8)
    pixels.flags.writeable = False

    write_image(str(tmp_path / "mandel.png"), pixels, (2, 2))

    with Image.open(tmp_path / "mandel.png") as img:
        assert img.tobytes() == bytes([200] * 4)


def test_replaces_existing_file(tmp_path):
    filename = tmp_path / "mandel.png"
    filename.write_bytes(b"stale")

    write_image(str(filename), np.zeros((1,), dtype=np.uint8), (1, 1))

    with Image.open(filename) as img:
        assert img.size == (1, 1)


def test_missing_directory_fails(tmp_path):
    with pytest.raises(OSError):
        write_image(str(tmp_path / "missing" / "mandel.png"),
                    np.zeros((1,), dtype=np.uint8), (1, 1))

    assert list(tmp_path.iterdir()) == []


def test_encoder_failure_leaves_no_file(tmp_path, monkeypatch):

    def fail(self, fp, format=None, **params):
        raise OSError("disk full")

    monkeypatch.setattr(Image.Image, "save", fail)

    with pytest.raises(OSError, match="disk full"):
        write_image(str(tmp_path / "mandel.png"), np.zeros((1,), dtype=np.uint8), (1, 1))

    assert list(tmp_path.iterdir()) == []


def test_shape_mismatch_fails(tmp_path):
    with pytest.raises(AssertionError):
        write_image(str(tmp_path / "mandel.png"), np.zeros((5,), dtype=np.uint8), (2, 2))


@pytest.mark.skipif(os.name != "posix", reason="file modes are posix only")
@pytest.mark.parametrize("umask, mode", [(0o022, 0o644), (0o077, 0o600), (0o002, 0o664)])
def test_file_mode_follows_umask(tmp_path, umask, mode):
    filename = tmp_path / "mandel.png"

    old_umask = os.umask(umask)
    try:
        write_image(str(filename), np.zeros((4,), dtype=np.uint8), (2, 2))
    finally:
        os.umask(old_umask)

    assert stat.S_IMODE(os.stat(filename).st_mode) == mode


def test_read_only_format_falls_back_to_png(tmp_path):
    filename = tmp_path / "mandel.psd"

    write_image(str(filename), np.full((6,), 9, dtype=np.uint8), (3, 2))

    with Image.open(filename) as img:
        assert img.format == "PNG"
        assert img.tobytes() == bytes([9] * 6)
