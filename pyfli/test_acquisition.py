import gzip
import os

import h5py
import numpy as np
import pytest

from pyfli import acquisition
from pyfli.conftest import expected_frame
from pyfli.errors import DimensionMismatch, FLIError


def test_grab_frame_16bit(camera, fakelib):
    """

    Test that 16-bit rows are downloaded directly into the destination image

    """

    img = np.zeros((6, 8), dtype=np.uint16)
    assert camera.grab_frame_into(img) is img
    assert np.array_equal(img, expected_frame(6, 8))
    assert fakelib.row_addresses == [
        img.ctypes.data + j * img.strides[0] for j in range(6)
    ]
    assert fakelib.last_args("FLIGrabRow")[2] == 8


def test_grab_frame_8bit(camera, fakelib):
    """

    Test that 8-bit rows go through the row buffer of the device

    """

    camera.set_bit_depth(np.uint8)
    img = camera.grab_frame(np.uint8)
    assert img.dtype == np.uint8
    assert img.shape == (6, 8)
    assert np.array_equal(img, expected_frame(6, 8))
    rowbuf = camera.row_buffer(0)
    assert rowbuf.size >= 16
    assert set(fakelib.row_addresses) == {rowbuf.ctypes.data}

    # the row buffer is never shrunk
    fakelib.readout = [4, 0, 1, 2, 0, 1]
    camera.grab_frame(np.uint8)
    assert camera.row_buffer(0) is rowbuf

    fakelib.readout = [32, 0, 1, 2, 0, 1]
    img = camera.grab_frame(np.uint8)
    assert camera.row_buffer(0).size >= 64
    assert img.shape == (2, 32)


def test_dimension_mismatch(camera, fakelib):
    img = np.zeros((8, 6), dtype=np.uint16)
    with pytest.raises(DimensionMismatch) as excinfo:
        camera.grab_frame_into(img)
    assert excinfo.value.expected == (6, 8)
    assert excinfo.value.actual == (8, 6)
    with pytest.raises(DimensionMismatch):
        camera.grab_frame_into(np.zeros(48, dtype=np.uint16))
    assert fakelib.count("FLIGrabRow") == 0


def test_invalid_destination(camera, fakelib):
    with pytest.raises(TypeError):
        camera.grab_frame_into(np.zeros((6, 8), dtype=np.float32))
    with pytest.raises(TypeError):
        camera.grab_frame(np.int32)
    img = np.zeros((6, 8), dtype=np.uint16)
    img.flags.writeable = False
    with pytest.raises(ValueError):
        camera.grab_frame_into(img)
    big = np.zeros((6, 16), dtype=np.uint16)
    with pytest.raises(ValueError):
        camera.grab_frame_into(big[:, ::2])
    assert fakelib.count("FLIGrabRow") == 0


def test_row_failure(camera, fakelib):
    fakelib.grab_row_failure = 3
    img = np.zeros((6, 8), dtype=np.uint16)
    with pytest.raises(FLIError):
        camera.grab_frame_into(img)
    assert np.array_equal(img[:3], expected_frame(3, 8))
    assert not img[3:].any()


def test_grab_row(camera, fakelib):
    img = np.zeros((6, 8), dtype=np.uint16)
    camera.grab_row(img, 4)
    assert np.array_equal(img[4], expected_frame(1, 8)[0])
    assert not img[:4].any()
    with pytest.raises(IndexError):
        camera.grab_row(img, 6)
    with pytest.raises(IndexError):
        camera.grab_row(img, -1)


def test_grab_video_frame(camera, fakelib):
    img = camera.grab_video_frame()
    assert img.shape == (6, 8)
    assert (img == 0x0707).all()
    assert fakelib.last_args("FLIGrabVideoFrame")[2] == 6 * 8 * 2


def test_wait_exposure(camera, fakelib):
    fakelib.exposure_left = [300, 200, 0]
    camera.wait_exposure(poll=0.0)
    assert fakelib.count("FLIGetExposureStatus") == 3

    fakelib.exposure_left = [300, 100, 0]
    acquisition.wait_exposure(camera, poll=0.0, progressbar=True)
    assert fakelib.count("FLIGetExposureStatus") == 6


def test_acquire(camera, fakelib):
    img = camera.acquire(exposuretime=0.2, frametype="dark")
    assert fakelib.last_args("FLISetExposureTime") == (1, 200)
    names = fakelib.names()
    assert names.index("FLISetFrameType") < names.index("FLIExposeFrame")
    assert names.index("FLIExposeFrame") < names.index("FLIGrabRow")
    assert np.array_equal(img, expected_frame(6, 8))


def test_save_frame(tmpdir):
    img = expected_frame(6, 8).astype(np.uint16)

    filename = os.path.join(tmpdir, "frame.npy")
    acquisition.save_frame(img, filename)
    assert np.array_equal(np.load(filename), img)

    filename = os.path.join(tmpdir, "frame.npy.gz")
    acquisition.save_frame(img, filename)
    with gzip.open(filename, "rb") as f:
        assert np.array_equal(np.load(f), img)

    filename = os.path.join(tmpdir, "frame.hdf5")
    acquisition.save_frame(img, filename, attrs={"exposure_time": 0.2})
    with h5py.File(filename, "r") as f:
        assert f.attrs["exposure_time"] == 0.2
        assert np.array_equal(f["image"][...], img)

    filename = os.path.join(tmpdir, "frame.li16")
    acquisition.save_frame(img, filename, "raw")
    assert np.array_equal(np.fromfile(filename, dtype=np.uint16).reshape(6, 8), img)

    with pytest.raises(ValueError):
        acquisition.save_frame(img, filename, "tiff")
