"""Frame acquisition (:mod:`pyfli.acquisition`)
============================================

Functions to download images from an FLI camera, row by row, into numpy
arrays. The image area and binning must be configured before the exposure (see
:func:`pyfli.highlevel.configure_camera`), and the rows downloaded after the
exposure has ended.

The pixel type of the destination array is either :class:`numpy.uint8` or
:class:`numpy.uint16`, which should match the bit depth set with
:meth:`~pyfli.device.Device.set_bit_depth`. The library writes 16-bit words,
so 8-bit rows are downloaded into a scratch buffer of the device, and the
first ``width`` bytes of it are copied into the destination row.

.. autofunction:: grab_frame

.. autofunction:: grab_frame_into

.. autofunction:: unsafe_grab_frame

.. autofunction:: grab_row

.. autofunction:: grab_video_frame

.. autofunction:: wait_exposure

.. autofunction:: acquire

.. autofunction:: save_frame

"""

import gzip
import time

import numpy as np
import h5py
from progressbar import ProgressBar

from pyfli._lib import calls
from pyfli.errors import DimensionMismatch
from pyfli.highlevel import configure_camera

PIXEL_TYPES = (np.uint8, np.uint16)


def _pixel_type(dtype):
    dtype = np.dtype(dtype)
    if dtype not in PIXEL_TYPES:
        raise TypeError(f"unsupported pixel type {dtype}, expecting uint8 or uint16")
    return dtype


def readout_shape(cam):
    """Returns the shape (height, width) of the images read out by cam."""
    width, _, _, height, _, _ = cam.get_readout_dimensions()
    return height, width


def _check_destination(img):
    if not img.flags.writeable:
        raise ValueError("destination image is read-only")
    if img.ndim == 2 and img.strides[1] != img.itemsize:
        raise ValueError("destination image rows must be contiguous")


def _grab_into_row(cam, row, width):
    if row.dtype == np.uint8:
        buf = cam.row_buffer(2 * width)
        calls.FLIGrabRow(cam.handle, buf, width)
        row[:] = buf[:width]
    else:
        calls.FLIGrabRow(cam.handle, row, width)


def unsafe_grab_frame(cam, img):
    """Downloads height rows of width pixels into img, without checking that the
    shape of img matches the camera readout dimensions.

    :param cam: the camera
    :type cam: :class:`~pyfli.device.Device`
    :param img: writable destination image, of shape (height, width)
    :type img: :class:`numpy.ndarray` of uint8 or uint16
    :return: img
    """
    _pixel_type(img.dtype)
    _check_destination(img)
    height, width = img.shape
    for j in range(height):
        _grab_into_row(cam, img[j], width)
    return img


def grab_frame_into(cam, img):
    """Downloads the current frame into img.

    :raises ~pyfli.errors.DimensionMismatch: if the shape of img is not (height, width),
        in which case nothing is downloaded
    """
    shape = readout_shape(cam)
    if img.shape != shape:
        raise DimensionMismatch(shape, img.shape)
    return unsafe_grab_frame(cam, img)


def grab_frame(cam, dtype=np.uint16):
    """Downloads the current frame into a new array of shape (height, width).

    :param cam: the camera
    :type cam: :class:`~pyfli.device.Device`
    :param dtype: pixel type, numpy.uint8 or numpy.uint16. Defaults to numpy.uint16.
    :return: image
    :rtype: :class:`numpy.ndarray`
    """
    img = np.empty(readout_shape(cam), dtype=_pixel_type(dtype))
    return unsafe_grab_frame(cam, img)


def grab_row(cam, img, row):
    """Downloads the next row from the camera into row number row of img."""
    _pixel_type(img.dtype)
    _check_destination(img)
    height, width = img.shape
    if not 0 <= row < height:
        raise IndexError(f"row {row:d} out of range for an image of height {height:d}")
    _grab_into_row(cam, img[row], width)


def grab_video_frame(cam, dtype=np.uint16):
    """Downloads a frame in video mode (see :meth:`~pyfli.device.Device.start_video_mode`)."""
    img = np.empty(readout_shape(cam), dtype=_pixel_type(dtype))
    calls.FLIGrabVideoFrame(cam.handle, img)
    return img


def wait_exposure(cam, poll=0.1, progressbar=False):
    """Polls the camera until the exposure has ended.

    :param cam: the camera
    :type cam: :class:`~pyfli.device.Device`
    :param poll: polling interval in seconds
    :type poll: float, optional
    :param progressbar: use :mod:`progressbar` module to show a progress bar. Defaults to False.
    :type progressbar: bool, optional
    """
    remaining = cam.get_exposure_status()
    total_ms = int(round(1e3 * remaining))
    bar = None
    if progressbar and total_ms > 0:
        bar = ProgressBar(max_value=total_ms)
    while remaining > 0:
        time.sleep(min(poll, remaining))
        remaining = cam.get_exposure_status()
        if bar is not None:
            bar.update(max(0, min(total_ms, total_ms - int(round(1e3 * remaining)))))
    if bar is not None:
        bar.finish()


def acquire(cam, dtype=np.uint16, progressbar=False, **settings):
    """Configures the camera, exposes a frame, waits for the end of the exposure
    and downloads the image.

    :param settings: keyword arguments passed to :func:`pyfli.highlevel.configure_camera`
    :return: image
    :rtype: :class:`numpy.ndarray`
    """
    configure_camera(cam, **settings)
    cam.expose_frame()
    wait_exposure(cam, progressbar=progressbar)
    return grab_frame(cam, dtype)


def save_frame(img, filename, file_format=None, compression=None, attrs=None):
    """This function saves an image to disk.

    :param img: image
    :type img: :class:`numpy.ndarray`
    :param filename: file name
    :type filename: str
    :param file_format: "raw", "npy", "npy.gz" or "hdf5". Guessed from the file name extension if None.
    :type file_format: str, optional
    :param compression: the compression argument "gzip" or "lzf" to pass to :meth:`h5py.create_dataset` if file_format is "hdf5"
    :type compression: str, optional
    :param attrs: attributes stored in the hdf5 file (e.g. exposure time)
    :type attrs: dict, optional
    """
    if file_format is None:
        file_format = _guess_format(str(filename))
    if file_format == "raw":
        img.tofile(filename)
    elif file_format == "npy":
        np.save(filename, img)
    elif file_format == "npy.gz":
        with gzip.open(filename, "wb") as f:
            np.save(f, img)
    elif file_format in ("hdf", "hdf5"):
        with h5py.File(filename, "w") as f:
            if attrs:
                for key, val in attrs.items():
                    f.attrs[key] = val
            f.create_dataset("image", data=img, compression=compression)
    else:
        raise ValueError(f"unknown file format {file_format!r}")


def _guess_format(filename):
    if filename.endswith(".npy.gz"):
        return "npy.gz"
    if filename.endswith(".npy"):
        return "npy"
    if filename.endswith((".h5", ".hdf", ".hdf5")):
        return "hdf5"
    return "raw"
