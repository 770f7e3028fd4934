"""FLI device module (:mod:`pyfli.device`)
=========================================

This module implements the :class:`Device` class, which owns the handle of an
opened FLI device (camera, filter wheel or focuser) and exposes the functions
of the FLI library as methods.

.. autoclass:: Device
   :members:
   :private-members:

"""

from contextlib import contextmanager
from enum import Enum
import os
import warnings

import numpy as np

from pyfli._lib import calls
from pyfli._lib.types import FLI_INVALID_DEVICE
from pyfli._lib.constants import (
    BitDepth,
    FrameType,
    Shutter,
    BackgroundFlush,
    TemperatureChannel,
    FanSpeed,
    EEPROMLocation,
    encode_symbol,
)
from pyfli.domain import encode_domain
from pyfli.errors import FLIError, FLIWarning
from pyfli import acquisition, highlevel


def _domain_bits(domain):
    if len(domain) == 0:
        return encode_domain("usb", "camera")
    if (
        len(domain) == 1
        and isinstance(domain[0], int)
        and not isinstance(domain[0], Enum)
    ):
        if domain[0] < 0:
            raise ValueError(f"domain bits must be non-negative, got {domain[0]:d}")
        return int(domain[0])
    return encode_domain(*domain)


class Device:
    """Opened FLI device.

    :param name: device file name, e.g. "/dev/fliusb0" (see :func:`pyfli.find_devices`)
    :type name: str
    :param domain: interface and device type as symbolic names (see
        :mod:`pyfli.domain`), or a single integer with the domain bits. Defaults
        to an USB camera.

    The device is closed by the :meth:`close` method, at the exit of a ``with``
    block, or when the object is garbage collected.

    .. code-block:: python

        with Device("/dev/fliusb0", "usb", "camera") as cam:
            cam.set_exposure_time(0.5)
            img = cam.acquire()

    A :class:`Device` object must not be used from several threads at the
    same time. Use :meth:`locked` to protect a sequence of calls against other
    processes sharing the physical device.
    """

    def __init__(self, name, *domain):
        """Constructor method
        """
        self._dev = FLI_INVALID_DEVICE
        self._rowbuf = np.empty(0, dtype=np.uint8)
        self.name = name
        self.domain = _domain_bits(domain)
        self._dev = calls.FLIOpen(name, self.domain)

    def __repr__(self):
        state = "open" if self.is_open else "closed"
        return f"<Device {self.name!r} domain=0x{self.domain:04x} ({state})>"

    @property
    def handle(self):
        """native device handle"""
        return self._dev

    @property
    def is_open(self):
        return self._dev != FLI_INVALID_DEVICE

    def close(self, strict=True):
        """This method closes the device. Closing an already closed device does nothing.

        :param strict: raise :class:`~pyfli.errors.FLIError` if the library fails to close the
            device. Otherwise the failure is reported as a :class:`~pyfli.errors.FLIWarning`.
        :type strict: bool, optional
        """
        dev = self._dev
        if dev == FLI_INVALID_DEVICE:
            return
        self._dev = FLI_INVALID_DEVICE
        status = calls.FLIClose(dev)
        if status < 0:
            if strict:
                raise FLIError("FLIClose", status)
            warnings.warn(
                f"FLIClose failed for {self.name:}: {os.strerror(-status):}", FLIWarning
            )

    def __del__(self):
        try:
            self.close(strict=False)
        except Exception as e:
            warnings.warn(f"Device {self.name:} not closed: {e}", FLIWarning)

    def __enter__(self):
        """Context manager enter method
        """
        return self

    def __exit__(self, type_, value, cb):
        """Context manager exit method
        """
        self.close(strict=type_ is None)

    def row_buffer(self, nbytes):
        """Returns the internal row buffer, grown to at least nbytes bytes."""
        if self._rowbuf.size < nbytes:
            self._rowbuf = np.empty(nbytes, dtype=np.uint8)
        return self._rowbuf

    # Locking
    def lock(self):
        calls.FLILockDevice(self._dev)

    def unlock(self):
        calls.FLIUnlockDevice(self._dev)

    @contextmanager
    def locked(self):
        """Context manager which locks the device for exclusive access, e.g.

        .. code-block:: python

            with cam.locked():
                cam.set_exposure_time(1.0)
                cam.expose_frame()

        """
        self.lock()
        try:
            yield self
        finally:
            self.unlock()

    # Device information
    def get_model(self):
        return calls.FLIGetModel(self._dev)

    def get_serial_string(self):
        return calls.FLIGetSerialString(self._dev)

    def get_hardware_revision(self):
        return calls.FLIGetHWRevision(self._dev)

    def get_firmware_revision(self):
        return calls.FLIGetFWRevision(self._dev)

    def get_device_status(self):
        return calls.FLIGetDeviceStatus(self._dev)

    # Sensor geometry
    def get_pixel_size(self):
        """This method returns the pixel size of the camera.

        :return: xsiz, ysiz (in meters)
        :rtype: float, float
        """
        return calls.FLIGetPixelSize(self._dev)

    def get_array_area(self):
        """This method returns the area of the sensor array.
        (x0, y0) is the upper left corner and (x1, y1) the lower right one.

        :return: x0, y0, x1, y1
        :rtype: int, int, int, int
        """
        return calls.FLIGetArrayArea(self._dev)

    def get_visible_area(self):
        """This method returns the visible area of the sensor array.
        Visible pixels have coordinates (x, y) such that x0 <= x < x1 and y0 <= y < y1.

        :return: x0, y0, x1, y1
        :rtype: int, int, int, int
        """
        return calls.FLIGetVisibleArea(self._dev)

    def get_readout_dimensions(self):
        """This method returns the currently configured image area.

        :return: width, hoffset, hbin, height, voffset, vbin
        :rtype: int, int, int, int, int, int
        """
        return calls.FLIGetReadoutDimensions(self._dev)

    def set_image_area(self, x0, y0, x1, y1):
        r"""This method sets the image area. The image starts at offset (x0, y0) in physical
        pixels, and is a rectangle of width :math:`\times` height macro-pixels with
        width = x1 - x0 and height = y1 - y0. Macro-pixels are xbin :math:`\times` ybin
        physical pixels (see :meth:`set_binning`).
        """
        calls.FLISetImageArea(self._dev, int(x0), int(y0), int(x1), int(y1))

    def set_binning(self, xbin, ybin):
        calls.FLISetHBin(self._dev, int(xbin))
        calls.FLISetVBin(self._dev, int(ybin))

    # Exposure
    def set_exposure_time(self, secs):
        """This method sets the exposure time.

        :param secs: exposure time in seconds (rounded to the millisecond)
        :type secs: float
        """
        calls.FLISetExposureTime(self._dev, int(round(1e3 * secs)))

    def get_exposure_status(self):
        """This method returns the number of seconds left before the end of the exposure.
        """
        return calls.FLIGetExposureStatus(self._dev) / 1e3

    def set_frame_type(self, frametype):
        """This method sets the frame type: "normal" (shutter opens), "dark"
        (shutter remains closed), "flood" or "rbi_flush".
        """
        calls.FLISetFrameType(self._dev, encode_symbol(FrameType, frametype, "frame type"))

    def expose_frame(self):
        calls.FLIExposeFrame(self._dev)

    def cancel_exposure(self):
        calls.FLICancelExposure(self._dev)

    def end_exposure(self):
        calls.FLIEndExposure(self._dev)

    def trigger_exposure(self):
        calls.FLITriggerExposure(self._dev)

    def flush_row(self, rows, repeat):
        calls.FLIFlushRow(self._dev, rows, repeat)

    def set_nflushes(self, nflushes):
        calls.FLISetNFlushes(self._dev, nflushes)

    def control_background_flush(self, bgflush):
        """bgflush is "start" or "stop"."""
        calls.FLIControlBackgroundFlush(
            self._dev, encode_symbol(BackgroundFlush, bgflush, "background flush control")
        )

    def set_bit_depth(self, pixeltype):
        """This method sets the bit depth of the camera.

        :param pixeltype: numpy.uint8 or numpy.uint16 (or "8bit", "16bit")
        """
        calls.FLISetBitDepth(self._dev, _encode_bit_depth(pixeltype))

    def set_tdi(self, rate, flags):
        calls.FLISetTDI(self._dev, rate, flags)

    def set_dac(self, dacset):
        calls.FLISetDAC(self._dev, dacset)

    # Camera modes
    def get_camera_mode_string(self, mode):
        return calls.FLIGetCameraModeString(self._dev, mode)

    def get_camera_mode(self):
        return calls.FLIGetCameraMode(self._dev)

    def set_camera_mode(self, mode):
        calls.FLISetCameraMode(self._dev, mode)

    # Video mode
    def start_video_mode(self):
        calls.FLIStartVideoMode(self._dev)

    def stop_video_mode(self):
        calls.FLIStopVideoMode(self._dev)

    # Frame acquisition (see pyfli.acquisition)
    def grab_frame(self, dtype=np.uint16):
        return acquisition.grab_frame(self, dtype)

    def grab_frame_into(self, img):
        return acquisition.grab_frame_into(self, img)

    def grab_row(self, img, row):
        acquisition.grab_row(self, img, row)

    def grab_video_frame(self, dtype=np.uint16):
        return acquisition.grab_video_frame(self, dtype)

    def wait_exposure(self, poll=0.1, progressbar=False):
        acquisition.wait_exposure(self, poll, progressbar)

    def acquire(self, dtype=np.uint16, progressbar=False, **settings):
        return acquisition.acquire(self, dtype, progressbar, **settings)

    def configure(self, **settings):
        highlevel.configure_camera(self, **settings)

    def print_info(self, file=None):
        highlevel.print_camera_info(self, file)

    # Temperature
    def set_temperature(self, temperature):
        """This method sets the target temperature (in °C).
        The valid range is from -55°C to 45°C.
        """
        calls.FLISetTemperature(self._dev, temperature)

    def get_temperature(self):
        """This method returns the current temperature (in °C)."""
        return calls.FLIGetTemperature(self._dev)

    def read_temperature(self, channel):
        """This method returns the temperature (in °C) of the channel "internal",
        "external", "ccd" or "base".
        """
        return calls.FLIReadTemperature(
            self._dev, encode_symbol(TemperatureChannel, channel, "temperature channel")
        )

    def get_cooler_power(self):
        """This method returns the cooler power level (in percent)."""
        return calls.FLIGetCoolerPower(self._dev)

    def set_fan_speed(self, onoff):
        """onoff is "on" or "off"."""
        calls.FLISetFanSpeed(self._dev, encode_symbol(FanSpeed, onoff, "fan speed"))

    # Shutter and I/O port
    def control_shutter(self, shutter):
        """This method controls the shutter: "close", "open", "external_trigger",
        "external_trigger_low", "external_trigger_high" or "external_exposure_control".
        """
        calls.FLIControlShutter(self._dev, encode_symbol(Shutter, shutter, "shutter control"))

    def read_io_port(self):
        return calls.FLIReadIOPort(self._dev)

    def write_io_port(self, ioportset):
        calls.FLIWriteIOPort(self._dev, ioportset)

    def configure_io_port(self, ioportset):
        calls.FLIConfigureIOPort(self._dev, ioportset)

    # Filter wheel
    def get_filter_name(self, filter_):
        return calls.FLIGetFilterName(self._dev, filter_)

    def set_filter_pos(self, pos):
        calls.FLISetFilterPos(self._dev, pos)

    def get_filter_pos(self):
        return calls.FLIGetFilterPos(self._dev)

    def get_filter_count(self):
        return calls.FLIGetFilterCount(self._dev)

    def set_active_wheel(self, wheel):
        calls.FLISetActiveWheel(self._dev, wheel)

    def get_active_wheel(self):
        return calls.FLIGetActiveWheel(self._dev)

    # Focuser
    def step_motor(self, steps):
        calls.FLIStepMotor(self._dev, steps)

    def step_motor_async(self, steps):
        calls.FLIStepMotorAsync(self._dev, steps)

    def get_stepper_position(self):
        return calls.FLIGetStepperPosition(self._dev)

    def get_steps_remaining(self):
        return calls.FLIGetStepsRemaining(self._dev)

    def home_focuser(self):
        calls.FLIHomeFocuser(self._dev)

    def home_device(self):
        calls.FLIHomeDevice(self._dev)

    def get_focuser_extent(self):
        return calls.FLIGetFocuserExtent(self._dev)

    # Vertical table
    def set_vertical_table_entry(self, index, height, bin_, mode):
        calls.FLISetVerticalTableEntry(self._dev, index, height, bin_, mode)

    def get_vertical_table_entry(self, index):
        """:return: height, bin, mode"""
        return calls.FLIGetVerticalTableEntry(self._dev, index)

    def enable_vertical_table(self, width, offset, flags):
        calls.FLIEnableVerticalTable(self._dev, width, offset, flags)

    # User EEPROM
    def read_user_eeprom(self, loc, address, nbytes):
        """This method reads nbytes bytes from the EEPROM location loc ("user" or
        "pixel_map") at address.

        :rtype: bytes
        """
        return calls.FLIReadUserEEPROM(
            self._dev, encode_symbol(EEPROMLocation, loc, "EEPROM location"), address, nbytes
        )

    def write_user_eeprom(self, loc, address, data):
        calls.FLIWriteUserEEPROM(
            self._dev, encode_symbol(EEPROMLocation, loc, "EEPROM location"), address, data
        )


def _encode_bit_depth(pixeltype):
    if isinstance(pixeltype, BitDepth):
        return pixeltype
    if isinstance(pixeltype, str):
        shortcut = {"8bit": BitDepth.MODE_8BIT, "16bit": BitDepth.MODE_16BIT}
        if pixeltype.lower() in shortcut:
            return shortcut[pixeltype.lower()]
        return encode_symbol(BitDepth, pixeltype, "bit depth")
    try:
        dtype = np.dtype(pixeltype)
    except TypeError:
        raise ValueError(f"unknown pixel type {pixeltype!r}") from None
    if dtype == np.uint8:
        return BitDepth.MODE_8BIT
    if dtype == np.uint16:
        return BitDepth.MODE_16BIT
    raise ValueError(f"unsupported pixel type {dtype}, expecting uint8 or uint16")
