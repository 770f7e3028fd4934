import errno

import numpy as np
import pytest

from pyfli.device import Device
from pyfli.errors import FLIError, FLIWarning
from pyfli._lib.constants import FrameType, BitDepth, Shutter, TemperatureChannel


def test_open_close(fakelib):
    """

    Test that the device is opened with the expected name and domain, and
    closed only once

    """

    cam = Device("/dev/fliusb0", "usb", "camera")
    assert cam.is_open
    _, name, domain = fakelib.last_args("FLIOpen")
    assert name == b"/dev/fliusb0"
    assert domain == 0x0102
    cam.close()
    assert not cam.is_open
    cam.close()
    assert fakelib.count("FLIClose") == 1
    assert fakelib.last_args("FLIClose") == (1,)


def test_domain_arguments(fakelib):
    with Device("/dev/fliusb0") as cam:
        assert cam.domain == 0x0102
    with Device("/dev/ttyS0", "focuser", "serial") as dev:
        assert dev.domain == 0x0303
    with Device("/dev/fliusb1", 0x0202) as dev:
        assert dev.domain == 0x0202
    with pytest.raises(ValueError):
        Device("/dev/fliusb0", -1)
    assert fakelib.count("FLIOpen") == fakelib.count("FLIClose") == 3


def test_open_failure(fakelib):
    fakelib.failures["FLIOpen"] = -errno.ENODEV
    with pytest.raises(FLIError) as excinfo:
        Device("/dev/fliusb9")
    assert excinfo.value.func == "FLIOpen"
    assert excinfo.value.code == -errno.ENODEV
    assert excinfo.value.errno == errno.ENODEV
    assert "FLIOpen" in str(excinfo.value)
    assert fakelib.count("FLIClose") == 0


def test_context_manager(fakelib):
    with Device("/dev/fliusb0") as cam:
        assert cam.is_open
    assert not cam.is_open
    assert fakelib.count("FLIClose") == 1


def test_context_manager_close_failure(fakelib):
    """

    Test that a close failure is raised on normal exit, but only reported as a
    warning when the body of the with statement raised

    """

    fakelib.failures["FLIClose"] = -errno.EIO
    with pytest.raises(FLIError) as excinfo:
        with Device("/dev/fliusb0"):
            pass
    assert excinfo.value.func == "FLIClose"

    with pytest.warns(FLIWarning):
        with pytest.raises(RuntimeError, match="exposure failed"):
            with Device("/dev/fliusb0") as cam:
                raise RuntimeError("exposure failed")
    assert not cam.is_open
    assert fakelib.count("FLIClose") == 2


def test_close_failure(fakelib):
    cam = Device("/dev/fliusb0")
    fakelib.failures["FLIClose"] = -errno.EIO
    with pytest.raises(FLIError):
        cam.close()
    assert not cam.is_open
    cam.close()
    assert fakelib.count("FLIClose") == 1

    cam = Device("/dev/fliusb0")
    with pytest.warns(FLIWarning):
        cam.close(strict=False)
    assert not cam.is_open


def test_finalizer(fakelib):
    cam = Device("/dev/fliusb0")
    fakelib.failures["FLIClose"] = -errno.EIO
    with pytest.warns(FLIWarning):
        cam.__del__()
    assert not cam.is_open
    del cam
    assert fakelib.count("FLIClose") == 1

    del fakelib.failures["FLIClose"]
    cam = Device("/dev/fliusb0")
    del cam
    assert fakelib.count("FLIClose") == 2


def test_locked(camera, fakelib):
    with pytest.raises(RuntimeError):
        with camera.locked():
            assert fakelib.names()[-1] == "FLILockDevice"
            raise RuntimeError("inside lock")
    assert fakelib.names()[-1] == "FLIUnlockDevice"


def test_exposure_settings(camera, fakelib):
    camera.set_exposure_time(0.5)
    assert fakelib.last_args("FLISetExposureTime") == (1, 500)
    camera.set_exposure_time(0.0504)
    assert fakelib.last_args("FLISetExposureTime") == (1, 50)
    fakelib.exposure_left = [1500]
    assert camera.get_exposure_status() == 1.5
    camera.set_frame_type("dark")
    assert fakelib.last_args("FLISetFrameType") == (1, FrameType.DARK)
    camera.set_frame_type(FrameType.RBI_FLUSH)
    assert fakelib.last_args("FLISetFrameType")[1] == 3
    with pytest.raises(ValueError):
        camera.set_frame_type("bright")


def test_bit_depth(camera, fakelib):
    camera.set_bit_depth(np.uint8)
    assert fakelib.bitdepth == BitDepth.MODE_8BIT
    camera.set_bit_depth("16bit")
    assert fakelib.bitdepth == BitDepth.MODE_16BIT
    camera.set_bit_depth("mode_8bit")
    assert fakelib.bitdepth == BitDepth.MODE_8BIT
    with pytest.raises(ValueError):
        camera.set_bit_depth(np.float32)
    with pytest.raises(ValueError):
        camera.set_bit_depth("12bit")


def test_symbolic_controls(camera, fakelib):
    camera.control_shutter("external_trigger_low")
    assert fakelib.last_args("FLIControlShutter")[1] == Shutter.EXTERNAL_TRIGGER
    camera.read_temperature("ccd")
    assert fakelib.last_args("FLIReadTemperature")[1] == TemperatureChannel.INTERNAL
    camera.set_fan_speed("off")
    assert fakelib.last_args("FLISetFanSpeed")[1] == 0
    camera.control_background_flush("start")
    assert fakelib.last_args("FLIControlBackgroundFlush")[1] == 1
    with pytest.raises(ValueError):
        camera.set_fan_speed("half")


def test_geometry(camera, fakelib):
    assert camera.get_array_area() == (0, 0, 4096, 4096)
    assert camera.get_visible_area() == (10, 2, 4106, 4098)
    assert camera.get_readout_dimensions() == (8, 0, 1, 6, 0, 1)
    assert camera.get_pixel_size() == (9e-6, 9e-6)
    camera.set_image_area(0, 0, 8, 6)
    assert fakelib.last_args("FLISetImageArea") == (1, 0, 0, 8, 6)
    camera.set_binning(2, 4)
    assert fakelib.last_args("FLISetHBin") == (1, 2)
    assert fakelib.last_args("FLISetVBin") == (1, 4)


def test_information(camera, fakelib):
    assert camera.get_model() == "MicroLine ML4240"
    assert camera.get_serial_string() == "ML0123456"
    assert camera.get_hardware_revision() == 256
    assert camera.get_firmware_revision() == 512
    assert camera.get_temperature() == -20.5
    assert camera.get_filter_name(2) == "Filter 2"
    assert camera.read_user_eeprom("user", 4, 3) == b"\x04\x05\x06"


def test_call_failure(camera, fakelib):
    fakelib.failures["FLIExposeFrame"] = -errno.EBUSY
    with pytest.raises(FLIError) as excinfo:
        camera.expose_frame()
    assert excinfo.value.errno == errno.EBUSY
