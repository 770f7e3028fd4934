"""

Prototypes of the FLI library functions.

Each function declares the C prototype, calls the library and raises
:class:`~pyfli.errors.FLIError` if the returned status is negative. Output
arguments are returned as Python values.

The following functions return the raw status instead, because the caller
decides what a failure means:

- FLIClose
- FLIDeleteList
- FLIListFirst
- FLIListNext

"""

import ctypes
import os

from pyfli._lib import get_lib
from pyfli._lib.constants import STRING_LENGTH
from pyfli._lib.types import (
    flidev_t,
    flidomain_t,
    fliframe_t,
    flibitdepth_t,
    flishutter_t,
    flibgflush_t,
    flichannel_t,
    flidebug_t,
    flimode_t,
    flitdirate_t,
    flitdiflags_t,
    status_t,
    FLI_INVALID_DEVICE,
)
from pyfli.errors import check

c_long_p = ctypes.POINTER(ctypes.c_long)
c_double_p = ctypes.POINTER(ctypes.c_double)


def _prototype(name, argtypes, restype=status_t):
    f = getattr(get_lib(), name)
    f.argtypes = argtypes
    f.restype = restype
    return f


def _call(name, argtypes, *args):
    f = _prototype(name, argtypes)
    status = f(*args)
    check(name, status)
    return status


def _buffer_pointer(buff):
    """Returns a void pointer to the data of a writable numpy array."""
    if not buff.flags.writeable:
        raise ValueError("buffer is read-only")
    return buff.ctypes.data_as(ctypes.c_void_p)


def _get_string(name, dev, *args):
    buf = ctypes.create_string_buffer(STRING_LENGTH)
    argtypes = (flidev_t,) + tuple(ctypes.c_long for _ in args)
    _call(name, argtypes + (ctypes.c_char_p, ctypes.c_size_t), dev, *args, buf, len(buf))
    return buf.value.decode("ascii", errors="replace")


def _get_long(name, dev):
    val = ctypes.c_long()
    _call(name, (flidev_t, c_long_p), dev, ctypes.byref(val))
    return val.value


def _get_double(name, dev):
    val = ctypes.c_double()
    _call(name, (flidev_t, c_double_p), dev, ctypes.byref(val))
    return val.value


def _get_area(name, dev):
    x0 = ctypes.c_long()
    y0 = ctypes.c_long()
    x1 = ctypes.c_long()
    y1 = ctypes.c_long()
    _call(
        name,
        (flidev_t, c_long_p, c_long_p, c_long_p, c_long_p),
        dev,
        ctypes.byref(x0),
        ctypes.byref(y0),
        ctypes.byref(x1),
        ctypes.byref(y1),
    )
    return x0.value, y0.value, x1.value, y1.value


# Library

def FLIGetLibVersion():
    buf = ctypes.create_string_buffer(STRING_LENGTH)
    _call("FLIGetLibVersion", (ctypes.c_char_p, ctypes.c_size_t), buf, len(buf))
    return buf.value.decode("ascii", errors="replace")


def FLISetDebugLevel(host, level):
    _call(
        "FLISetDebugLevel", (ctypes.c_char_p, flidebug_t), os.fsencode(host), level
    )


# Device handle

def FLIOpen(name, domain):
    dev = flidev_t(FLI_INVALID_DEVICE)
    _call(
        "FLIOpen",
        (ctypes.POINTER(flidev_t), ctypes.c_char_p, flidomain_t),
        ctypes.byref(dev),
        os.fsencode(name),
        domain,
    )
    return dev.value


def FLIClose(dev):
    f = _prototype("FLIClose", (flidev_t,))
    return f(dev)


def FLILockDevice(dev):
    _call("FLILockDevice", (flidev_t,), dev)


def FLIUnlockDevice(dev):
    _call("FLIUnlockDevice", (flidev_t,), dev)


# Device list

def FLICreateList(domain):
    _call("FLICreateList", (flidomain_t,), domain)


def FLIDeleteList():
    f = _prototype("FLIDeleteList", ())
    return f()


def _list_entry(name, domain, filename, devname):
    f = _prototype(
        name,
        (
            ctypes.POINTER(flidomain_t),
            ctypes.c_char_p,
            ctypes.c_size_t,
            ctypes.c_char_p,
            ctypes.c_size_t,
        ),
    )
    return f(ctypes.byref(domain), filename, len(filename), devname, len(devname))


def FLIListFirst(domain, filename, devname):
    """Fetches the first entry of the device list into domain (a flidomain_t),
    and the string buffers filename and devname. Returns the raw status.
    """
    return _list_entry("FLIListFirst", domain, filename, devname)


def FLIListNext(domain, filename, devname):
    """Same as :func:`FLIListFirst` for the next entries of the list."""
    return _list_entry("FLIListNext", domain, filename, devname)


# Device information

def FLIGetModel(dev):
    return _get_string("FLIGetModel", dev)


def FLIGetSerialString(dev):
    return _get_string("FLIGetSerialString", dev)


def FLIGetHWRevision(dev):
    return _get_long("FLIGetHWRevision", dev)


def FLIGetFWRevision(dev):
    return _get_long("FLIGetFWRevision", dev)


def FLIGetDeviceStatus(dev):
    return _get_long("FLIGetDeviceStatus", dev)


def FLIGetPixelSize(dev):
    xsiz = ctypes.c_double()
    ysiz = ctypes.c_double()
    _call(
        "FLIGetPixelSize",
        (flidev_t, c_double_p, c_double_p),
        dev,
        ctypes.byref(xsiz),
        ctypes.byref(ysiz),
    )
    return xsiz.value, ysiz.value


def FLIGetArrayArea(dev):
    return _get_area("FLIGetArrayArea", dev)


def FLIGetVisibleArea(dev):
    return _get_area("FLIGetVisibleArea", dev)


def FLIGetReadoutDimensions(dev):
    width = ctypes.c_long()
    hoffset = ctypes.c_long()
    hbin = ctypes.c_long()
    height = ctypes.c_long()
    voffset = ctypes.c_long()
    vbin = ctypes.c_long()
    _call(
        "FLIGetReadoutDimensions",
        (flidev_t,) + (c_long_p,) * 6,
        dev,
        ctypes.byref(width),
        ctypes.byref(hoffset),
        ctypes.byref(hbin),
        ctypes.byref(height),
        ctypes.byref(voffset),
        ctypes.byref(vbin),
    )
    return (
        width.value,
        hoffset.value,
        hbin.value,
        height.value,
        voffset.value,
        vbin.value,
    )


# Camera settings

def FLISetImageArea(dev, ul_x, ul_y, lr_x, lr_y):
    _call(
        "FLISetImageArea", (flidev_t,) + (ctypes.c_long,) * 4, dev, ul_x, ul_y, lr_x, lr_y
    )


def FLISetHBin(dev, hbin):
    _call("FLISetHBin", (flidev_t, ctypes.c_long), dev, hbin)


def FLISetVBin(dev, vbin):
    _call("FLISetVBin", (flidev_t, ctypes.c_long), dev, vbin)


def FLISetExposureTime(dev, exptime):
    """exptime is in milliseconds"""
    _call("FLISetExposureTime", (flidev_t, ctypes.c_long), dev, exptime)


def FLIGetExposureStatus(dev):
    """Returns the time left, in milliseconds"""
    return _get_long("FLIGetExposureStatus", dev)


def FLISetFrameType(dev, frametype):
    _call("FLISetFrameType", (flidev_t, fliframe_t), dev, frametype)


def FLISetBitDepth(dev, bitdepth):
    _call("FLISetBitDepth", (flidev_t, flibitdepth_t), dev, bitdepth)


def FLISetNFlushes(dev, nflushes):
    _call("FLISetNFlushes", (flidev_t, ctypes.c_long), dev, nflushes)


def FLIFlushRow(dev, rows, repeat):
    _call("FLIFlushRow", (flidev_t, ctypes.c_long, ctypes.c_long), dev, rows, repeat)


def FLIControlBackgroundFlush(dev, bgflush):
    _call("FLIControlBackgroundFlush", (flidev_t, flibgflush_t), dev, bgflush)


def FLIControlShutter(dev, shutter):
    _call("FLIControlShutter", (flidev_t, flishutter_t), dev, shutter)


def FLISetDAC(dev, dacset):
    _call("FLISetDAC", (flidev_t, ctypes.c_ulong), dev, dacset)


def FLISetTDI(dev, tdi_rate, flags):
    _call("FLISetTDI", (flidev_t, flitdirate_t, flitdiflags_t), dev, tdi_rate, flags)


def FLIGetCameraModeString(dev, mode_index):
    return _get_string("FLIGetCameraModeString", dev, mode_index)


def FLIGetCameraMode(dev):
    mode = flimode_t()
    _call(
        "FLIGetCameraMode", (flidev_t, ctypes.POINTER(flimode_t)), dev, ctypes.byref(mode)
    )
    return mode.value


def FLISetCameraMode(dev, mode_index):
    _call("FLISetCameraMode", (flidev_t, flimode_t), dev, mode_index)


# Exposure and readout

def FLIExposeFrame(dev):
    _call("FLIExposeFrame", (flidev_t,), dev)


def FLICancelExposure(dev):
    _call("FLICancelExposure", (flidev_t,), dev)


def FLIEndExposure(dev):
    _call("FLIEndExposure", (flidev_t,), dev)


def FLITriggerExposure(dev):
    _call("FLITriggerExposure", (flidev_t,), dev)


def FLIGrabRow(dev, buff, width):
    """Downloads the next row of width pixels into the numpy array buff."""
    _call(
        "FLIGrabRow",
        (flidev_t, ctypes.c_void_p, ctypes.c_size_t),
        dev,
        _buffer_pointer(buff),
        width,
    )


def FLIGrabVideoFrame(dev, buff):
    _call(
        "FLIGrabVideoFrame",
        (flidev_t, ctypes.c_void_p, ctypes.c_size_t),
        dev,
        _buffer_pointer(buff),
        buff.nbytes,
    )


def FLIStartVideoMode(dev):
    _call("FLIStartVideoMode", (flidev_t,), dev)


def FLIStopVideoMode(dev):
    _call("FLIStopVideoMode", (flidev_t,), dev)


# Temperature

def FLISetTemperature(dev, temperature):
    _call("FLISetTemperature", (flidev_t, ctypes.c_double), dev, temperature)


def FLIGetTemperature(dev):
    return _get_double("FLIGetTemperature", dev)


def FLIReadTemperature(dev, channel):
    temp = ctypes.c_double()
    _call(
        "FLIReadTemperature",
        (flidev_t, flichannel_t, c_double_p),
        dev,
        channel,
        ctypes.byref(temp),
    )
    return temp.value


def FLIGetCoolerPower(dev):
    return _get_double("FLIGetCoolerPower", dev)


def FLISetFanSpeed(dev, fan_speed):
    _call("FLISetFanSpeed", (flidev_t, ctypes.c_long), dev, fan_speed)


# I/O port

def FLIReadIOPort(dev):
    return _get_long("FLIReadIOPort", dev)


def FLIWriteIOPort(dev, ioportset):
    _call("FLIWriteIOPort", (flidev_t, ctypes.c_long), dev, ioportset)


def FLIConfigureIOPort(dev, ioportset):
    _call("FLIConfigureIOPort", (flidev_t, ctypes.c_long), dev, ioportset)


# Filter wheel

def FLIGetFilterName(dev, filter_):
    return _get_string("FLIGetFilterName", dev, filter_)


def FLISetActiveWheel(dev, wheel):
    _call("FLISetActiveWheel", (flidev_t, ctypes.c_long), dev, wheel)


def FLIGetActiveWheel(dev):
    return _get_long("FLIGetActiveWheel", dev)


def FLISetFilterPos(dev, filter_):
    _call("FLISetFilterPos", (flidev_t, ctypes.c_long), dev, filter_)


def FLIGetFilterPos(dev):
    return _get_long("FLIGetFilterPos", dev)


def FLIGetFilterCount(dev):
    return _get_long("FLIGetFilterCount", dev)


# Focuser

def FLIStepMotor(dev, steps):
    _call("FLIStepMotor", (flidev_t, ctypes.c_long), dev, steps)


def FLIStepMotorAsync(dev, steps):
    _call("FLIStepMotorAsync", (flidev_t, ctypes.c_long), dev, steps)


def FLIGetStepperPosition(dev):
    return _get_long("FLIGetStepperPosition", dev)


def FLIGetStepsRemaining(dev):
    return _get_long("FLIGetStepsRemaining", dev)


def FLIHomeFocuser(dev):
    _call("FLIHomeFocuser", (flidev_t,), dev)


def FLIHomeDevice(dev):
    _call("FLIHomeDevice", (flidev_t,), dev)


def FLIGetFocuserExtent(dev):
    return _get_long("FLIGetFocuserExtent", dev)


# Vertical table

def FLISetVerticalTableEntry(dev, index, height, bin_, mode):
    _call(
        "FLISetVerticalTableEntry",
        (flidev_t,) + (ctypes.c_long,) * 4,
        dev,
        index,
        height,
        bin_,
        mode,
    )


def FLIGetVerticalTableEntry(dev, index):
    height = ctypes.c_long()
    bin_ = ctypes.c_long()
    mode = ctypes.c_long()
    _call(
        "FLIGetVerticalTableEntry",
        (flidev_t, ctypes.c_long, c_long_p, c_long_p, c_long_p),
        dev,
        index,
        ctypes.byref(height),
        ctypes.byref(bin_),
        ctypes.byref(mode),
    )
    return height.value, bin_.value, mode.value


def FLIEnableVerticalTable(dev, width, offset, flags):
    _call(
        "FLIEnableVerticalTable",
        (flidev_t, ctypes.c_long, ctypes.c_long, ctypes.c_long),
        dev,
        width,
        offset,
        flags,
    )


# User EEPROM

def FLIReadUserEEPROM(dev, loc, address, length):
    rbuf = ctypes.create_string_buffer(length)
    _call(
        "FLIReadUserEEPROM",
        (flidev_t, ctypes.c_long, ctypes.c_long, ctypes.c_long, ctypes.c_void_p),
        dev,
        loc,
        address,
        length,
        rbuf,
    )
    return rbuf.raw


def FLIWriteUserEEPROM(dev, loc, address, data):
    wbuf = ctypes.create_string_buffer(bytes(data), len(data))
    _call(
        "FLIWriteUserEEPROM",
        (flidev_t, ctypes.c_long, ctypes.c_long, ctypes.c_long, ctypes.c_void_p),
        dev,
        loc,
        address,
        len(data),
        wbuf,
    )
