"""

Fake FLI library for the tests

The fake library replaces the shared library loaded by :mod:`pyfli._lib`.
Its functions receive the same arguments as the native ones (ctypes objects,
references and pointers) and emulate one camera.

"""

import ctypes

import numpy as np
import pytest

import pyfli._lib
from pyfli._lib.constants import BitDepth


def _set(ref, value):
    """Writes value into the ctypes variable passed by reference."""
    ref._obj.value = value


def row_pattern(row, width):
    return (np.arange(width) + 10 * row) % 256


def expected_frame(height, width):
    return np.array([row_pattern(j, width) for j in range(height)])


class FakeFunction:
    def __init__(self, lib, name):
        self.lib = lib
        self.name = name
        self.argtypes = None
        self.restype = None

    def __call__(self, *args):
        self.lib.calls.append((self.name, args))
        if self.name in self.lib.failures:
            return self.lib.failures[self.name]
        impl = getattr(self.lib, "_" + self.name, None)
        if impl is None:
            return 0
        return impl(*args)


class FakeLibrary:
    def __init__(self):
        self._functions = dict()
        self.calls = list()
        self.failures = dict()
        self.devices = list()
        self.next_handle = 1
        self.model = "MicroLine ML4240"
        self.serial = "ML0123456"
        self.array_area = (0, 0, 4096, 4096)
        self.visible_area = (10, 2, 4106, 4098)
        # width, hoffset, hbin, height, voffset, vbin
        self.readout = [8, 0, 1, 6, 0, 1]
        self.exposure_left = list()
        self.bitdepth = BitDepth.MODE_16BIT
        self.rows_grabbed = 0
        self.row_addresses = list()
        self.grab_row_failure = None

    def __getattr__(self, name):
        if not name.startswith("FLI"):
            raise AttributeError(name)
        if name not in self._functions:
            self._functions[name] = FakeFunction(self, name)
        return self._functions[name]

    # Call inspection
    def names(self):
        return [name for name, _ in self.calls]

    def count(self, name):
        return self.names().count(name)

    def last_args(self, name):
        for n, args in reversed(self.calls):
            if n == name:
                return args
        raise KeyError(name)

    # Library
    def _FLIGetLibVersion(self, buf, size):
        buf.value = b"Software Development Library for Linux 1.104"
        return 0

    # Device handle
    def _FLIOpen(self, dev_ref, name, domain):
        _set(dev_ref, self.next_handle)
        self.next_handle += 1
        return 0

    # Device list
    def _FLICreateList(self, domain):
        self._list_position = 0
        return 0

    def _list_entry(self, domain_ref, filename, flen, devname, dlen):
        if self._list_position >= len(self.devices):
            return -1
        domain, fname, dname = self.devices[self._list_position]
        self._list_position += 1
        _set(domain_ref, domain)
        filename.value = fname.encode("ascii")
        devname.value = dname.encode("ascii")
        return 0

    def _FLIListFirst(self, *args):
        self._list_position = 0
        return self._list_entry(*args)

    def _FLIListNext(self, *args):
        return self._list_entry(*args)

    # Device information
    def _FLIGetModel(self, dev, buf, size):
        buf.value = self.model.encode("ascii")
        return 0

    def _FLIGetSerialString(self, dev, buf, size):
        buf.value = self.serial.encode("ascii")
        return 0

    def _FLIGetFilterName(self, dev, filter_, buf, size):
        buf.value = f"Filter {filter_:d}".encode("ascii")
        return 0

    def _FLIGetHWRevision(self, dev, ref):
        _set(ref, 256)
        return 0

    def _FLIGetFWRevision(self, dev, ref):
        _set(ref, 512)
        return 0

    def _FLIGetArrayArea(self, dev, *refs):
        for ref, val in zip(refs, self.array_area):
            _set(ref, val)
        return 0

    def _FLIGetVisibleArea(self, dev, *refs):
        for ref, val in zip(refs, self.visible_area):
            _set(ref, val)
        return 0

    def _FLIGetReadoutDimensions(self, dev, *refs):
        for ref, val in zip(refs, self.readout):
            _set(ref, val)
        return 0

    def _FLIGetPixelSize(self, dev, xref, yref):
        _set(xref, 9e-6)
        _set(yref, 9e-6)
        return 0

    def _FLIGetTemperature(self, dev, ref):
        _set(ref, -20.5)
        return 0

    # Exposure and readout
    def _FLISetBitDepth(self, dev, bitdepth):
        self.bitdepth = bitdepth
        return 0

    def _FLIGetExposureStatus(self, dev, ref):
        _set(ref, self.exposure_left.pop(0) if self.exposure_left else 0)
        return 0

    def _FLIGrabRow(self, dev, buff, width):
        if self.grab_row_failure == self.rows_grabbed:
            return -5  # -EIO
        address = buff.value
        self.row_addresses.append(address)
        if self.bitdepth == BitDepth.MODE_8BIT:
            data = row_pattern(self.rows_grabbed, width).astype(np.uint8)
        else:
            data = row_pattern(self.rows_grabbed, width).astype(np.uint16)
        ctypes.memmove(address, data.ctypes.data, data.nbytes)
        self.rows_grabbed += 1
        return 0

    def _FLIGrabVideoFrame(self, dev, buff, size):
        ctypes.memset(buff.value, 7, size)
        return 0

    # User EEPROM
    def _FLIReadUserEEPROM(self, dev, loc, address, length, rbuf):
        data = bytes(range(address, address + length))
        ctypes.memmove(rbuf, data, length)
        return 0


@pytest.fixture
def fakelib(monkeypatch):
    lib = FakeLibrary()
    monkeypatch.setattr(pyfli._lib, "_library", lib)
    return lib


@pytest.fixture
def camera(fakelib):
    from pyfli.device import Device

    with Device("/dev/fliusb0", "usb", "camera") as cam:
        yield cam
