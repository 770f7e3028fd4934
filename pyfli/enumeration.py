"""Device enumeration (:mod:`pyfli.enumeration`)
==============================================

The FLI library keeps a single list of the connected devices. The list is
created for a domain, walked entry by entry, and must be deleted afterwards.
:func:`foreach_device` manages this life cycle and calls a function for each
entry.

.. autoclass:: DeviceEntry

.. autofunction:: foreach_device

.. autofunction:: find_devices

.. autofunction:: list_devices

"""

from collections import namedtuple
import ctypes
import os
import warnings

from pyfli._lib import calls
from pyfli._lib.constants import LIST_NAME_LENGTH
from pyfli._lib.types import flidomain_t
from pyfli.device import Device
from pyfli.domain import (
    INTERFACE_MASK,
    DEVICE_TYPE_MASK,
    DeviceType,
    encode_domain,
    decode_domain,
)
from pyfli.highlevel import print_camera_info
from pyfli.errors import FLIError, FLIWarning, InvalidDomainBits

DeviceEntry = namedtuple("DeviceEntry", "domain filename devname")
DeviceEntry.__doc__ = """Device found during enumeration: domain bits, file name and device name."""


class _ListSession:
    """Device list of the library, with the buffers receiving its entries."""

    def __init__(self, domain):
        self.domain = domain
        self.entry_domain = flidomain_t()
        self.filename = ctypes.create_string_buffer(LIST_NAME_LENGTH)
        self.devname = ctypes.create_string_buffer(LIST_NAME_LENGTH)

    def __enter__(self):
        calls.FLICreateList(self.domain)
        return self

    def __exit__(self, type_, value, cb):
        status = calls.FLIDeleteList()
        if status < 0:
            if type_ is None:
                raise FLIError("FLIDeleteList", status)
            warnings.warn(
                f"FLIDeleteList failed: {os.strerror(-status):}", FLIWarning
            )

    def _entry(self):
        return (
            self.entry_domain.value & (INTERFACE_MASK | DEVICE_TYPE_MASK),
            self.filename.value.decode("ascii", errors="replace"),
            self.devname.value.decode("ascii", errors="replace"),
        )

    def __iter__(self):
        status = calls.FLIListFirst(self.entry_domain, self.filename, self.devname)
        while status == 0:
            yield self._entry()
            status = calls.FLIListNext(self.entry_domain, self.filename, self.devname)


def foreach_device(visitor, *domain):
    """Calls visitor for each connected device matching domain.

    :param visitor: function called as ``visitor(domain, filename, devname)``
    :param domain: interface and/or device type symbolic names (see :func:`pyfli.domain.encode_domain`)

    The device list is always deleted, even if visitor raises. In that case,
    the exception of visitor propagates, and a failure to delete the list is
    only reported as a :class:`~pyfli.errors.FLIWarning`.

    For instance, to print the names of the USB cameras:

    .. code-block:: python

        def walker(domain, filename, devname):
            print(filename, devname)

        foreach_device(walker, "usb", "camera")

    """
    with _ListSession(encode_domain(*domain)) as session:
        for dom, filename, devname in session:
            visitor(dom, filename, devname)


def find_devices(*domain):
    """Returns the list of connected devices matching domain.

    :rtype: list of :class:`DeviceEntry`
    """
    entries = list()

    def collect(dom, filename, devname):
        entries.append(DeviceEntry(dom, filename, devname))

    foreach_device(collect, *domain)
    return entries


def list_devices(*domain, file=None):
    """Prints the connected devices matching domain, with details for cameras.

    Errors raised while inspecting a device are printed, and do not stop the
    listing.

    :param domain: interface and/or device type symbolic names
    :param file: output stream, defaults to sys.stdout
    :return: the devices
    :rtype: list of :class:`DeviceEntry`
    """
    entries = list()

    def walker(dom, filename, devname):
        entries.append(DeviceEntry(dom, filename, devname))
        line = f'File: "{filename:}", name: "{devname:}", domain: {dom:d}'
        try:
            interface, devtype = decode_domain(dom)
        except InvalidDomainBits as e:
            print(line, file=file)
            print(" └─", e, file=file)
            return
        print(line, f"({interface!s}, {devtype!s})", file=file)
        if devtype == DeviceType.CAMERA:
            try:
                with Device(filename, dom) as cam:
                    print_camera_info(cam, file=file)
            except FLIError as e:
                print(" └─", e, file=file)

    foreach_device(walker, *domain)
    return entries
