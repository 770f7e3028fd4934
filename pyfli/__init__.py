"""

Python wrapper for the Finger Lakes Instrumentation (FLI) library

"""

from ._lib.constants import *
from ._lib import calls
from .errors import (
    FLIError,
    FLIWarning,
    UnknownDomainSymbol,
    InvalidDomainBits,
    DimensionMismatch,
)
from .domain import (
    INTERFACE_MASK,
    DEVICE_TYPE_MASK,
    encode_domain,
    decode_domain,
    encode_interface_domain,
    encode_device_domain,
    decode_interface_domain,
    decode_device_domain,
)
from .device import Device
from .acquisition import (
    readout_shape,
    grab_frame,
    grab_frame_into,
    unsafe_grab_frame,
    grab_row,
    grab_video_frame,
    wait_exposure,
    acquire,
    save_frame,
)
from .highlevel import print_camera_info, configure_camera
from .enumeration import DeviceEntry, foreach_device, find_devices, list_devices

__version__ = "0.1.0"


def get_lib_version():
    """Returns the version string of the FLI library."""
    return calls.FLIGetLibVersion()


def set_debug_level(host, level):
    """Sets the debug level of the FLI library.

    :param host: name of the file receiving the messages (ignored on some platforms)
    :type host: str
    :param level: "none", "fail", "warn", "info", "io" or "all"
    :type level: str or :class:`DebugLevel`
    """
    calls.FLISetDebugLevel(
        host, encode_symbol(DebugLevel, level, "debug level")  # noqa: F405
    )
