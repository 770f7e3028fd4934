"""

FLI library constants (libfli.h)

"""

from enum import IntEnum

__all__ = [
    "LIST_NAME_LENGTH",
    "STRING_LENGTH",
    "SymbolicEnum",
    "encode_symbol",
    "Interface",
    "DeviceType",
    "FrameType",
    "BitDepth",
    "Shutter",
    "BackgroundFlush",
    "TemperatureChannel",
    "DebugLevel",
    "FanSpeed",
    "EEPROMLocation",
    "FLI_CAMERA_STATUS_UNKNOWN",
    "FLI_CAMERA_STATUS_MASK",
    "FLI_CAMERA_DATA_READY",
    "FLI_FOCUSER_STATUS_UNKNOWN",
    "FLI_FOCUSER_STATUS_MOVING_MASK",
    "FLI_FILTER_WHEEL_PHYSICAL",
    "FLI_FILTER_WHEEL_VIRTUAL",
    "FLI_FILTER_WHEEL_LEFT",
    "FLI_FILTER_WHEEL_RIGHT",
    "FLI_FILTER_POSITION_UNKNOWN",
    "FLI_FILTER_POSITION_CURRENT",
    "FLI_IO_P0",
    "FLI_IO_P1",
    "FLI_IO_P2",
    "FLI_IO_P3",
]

# Size of the file name and device name buffers used while listing devices
LIST_NAME_LENGTH = 260

# Size of the buffers for strings returned by the library (model, serial, ...)
STRING_LENGTH = 256


class SymbolicEnum(IntEnum):
    """Base class of the library enumerations which have a symbolic name,
    i.e. the lower case name of the member (``"usb"``, ``"camera"``, ``"dark"``...).
    """

    def __str__(self):
        return self.name.lower()


def encode_symbol(enum_class, sym, what):
    """Converts a symbolic name, or a member of enum_class, into a member of enum_class.

    :param enum_class: the enumeration
    :type enum_class: type
    :param sym: symbolic name (case insensitive) or enumeration member
    :type sym: str or enum_class
    :param what: description used in the error message
    :type what: str
    :return: enumeration member
    :raises ValueError: if sym is not a valid symbol
    """
    if isinstance(sym, enum_class):
        return sym
    if isinstance(sym, str):
        try:
            return enum_class[sym.strip().upper()]
        except KeyError:
            pass
    raise ValueError(f"unknown {what:} {sym!r}")


class Interface(SymbolicEnum):
    NONE = 0x00
    PARALLEL_PORT = 0x01
    USB = 0x02
    SERIAL = 0x03
    INET = 0x04
    SERIAL_19200 = 0x05
    SERIAL_1200 = 0x06


class DeviceType(SymbolicEnum):
    NONE = 0x0000
    CAMERA = 0x0100
    FILTERWHEEL = 0x0200
    FOCUSER = 0x0300
    HS_FILTERWHEEL = 0x0400
    RAW = 0x0F00
    ENUMERATE_BY_CONNECTION = 0x8000


class FrameType(SymbolicEnum):
    NORMAL = 0
    DARK = 1
    FLOOD = 2
    RBI_FLUSH = 3  # FLOOD | DARK


class BitDepth(SymbolicEnum):
    MODE_8BIT = 0
    MODE_16BIT = 1


class Shutter(SymbolicEnum):
    CLOSE = 0x0000
    OPEN = 0x0001
    EXTERNAL_TRIGGER = 0x0002
    EXTERNAL_TRIGGER_LOW = 0x0002
    EXTERNAL_TRIGGER_HIGH = 0x0004
    EXTERNAL_EXPOSURE_CONTROL = 0x0008


class BackgroundFlush(SymbolicEnum):
    STOP = 0x0000
    START = 0x0001


class TemperatureChannel(SymbolicEnum):
    INTERNAL = 0x0000
    EXTERNAL = 0x0001
    CCD = 0x0000
    BASE = 0x0001


class DebugLevel(SymbolicEnum):
    NONE = 0x00
    INFO = 0x01
    WARN = 0x02
    FAIL = 0x04
    IO = 0x08
    ALL = 0x07  # INFO | WARN | FAIL


class FanSpeed(SymbolicEnum):
    OFF = 0x00
    ON = 0xFFFFFFFF


class EEPROMLocation(SymbolicEnum):
    USER = 0x00
    PIXEL_MAP = 0x01


# The following values are returned by FLIGetDeviceStatus
FLI_CAMERA_STATUS_UNKNOWN = 0xFFFFFFFF
FLI_CAMERA_STATUS_MASK = 0x00000003
FLI_CAMERA_DATA_READY = 0x80000000

FLI_FOCUSER_STATUS_UNKNOWN = 0xFFFFFFFF
FLI_FOCUSER_STATUS_MOVING_MASK = 0x00000007

FLI_FILTER_WHEEL_PHYSICAL = 0x0100
FLI_FILTER_WHEEL_VIRTUAL = 0
FLI_FILTER_WHEEL_LEFT = FLI_FILTER_WHEEL_PHYSICAL | 0x00
FLI_FILTER_WHEEL_RIGHT = FLI_FILTER_WHEEL_PHYSICAL | 0x01

FLI_FILTER_POSITION_UNKNOWN = 0xFF
FLI_FILTER_POSITION_CURRENT = 0x0200

FLI_IO_P0 = 0x01
FLI_IO_P1 = 0x02
FLI_IO_P2 = 0x04
FLI_IO_P3 = 0x08
