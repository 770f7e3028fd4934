"""Device domains (:mod:`pyfli.domain`)
======================================

The domain of an FLI device is a bitwise combination of an interface (low
byte) and a device type (high byte). It is used to open devices and to filter
the list of connected devices.

Interfaces and device types are given by symbolic names, either as members of
:class:`Interface` and :class:`DeviceType` or as (case insensitive) strings:

============= =============================================================
Field         Symbolic names
============= =============================================================
interface     none, parallel_port, usb, serial, inet, serial_19200,
              serial_1200
device type   none, camera, filterwheel, focuser, hs_filterwheel, raw,
              enumerate_by_connection
============= =============================================================

.. autofunction:: encode_domain

.. autofunction:: decode_domain

.. autofunction:: encode_interface_domain

.. autofunction:: encode_device_domain

.. autofunction:: decode_interface_domain

.. autofunction:: decode_device_domain

"""

from pyfli._lib.constants import Interface, DeviceType
from pyfli.errors import UnknownDomainSymbol, InvalidDomainBits

__all__ = [
    "Interface",
    "DeviceType",
    "INTERFACE_MASK",
    "DEVICE_TYPE_MASK",
    "encode_domain",
    "decode_domain",
    "encode_interface_domain",
    "encode_device_domain",
    "decode_interface_domain",
    "decode_device_domain",
]

INTERFACE_MASK = 0x00FF
DEVICE_TYPE_MASK = 0xFF00


def _lookup(enum_class, sym):
    if isinstance(sym, enum_class):
        return sym
    if isinstance(sym, str):
        try:
            return enum_class[sym.strip().upper()]
        except KeyError:
            pass
    return None


def encode_interface_domain(sym):
    """Returns the :class:`Interface` corresponding to the symbolic name sym.

    :raises UnknownDomainSymbol: if sym is not an interface
    """
    val = _lookup(Interface, sym)
    if val is None:
        raise UnknownDomainSymbol(sym, f"unknown interface {sym!r}")
    return val


def encode_device_domain(sym):
    """Returns the :class:`DeviceType` corresponding to the symbolic name sym.

    :raises UnknownDomainSymbol: if sym is not a device type
    """
    val = _lookup(DeviceType, sym)
    if val is None:
        raise UnknownDomainSymbol(sym, f"unknown device type {sym!r}")
    return val


def _encode_any(sym):
    # "none" is both an interface and a device type, it encodes to 0 either way.
    val = _lookup(Interface, sym)
    if val is None:
        val = _lookup(DeviceType, sym)
    if val is None:
        raise UnknownDomainSymbol(sym)
    return val


def encode_domain(*symbols):
    """Returns the domain bits for 0, 1 or 2 symbolic names, given in any order.

    :param symbols: interface and/or device type symbolic names. A single tuple
        or list of symbols is also accepted.
    :return: domain bits
    :rtype: int
    :raises UnknownDomainSymbol: unknown name, two names of the same field, or
        more than two names

    The field of the first symbol is guessed from the byte its value
    occupies: a non-zero low byte is an interface, a non-zero high byte a
    device type. The second symbol must then belong to the other field. When
    the first symbol is ``none``, the second one may be of either field.

    >>> encode_domain("usb", "camera") == encode_domain("camera", "usb") == 0x0102
    True
    """
    if len(symbols) == 1 and isinstance(symbols[0], (tuple, list)):
        symbols = tuple(symbols[0])
    if len(symbols) == 0:
        return 0
    if len(symbols) > 2:
        raise UnknownDomainSymbol(
            symbols, f"expecting at most 2 domain symbols, got {len(symbols):d}"
        )
    bits = int(_encode_any(symbols[0]))
    if len(symbols) == 1:
        return bits
    second = symbols[1]
    if bits & INTERFACE_MASK:
        # first argument was an interface
        val = _lookup(DeviceType, second)
        if val is None:
            raise UnknownDomainSymbol(
                second, f"expecting a device type after {symbols[0]!s}, got {second!r}"
            )
    elif bits & DEVICE_TYPE_MASK:
        # first argument was a device type
        val = _lookup(Interface, second)
        if val is None:
            raise UnknownDomainSymbol(
                second, f"expecting an interface after {symbols[0]!s}, got {second!r}"
            )
    else:
        val = _encode_any(second)
    return bits | int(val)


def _check_bits(domain):
    domain = int(domain)
    if domain < 0 or domain > 0xFFFF:
        raise InvalidDomainBits("domain", domain)
    return domain


def decode_interface_domain(domain):
    """Returns the :class:`Interface` indicated in domain.

    :raises InvalidDomainBits: if the interface bits have no symbolic name
    """
    bits = _check_bits(domain) & INTERFACE_MASK
    try:
        return Interface(bits)
    except ValueError:
        raise InvalidDomainBits("interface", bits) from None


def decode_device_domain(domain):
    """Returns the :class:`DeviceType` indicated in domain.

    :raises InvalidDomainBits: if the device type bits have no symbolic name
    """
    bits = _check_bits(domain) & DEVICE_TYPE_MASK
    try:
        return DeviceType(bits)
    except ValueError:
        raise InvalidDomainBits("device type", bits) from None


def decode_domain(domain):
    """Decodes the interface and the device type indicated in domain.

    :param domain: domain bits
    :type domain: int
    :return: interface, device type
    :rtype: :class:`Interface`, :class:`DeviceType`
    :raises InvalidDomainBits: if a field has no symbolic name
    """
    return decode_interface_domain(domain), decode_device_domain(domain)
