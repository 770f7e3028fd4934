"""Errors and warnings (:mod:`pyfli.errors`)
==========================================

.. autoclass:: FLIError

.. autoclass:: FLIWarning

.. autoclass:: UnknownDomainSymbol

.. autoclass:: InvalidDomainBits

.. autoclass:: DimensionMismatch

.. autofunction:: check

"""

import os


class FLIError(Exception):
    """Exception raised when a function of the FLI library returns a negative status.

    :param func: name of the library function
    :type func: str
    :param code: status returned by the function (that is -errno)
    :type code: int
    """

    def __init__(self, func, code):
        self.func = func
        self.code = code
        super(FLIError, self).__init__(
            f"FLIError({code:d}): {os.strerror(-code):} in `{func:}`"
        )

    @property
    def errno(self):
        return -self.code


class FLIWarning(RuntimeWarning):
    pass


class UnknownDomainSymbol(ValueError):
    def __init__(self, symbol, description=None):
        self.symbol = symbol
        if description is None:
            description = f"unknown interface or device type {symbol!r}"
        super(UnknownDomainSymbol, self).__init__(description)


class InvalidDomainBits(ValueError):
    def __init__(self, field, bits):
        self.field = field
        self.bits = bits
        if bits < 0:
            description = f"invalid {field:} bits {bits:d}"
        else:
            description = f"invalid {field:} bits 0x{bits:04x}"
        super(InvalidDomainBits, self).__init__(description)


class DimensionMismatch(ValueError):
    """Raised when a destination image does not have the shape of the camera readout."""

    def __init__(self, expected, actual):
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        super(DimensionMismatch, self).__init__(
            f"destination image has incompatible dimensions {self.actual} "
            f"(expected {self.expected})"
        )


def check(func, status):
    """Raises :class:`FLIError` if status, returned by the library function func, is negative.

    :param func: name of the library function
    :type func: str
    :param status: returned status
    :type status: int
    """
    if status < 0:
        raise FLIError(func, status)
