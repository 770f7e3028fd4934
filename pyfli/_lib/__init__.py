"""

FLI shared library finding

The library is looked up the first time a native function is called. The
``PYFLI_LIBRARY`` environment variable, if set, gives the path of the shared
library and bypasses the search.

"""

import ctypes
from ctypes.util import find_library
import os

LIBRARY_ENV = "PYFLI_LIBRARY"

_library = None


def library_path():
    """Returns the path (or name) of the FLI shared library to load.

    :return: library path, or None if it cannot be found
    :rtype: str
    """
    path = os.environ.get(LIBRARY_ENV)
    if path:
        return path
    for name in ("fli", "libfli", "libfli64"):
        path = find_library(name)
        if path:
            return path
    return None


def load_library(path=None):
    """Loads the FLI shared library and makes it the one used by all native calls.

    :param path: path of the shared library, defaults to :func:`library_path`
    :type path: str, optional
    :return: the loaded library
    """
    global _library

    if path is None:
        path = library_path()
    if path is None:
        raise OSError(
            f"FLI shared library not found. Set the {LIBRARY_ENV:} environment "
            "variable to the path of libfli."
        )
    if os.name == "nt":
        _library = ctypes.windll.LoadLibrary(path)
    else:
        _library = ctypes.cdll.LoadLibrary(path)
    return _library


def get_lib():
    """Returns the FLI shared library, loading it on first use."""
    if _library is None:
        return load_library()
    return _library
