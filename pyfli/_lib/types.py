"""

C types used by the FLI library (libfli.h)

"""

import ctypes

flidev_t = ctypes.c_long
flidomain_t = ctypes.c_long
fliframe_t = ctypes.c_long
flibitdepth_t = ctypes.c_long
flishutter_t = ctypes.c_long
flibgflush_t = ctypes.c_long
flichannel_t = ctypes.c_long
flidebug_t = ctypes.c_long
flimode_t = ctypes.c_long
flistatus_t = ctypes.c_long
flitdirate_t = ctypes.c_long
flitdiflags_t = ctypes.c_long

# Every function of the library returns a long: 0 or a positive value on
# success, -errno on failure.
status_t = ctypes.c_long

FLI_INVALID_DEVICE = -1
