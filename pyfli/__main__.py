"""

pyfli CLI interface

"""

from argparse import ArgumentParser
import sys

import numpy as np
from fluiddyn.util.terminal_colors import cprint

from pyfli import (
    Device,
    FLIError,
    get_lib_version,
    set_debug_level,
    list_devices,
    print_camera_info,
    save_frame,
)

# Create top-level parser
parser = ArgumentParser(description=__doc__, prog="pyfli")
parser.add_argument(
    "--debug",
    help="FLI library debug level: none, fail, warn, info, io or all",
    metavar="level",
    default=None,
)
parser.add_argument(
    "--debug-file",
    help="File receiving the FLI library debug messages",
    metavar="path",
    default="pyfli.log",
)
subparsers = parser.add_subparsers(title="command", help="pyfli command", dest="command")

# Create parser for the "version" command
parser_version = subparsers.add_parser("version", help="prints the FLI library version")

# Create parser for the "list" command
parser_list = subparsers.add_parser("list", help="lists connected FLI devices")
parser_list.add_argument(
    "domain",
    help="interface and/or device type, e.g. usb camera",
    metavar="symbol",
    nargs="*",
)

# Create parser for the "info" command
parser_info = subparsers.add_parser("info", help="prints camera information")
parser_info.add_argument("name", help="device file name, e.g. /dev/fliusb0")
parser_info.add_argument(
    "domain",
    help="interface and device type (default: usb camera)",
    metavar="symbol",
    nargs="*",
)

# Create parser for the "grab" command
parser_grab = subparsers.add_parser("grab", help="acquires one image and saves it")
parser_grab.add_argument("name", help="device file name, e.g. /dev/fliusb0")
parser_grab.add_argument(
    "domain",
    help="interface and device type (default: usb camera)",
    metavar="symbol",
    nargs="*",
)
parser_grab.add_argument(
    "-e",
    "--exposure",
    help="Exposure time (s)",
    metavar="exposure_s",
    default=0.1,
    type=float,
)
parser_grab.add_argument(
    "--dark", help="Keep the shutter closed (dark frame)", action="store_true"
)
parser_grab.add_argument(
    "-b", "--bits", help="Bit depth: 8 or 16", default=16, type=int, choices=(8, 16)
)
parser_grab.add_argument(
    "-o", "--output", help="Output file name", metavar="filename", default="image.npy"
)
parser_grab.add_argument(
    "-f",
    "--format",
    help="File format: raw, npy, npy.gz or hdf5 (default: guessed from file name)",
    metavar="format",
    default=None,
)


def grab(args):
    pixeltype = np.uint8 if args.bits == 8 else np.uint16
    with Device(args.name, *args.domain) as cam:
        img = cam.acquire(
            dtype=pixeltype,
            progressbar=True,
            exposuretime=args.exposure,
            frametype="dark" if args.dark else "normal",
            pixeltype=pixeltype,
        )
    save_frame(
        img,
        args.output,
        args.format,
        attrs={"exposure_time": args.exposure, "dark": args.dark},
    )
    cprint.blue(
        f"Image {img.shape[1]:d}×{img.shape[0]:d} saved to {args.output:}",
        file=sys.stdout,
    )


def main(argv=None):
    args = parser.parse_args(argv)

    try:
        if args.debug is not None:
            set_debug_level(args.debug_file, args.debug)
        if args.command == "version":
            print(get_lib_version())
        elif args.command == "list":
            entries = list_devices(*args.domain)
            if not entries:
                cprint.yellow("No FLI device found", file=sys.stdout)
        elif args.command == "info":
            with Device(args.name, *args.domain) as cam:
                cprint.blue(f"{args.name:}", bold=True, file=sys.stdout)
                print_camera_info(cam)
        elif args.command == "grab":
            grab(args)
        else:
            parser.print_help()
    except (FLIError, ValueError, OSError) as e:
        cprint.red(str(e), file=sys.stdout)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
