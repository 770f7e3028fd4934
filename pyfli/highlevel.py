"""High level camera functions (:mod:`pyfli.highlevel`)
=====================================================

.. autofunction:: print_camera_info

.. autofunction:: configure_camera

"""

from pyfli._lib import calls


def print_camera_info(cam, file=None, pfx1=" ├─ ", pfx2=" └─ "):
    """Prints detailed information about the camera.

    :param cam: the camera
    :type cam: :class:`~pyfli.device.Device`
    :param file: output stream, defaults to sys.stdout
    :param pfx1: prefix of all the lines, except the last one
    :type pfx1: str, optional
    :param pfx2: prefix of the last line
    :type pfx2: str, optional
    """
    print(pfx1 + f'Device Model: "{cam.get_model():}"', file=file)
    print(pfx1 + f'Serial Number: "{cam.get_serial_string():}"', file=file)
    print(pfx1 + f"Hardware Revision: {cam.get_hardware_revision():d}", file=file)
    print(pfx1 + f"Firmware Revision: {cam.get_firmware_revision():d}", file=file)
    print(pfx1 + f'Library Version: "{calls.FLIGetLibVersion():}"', file=file)
    for title, area in (
        ("Detector Area", cam.get_array_area()),
        ("Visible Area", cam.get_visible_area()),
    ):
        x0, y0, x1, y1 = area
        print(
            pfx1
            + f"{title:}: {x1-x0:d} × {y1-y0:d} pixels, "
            + f"[{x0:d}:{x1-1:d}] × [{y0:d}:{y1-1:d}]",
            file=file,
        )
    width, x0, xbin, height, y0, ybin = cam.get_readout_dimensions()
    print(
        pfx1
        + f"Image Area: {width:d} × {height:d} pixels at offsets ({x0:d},{y0:d}) "
        + f"and with {xbin:d}×{ybin:d} binning",
        file=file,
    )
    xsize, ysize = cam.get_pixel_size()
    print(pfx1 + f"Pixel Size: {1e6*xsize:g} µm × {1e6*ysize:g} µm", file=file)
    print(pfx2 + f"Temperature: {cam.get_temperature():}°C", file=file)


def configure_camera(
    cam,
    temperature=None,
    exposuretime=None,
    width=None,
    height=None,
    xoff=None,
    yoff=None,
    xbin=None,
    ybin=None,
    frametype=None,
    nflushes=None,
    bgflush=None,
    pixeltype=None,
    fanspeed=None,
    shutter=None,
):
    """Configures the camera. Only the settings which are not None are applied.

    :param cam: the camera
    :type cam: :class:`~pyfli.device.Device`
    :param temperature: target temperature (in °C)
    :type temperature: float, optional
    :param exposuretime: exposure time (in seconds)
    :type exposuretime: float, optional
    :param width: width of the image area (in macro-pixels)
    :type width: int, optional
    :param height: height of the image area (in macro-pixels)
    :type height: int, optional
    :param xoff: horizontal offset of the image area (in pixels)
    :type xoff: int, optional
    :param yoff: vertical offset of the image area (in pixels)
    :type yoff: int, optional
    :param xbin: horizontal binning factor
    :type xbin: int, optional
    :param ybin: vertical binning factor
    :type ybin: int, optional
    :param frametype: frame type (see :meth:`~pyfli.device.Device.set_frame_type`)
    :param nflushes: number of background flushes
    :type nflushes: int, optional
    :param bgflush: "start" or "stop" background flushing
    :param pixeltype: numpy.uint8 or numpy.uint16
    :param fanspeed: "on" or "off"
    :param shutter: shutter control (see :meth:`~pyfli.device.Device.control_shutter`)

    Geometry settings are merged with the current readout dimensions: the binning
    factors are written only if they change, and the image area only if its
    size or offsets change.
    """
    if temperature is not None:
        cam.set_temperature(temperature)
    if exposuretime is not None:
        cam.set_exposure_time(exposuretime)
    if any(v is not None for v in (width, height, xoff, yoff, xbin, ybin)):
        cur_width, cur_xoff, cur_xbin, cur_height, cur_yoff, cur_ybin = (
            cam.get_readout_dimensions()
        )
        new_width = cur_width if width is None else int(width)
        new_height = cur_height if height is None else int(height)
        new_xoff = cur_xoff if xoff is None else int(xoff)
        new_yoff = cur_yoff if yoff is None else int(yoff)
        new_xbin = cur_xbin if xbin is None else int(xbin)
        new_ybin = cur_ybin if ybin is None else int(ybin)
        if new_xbin != cur_xbin:
            calls.FLISetHBin(cam.handle, new_xbin)
        if new_ybin != cur_ybin:
            calls.FLISetVBin(cam.handle, new_ybin)
        if (new_width, new_height, new_xoff, new_yoff) != (
            cur_width,
            cur_height,
            cur_xoff,
            cur_yoff,
        ):
            cam.set_image_area(
                new_xoff, new_yoff, new_xoff + new_width, new_yoff + new_height
            )
    if frametype is not None:
        cam.set_frame_type(frametype)
    if nflushes is not None:
        cam.set_nflushes(nflushes)
    if bgflush is not None:
        cam.control_background_flush(bgflush)
    if pixeltype is not None:
        cam.set_bit_depth(pixeltype)
    if fanspeed is not None:
        cam.set_fan_speed(fanspeed)
    if shutter is not None:
        cam.control_shutter(shutter)
