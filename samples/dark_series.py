from pathlib import Path

import numpy as np

import pyfli

# Acquisition parameters
destination_dir = Path("darks")
exposure_times = (0.1, 1.0, 10.0)
nframes = 5

if not destination_dir.exists():
    destination_dir.mkdir()

entries = pyfli.find_devices("usb", "camera")
if not entries:
    raise RuntimeError("No FLI camera found")

with pyfli.Device(entries[0].filename, entries[0].domain) as cam:
    pyfli.print_camera_info(cam)
    cam.configure(temperature=-20.0, frametype="dark", pixeltype=np.uint16)
    img = np.empty(pyfli.readout_shape(cam), dtype=np.uint16)
    for exptime in exposure_times:
        for ii in range(nframes):
            cam.set_exposure_time(exptime)
            cam.expose_frame()
            cam.wait_exposure(progressbar=True)
            cam.grab_frame_into(img)
            pyfli.save_frame(
                img,
                destination_dir / f"dark-{exptime:g}s-{ii + 1:02d}.hdf5",
                attrs={"exposure_time": exptime, "temperature": cam.get_temperature()},
            )
