import pyfli

if __name__ == "__main__":
    for entry in pyfli.find_devices("usb", "focuser"):
        with pyfli.Device(entry.filename, entry.domain) as foc:
            print(entry.devname, "extent:", foc.get_focuser_extent())
            foc.home_device()
            foc.step_motor(1000)
            print("position:", foc.get_stepper_position())
