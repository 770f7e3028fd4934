import pyfli

if __name__ == "__main__":
    print("FLI library:", pyfli.get_lib_version())
    entries = pyfli.list_devices("usb", "camera")
    print(len(entries), "camera(s) found")
