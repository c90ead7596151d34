"""Entry point: glues pystray (daemon thread) with tkinter (main thread)."""

import argparse
import logging
import threading

from icon_gen import create_icon_image
from picker_window import PickerWindow
from settings import load_settings
from tray_icon import create_tray


def main() -> None:
    parser = argparse.ArgumentParser(description="Date-range picker in the system tray")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-tray", action="store_true",
                        help="Show the picker window directly, without a tray icon")
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else load_settings()["log_level"]
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    picker = PickerWindow()

    if args.no_tray:
        picker.root.protocol("WM_DELETE_WINDOW", picker.root.destroy)
        picker.show()
        picker.root.mainloop()
        return

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        picker.root.after(0, picker.toggle)

    def on_clear() -> None:
        picker.root.after(0, picker.clear_selection)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            picker.root.destroy()
        picker.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit, on_clear=on_clear)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    logging.getLogger(__name__).info("Picker ready in the system tray")
    picker.root.mainloop()


if __name__ == "__main__":
    main()
