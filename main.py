#!/usr/bin/env python3
"""DeskImage entry point."""

import sys
import os
import ctypes

# Add project root to import path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def _set_process_identity() -> None:
    """
    Set a stable app/process name so the window list does not show `main.py`.
    """
    try:
        import gi
        gi.require_version("GLib", "2.0")
        from gi.repository import GLib
        GLib.set_prgname("deskimage")
        GLib.set_application_name("DeskImage")
    except Exception:
        pass

    try:
        libc = ctypes.CDLL("libc.so.6")
        pr_set_name = 15  # Linux PR_SET_NAME
        libc.prctl(pr_set_name, ctypes.c_char_p(b"deskimage"), 0, 0, 0)
    except Exception:
        pass


def main():
    if len(sys.argv) > 1:
        from deskimage.cli import main as cli_main
        sys.exit(cli_main(sys.argv[1:]))

    _set_process_identity()
    from deskimage.app import DeskImageApp
    app = DeskImageApp()
    app.run()


if __name__ == "__main__":
    main()
