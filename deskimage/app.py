"""DeskImage GUI: pick an AppImage, install it and register a desktop entry."""

from __future__ import annotations

import gi
gi.require_version("Gtk", "3.0")
gi.require_version("Gdk", "3.0")
from gi.repository import Gtk, Gdk

import os
import logging
from datetime import datetime

from deskimage import config
from deskimage import config_store
from deskimage import system
from deskimage.errors import DeskImageError
from deskimage.generate_icon import generate_icon
from deskimage.paths import XdgPathResolver, ensure_app_dirs
from deskimage.synchronizer import DesktopEntrySynchronizer, is_executable, make_executable
from deskimage.window import DeskImageWindow

log = logging.getLogger("deskimage")

STATUS_CSS = b"""
label.success { color: #66BB6A; }
label.error { color: #EF5350; }
label.warning { color: #FFCA28; }
"""


class DeskImageApp:
    """Window controller. All callbacks run on the GTK main loop."""

    def __init__(self):
        self._setup_logging()
        config_store.apply_runtime(config_store.load_user_settings())

        self._appimage_path: str | None = None
        self._icon_path: str | None = None
        self._current_exe = system.current_executable()

        self._resolver = XdgPathResolver()
        ensure_app_dirs(self._resolver)
        self._synchronizer = DesktopEntrySynchronizer(
            self._resolver,
            refresh_database=config.REFRESH_DESKTOP_DATABASE,
            refresh_icons=config.REFRESH_ICON_CACHE,
        )

        self._apply_theme()
        if not os.path.isfile(config.APP_ICON):
            try:
                generate_icon(os.path.dirname(config.APP_ICON))
            except OSError as exc:
                log.warning("Couldn't write window icon: %s", exc)

        self._window = DeskImageWindow(
            is_installed=self._is_installed(),
            on_install_cb=self._on_install,
            on_appimage_selected_cb=self._on_appimage_selected,
            on_icon_selected_cb=self._on_icon_selected,
            on_create_cb=self._on_create,
            on_close_cb=Gtk.main_quit,
        )
        self._update_status("Select an AppImage file to create a desktop entry")

        log.info("DeskImage started.")

    def _setup_logging(self):
        os.makedirs(config.LOG_DIR, exist_ok=True)
        log_file = os.path.join(config.LOG_DIR, f"deskimage_{datetime.now():%Y%m%d}.log")
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            handlers=[
                logging.FileHandler(log_file, encoding="utf-8"),
                logging.StreamHandler(),
            ],
        )

    def _apply_theme(self):
        settings = Gtk.Settings.get_default()
        if settings is not None and config.PREFER_DARK_THEME:
            settings.set_property("gtk-application-prefer-dark-theme", True)

        screen = Gdk.Screen.get_default()
        if screen is None:
            return
        provider = Gtk.CssProvider()
        provider.load_from_data(STATUS_CSS)
        Gtk.StyleContext.add_provider_for_screen(
            screen, provider, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
        )

    def _is_installed(self) -> bool:
        # Also count an existing target, e.g. when running from a source checkout.
        target = config.GLOBAL_INSTALL_PATH
        return system.is_globally_installed(self._current_exe, target) or os.path.exists(target)

    def _update_status(self, message: str):
        log.info("Status update: %s", message)
        self._window.show_status(message)

    def _on_install(self):
        ok, message = system.install_globally(
            self._current_exe,
            config.GLOBAL_INSTALL_PATH,
            elevate=config.GUI_ELEVATION_COMMAND,
        )
        if ok:
            self._window.set_installed(True)
            self._update_status(f"SUCCESS: {message}")
        else:
            self._update_status(f"ERROR: {message}")

    def _on_appimage_selected(self, path: str):
        self._appimage_path = path
        self._window.set_appimage_path(path)
        self._update_status(f"Selected: {path}")

        if is_executable(path):
            log.info("AppImage is already executable: %s", path)
            return

        log.info("AppImage is not executable, setting executable permissions")
        try:
            make_executable(path)
        except OSError as exc:
            log.warning("Couldn't set permissions on source AppImage: %s", exc)
            self._update_status(f"WARNING: Couldn't make AppImage executable: {exc}")
            return
        if not is_executable(path):
            self._update_status("WARNING: AppImage may not be executable despite permissions change")

    def _on_icon_selected(self, path: str):
        self._icon_path = path
        self._window.set_icon_path(path)
        self._update_status(f"Selected icon: {path}")

    def _on_create(self):
        if not self._appimage_path:
            self._update_status("ERROR: No AppImage selected.")
            return

        try:
            outcome = self._synchronizer.sync(self._appimage_path, self._icon_path)
        except DeskImageError as exc:
            self._update_status(f"ERROR: {exc}")
            return
        except Exception as exc:
            log.exception("Failed to create desktop entry: %s", exc)
            self._update_status(f"ERROR: {exc}")
            return

        message = f"SUCCESS: {outcome.status_message}"
        if outcome.warnings:
            message += "\n" + "\n".join(f"WARNING: {w}" for w in outcome.warnings)
        self._update_status(message)

    def run(self):
        try:
            Gtk.main()
        except KeyboardInterrupt:
            log.info("Exit via Ctrl+C.")
        finally:
            log.info("DeskImage stopped.")


def main():
    app = DeskImageApp()
    app.run()
