"""Main DeskImage window."""

from __future__ import annotations

import os

import gi
gi.require_version("Gtk", "3.0")
from gi.repository import Gtk, GLib, Pango

from deskimage import config

STATUS_PREFIX_CLASSES = {
    "SUCCESS": "success",
    "ERROR": "error",
    "WARNING": "warning",
}


class DeskImageWindow(Gtk.Window):
    """Pick an AppImage and optional icon, then create the desktop entry."""

    def __init__(
        self,
        is_installed: bool,
        on_install_cb,
        on_appimage_selected_cb,
        on_icon_selected_cb,
        on_create_cb,
        on_close_cb=None,
    ):
        super().__init__(title=config.APP_NAME)
        self.set_default_size(config.WINDOW_WIDTH, config.WINDOW_HEIGHT)
        self.set_position(Gtk.WindowPosition.CENTER)
        if os.path.isfile(config.APP_ICON):
            self.set_icon_from_file(config.APP_ICON)
        else:
            self.set_icon_name(config.DEFAULT_ICON)

        self._on_install_cb = on_install_cb
        self._on_appimage_selected_cb = on_appimage_selected_cb
        self._on_icon_selected_cb = on_icon_selected_cb
        self._on_create_cb = on_create_cb
        self._on_close_cb = on_close_cb
        self._status_timeout_id = 0

        outer = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        outer.set_margin_start(16)
        outer.set_margin_end(16)
        outer.set_margin_top(16)
        outer.set_margin_bottom(16)
        self.add(outer)

        title = Gtk.Label()
        title.set_markup(f"<span size='x-large' weight='bold'>{config.APP_NAME}</span>")
        outer.pack_start(title, False, False, 0)

        subtitle = Gtk.Label(label="Create desktop entries for AppImage files")
        outer.pack_start(subtitle, False, False, 0)

        self._install_frame = self._build_install_frame()
        outer.pack_start(self._install_frame, False, False, 0)

        frame = Gtk.Frame(label="Desktop Entry")
        grid = Gtk.Grid(column_spacing=10, row_spacing=8)
        grid.set_margin_start(10)
        grid.set_margin_end(10)
        grid.set_margin_top(10)
        grid.set_margin_bottom(10)
        frame.add(grid)
        outer.pack_start(frame, False, False, 0)

        appimage_btn = Gtk.Button(label="Select AppImage")
        appimage_btn.connect("clicked", self._on_select_appimage)
        grid.attach(appimage_btn, 0, 0, 1, 1)
        self._appimage_label = Gtk.Label(label="No file selected")
        self._appimage_label.set_xalign(0.0)
        self._appimage_label.set_ellipsize(Pango.EllipsizeMode.END)
        self._appimage_label.set_hexpand(True)
        grid.attach(self._appimage_label, 1, 0, 1, 1)

        icon_btn = Gtk.Button(label="Select Icon (Optional)")
        icon_btn.connect("clicked", self._on_select_icon)
        grid.attach(icon_btn, 0, 1, 1, 1)
        self._icon_label = Gtk.Label(label="Default icon")
        self._icon_label.set_xalign(0.0)
        self._icon_label.set_ellipsize(Pango.EllipsizeMode.END)
        grid.attach(self._icon_label, 1, 1, 1, 1)

        self._create_btn = Gtk.Button(label="Create Desktop Entry")
        self._create_btn.set_sensitive(False)
        self._create_btn.connect("clicked", self._on_create)
        grid.attach(self._create_btn, 0, 2, 2, 1)

        self._status_label = Gtk.Label(label="")
        self._status_label.set_xalign(0.0)
        self._status_label.set_line_wrap(True)
        self._status_label.set_selectable(True)
        outer.pack_start(self._status_label, False, False, 0)

        self.connect("destroy", self._on_destroy)
        self.show_all()
        self.set_installed(is_installed)

    def _build_install_frame(self) -> Gtk.Frame:
        frame = Gtk.Frame(label="Global Installation")
        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        box.set_margin_start(10)
        box.set_margin_end(10)
        box.set_margin_top(8)
        box.set_margin_bottom(8)
        frame.add(box)

        lbl = Gtk.Label(label=f"{config.APP_NAME} is not installed globally.")
        lbl.set_xalign(0.0)
        box.pack_start(lbl, True, True, 0)

        install_btn = Gtk.Button(label=f"Install to {os.path.dirname(config.GLOBAL_INSTALL_PATH)}")
        install_btn.connect("clicked", self._on_install)
        box.pack_start(install_btn, False, False, 0)
        return frame

    def set_installed(self, installed: bool) -> None:
        self._install_frame.set_visible(not installed)

    def set_appimage_path(self, path: str | None) -> None:
        self._appimage_label.set_text(path or "No file selected")
        self._appimage_label.set_tooltip_text(path)
        self._create_btn.set_sensitive(bool(path))

    def set_icon_path(self, path: str | None) -> None:
        self._icon_label.set_text(path or "Default icon")
        self._icon_label.set_tooltip_text(path)

    def show_status(self, message: str) -> None:
        """Show a status line; hidden again after STATUS_DURATION_SEC."""
        context = self._status_label.get_style_context()
        for css_class in STATUS_PREFIX_CLASSES.values():
            context.remove_class(css_class)
        prefix = message.split(":", 1)[0]
        if prefix in STATUS_PREFIX_CLASSES:
            context.add_class(STATUS_PREFIX_CLASSES[prefix])

        self._status_label.set_text(message)
        self._status_label.set_visible(True)

        if self._status_timeout_id:
            GLib.source_remove(self._status_timeout_id)
        self._status_timeout_id = GLib.timeout_add_seconds(
            max(1, int(config.STATUS_DURATION_SEC)),
            self._hide_status,
        )

    def _hide_status(self):
        self._status_timeout_id = 0
        self._status_label.set_visible(False)
        return False

    def _choose_file(self, title: str, filter_name: str, patterns: list[str]) -> str | None:
        dialog = Gtk.FileChooserDialog(
            title=title,
            transient_for=self,
            action=Gtk.FileChooserAction.OPEN,
        )
        dialog.add_buttons(
            Gtk.STOCK_CANCEL, Gtk.ResponseType.CANCEL,
            Gtk.STOCK_OPEN, Gtk.ResponseType.OK,
        )
        file_filter = Gtk.FileFilter()
        file_filter.set_name(filter_name)
        for pattern in patterns:
            file_filter.add_pattern(pattern)
        dialog.add_filter(file_filter)

        try:
            if dialog.run() == Gtk.ResponseType.OK:
                return dialog.get_filename()
            return None
        finally:
            dialog.destroy()

    def _on_select_appimage(self, *_args):
        path = self._choose_file("Select AppImage", "AppImage", config.APPIMAGE_PATTERNS)
        if path:
            self._on_appimage_selected_cb(path)

    def _on_select_icon(self, *_args):
        path = self._choose_file("Select Icon", "Icons", config.ICON_PATTERNS)
        if path:
            self._on_icon_selected_cb(path)

    def _on_install(self, *_args):
        self._on_install_cb()

    def _on_create(self, *_args):
        self._on_create_cb()

    def _on_destroy(self, *_args):
        if self._status_timeout_id:
            GLib.source_remove(self._status_timeout_id)
            self._status_timeout_id = 0
        if self._on_close_cb:
            self._on_close_cb()
