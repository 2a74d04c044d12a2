"""DeskImage configuration constants."""

import os


def _xdg_dir(env_name: str, fallback_suffix: str) -> str:
    value = os.environ.get(env_name)
    if value:
        return value
    return os.path.join(os.path.expanduser("~"), fallback_suffix)

APP_NAME = "DeskImage"
APP_ID = "deskimage"
APP_ICON = os.path.join(os.path.dirname(__file__), "assets", "icon.svg")

# Global install target. Checked on startup; the GUI offers to copy itself here.
GLOBAL_INSTALL_PATH = "/usr/local/bin/deskimage"
# GUI has no terminal for a sudo password prompt.
GUI_ELEVATION_COMMAND = "pkexec"
CLI_ELEVATION_COMMAND = "sudo"

# Desktop entry
DEFAULT_ICON = "application-x-executable"
REQUIRED_CATEGORY = "Utility"

# Best-effort refresh commands run after each desktop entry write
REFRESH_DESKTOP_DATABASE = True
REFRESH_ICON_CACHE = True

# Window
WINDOW_WIDTH = 560
WINDOW_HEIGHT = 420
PREFER_DARK_THEME = True
# Seconds a status message stays visible.
STATUS_DURATION_SEC = 10

# File chooser filters
APPIMAGE_PATTERNS = ["*.AppImage"]
ICON_PATTERNS = ["*.png", "*.svg", "*.xpm", "*.jpg", "*.jpeg"]

_STATE_HOME = _xdg_dir("XDG_STATE_HOME", ".local/state")
LOG_DIR = os.path.join(_STATE_HOME, "deskimage")
