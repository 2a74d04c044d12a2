"""User directory lookup (XDG) and first-run directory setup."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from deskimage.errors import HomeDirectoryUnavailable

log = logging.getLogger("deskimage.paths")


class XdgPathResolver:
    """
    Resolves the directories DeskImage writes into.

    Pass `home` and/or `environ` to point it somewhere other than the real
    user environment (tests use a temp directory).
    """

    def __init__(self, home: str | os.PathLike | None = None, environ: Mapping[str, str] | None = None):
        self._home = Path(home) if home is not None else None
        self._environ = os.environ if environ is None else environ

    def home_dir(self) -> Path:
        if self._home is not None:
            return self._home
        value = self._environ.get("HOME") or os.path.expanduser("~")
        if not value or value == "~":
            raise HomeDirectoryUnavailable()
        return Path(value)

    def data_dir(self) -> Path:
        value = self._environ.get("XDG_DATA_HOME")
        # Relative XDG paths are invalid and must be ignored.
        if value and os.path.isabs(value):
            return Path(value)
        return self.home_dir() / ".local" / "share"

    def bin_dir(self) -> Path:
        return self.home_dir() / ".local" / "bin"

    def applications_dir(self) -> Path:
        return self.data_dir() / "applications"

    def icons_dir(self) -> Path:
        return self.home_dir() / ".local" / "share" / "icons"

    @property
    def xdg_data_home(self) -> str | None:
        return self._environ.get("XDG_DATA_HOME")


def ensure_app_dirs(resolver: XdgPathResolver) -> bool:
    """Create the bin/share/applications/icons directories if missing.

    Returns False only when the home directory cannot be determined;
    individual mkdir failures are logged and skipped.
    """
    try:
        home = resolver.home_dir()
    except HomeDirectoryUnavailable:
        log.error("Could not determine home directory")
        return False

    directories = [
        ("bin", resolver.bin_dir()),
        ("share", home / ".local" / "share"),
        ("applications", resolver.applications_dir()),
        ("icons", resolver.icons_dir()),
    ]
    for name, path in directories:
        log.info("%s directory: %s", name.capitalize(), path)
        if path.exists():
            continue
        log.info("Creating %s directory: %s", name, path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            log.error("Error creating %s directory: %s", name, exc)

    if resolver.xdg_data_home:
        log.info("XDG_DATA_HOME is set to: %s", resolver.xdg_data_home)
    else:
        log.info("XDG_DATA_HOME is not set")
    return True
