"""Install an AppImage into ~/.local/bin and write its desktop entry."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from deskimage import system
from deskimage.desktop_entry import DescriptorRecord, clean_app_name, parse_desktop_file, to_lossy_text
from deskimage.errors import (
    ApplicationsDirUnavailable,
    DescriptorWriteFailed,
    IconStagingDegraded,
    SourceNotFound,
    StagingFailed,
)
from deskimage.paths import XdgPathResolver

log = logging.getLogger("deskimage.sync")

EXEC_BITS = 0o111
EXEC_MODE = 0o755


@dataclass
class SyncOutcome:
    exec_target: Path
    desktop_file_path: Path
    was_update: bool
    icon: str = ""
    warnings: list[IconStagingDegraded] = field(default_factory=list)

    @property
    def status_message(self) -> str:
        verb = "updated" if self.was_update else "created"
        return to_lossy_text(f"Desktop entry {verb} at: {self.desktop_file_path}")


def is_executable(path: str | os.PathLike) -> bool:
    try:
        return os.stat(path).st_mode & EXEC_BITS != 0
    except OSError:
        return False


def make_executable(path: str | os.PathLike) -> None:
    """Add the owner/group/other executable bits. Raises OSError."""
    mode = os.stat(path).st_mode
    os.chmod(path, mode | EXEC_BITS)


def synchronize(
    source_path: str | os.PathLike,
    icon_path: str | os.PathLike | None,
    home_dir: Path,
    applications_dir: Path,
    icons_dir: Path,
) -> SyncOutcome:
    source = Path(source_path)
    if not source.exists():
        log.warning("File not found: %s", source)
        raise SourceNotFound(source)

    appname = clean_app_name(source.name)
    log.info("App name: %s", appname)

    exec_target = Path(home_dir) / ".local" / "bin" / appname
    _stage_executable(source, exec_target)

    icon_value, warnings = _resolve_icon(icon_path, Path(icons_dir))

    try:
        Path(applications_dir).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        log.error("Couldn't create applications directory: %s", exc)
        raise ApplicationsDirUnavailable(Path(applications_dir), exc) from exc

    desktop_file_path = Path(applications_dir) / f"{appname}.desktop"
    was_update = desktop_file_path.exists()
    log.info("Desktop file path: %s (existed before: %s)", desktop_file_path, was_update)

    existing = _read_existing(desktop_file_path) if was_update else {}
    record = DescriptorRecord.merged(
        name=appname,
        exec_path=str(exec_target),
        existing=existing,
        icon=icon_value,
    )

    try:
        # Encoded before opening so a failure never truncates the old file.
        data = record.to_text().encode("utf-8")
        desktop_file_path.write_bytes(data)
    except (OSError, UnicodeError) as exc:
        log.error("Couldn't write desktop file: %s", exc)
        raise DescriptorWriteFailed(desktop_file_path, exc) from exc
    log.info("Successfully wrote desktop file")

    return SyncOutcome(
        exec_target=exec_target,
        desktop_file_path=desktop_file_path,
        was_update=was_update,
        icon=record.icon,
        warnings=warnings,
    )


def _stage_executable(source: Path, exec_target: Path) -> None:
    if is_executable(source):
        log.info("Source AppImage is already executable")
    else:
        log.info("Source AppImage is not executable, setting executable permissions")
        try:
            make_executable(source)
        except OSError as exc:
            raise StagingFailed(source, exc, action="set permissions on") from exc

    try:
        exec_target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StagingFailed(exec_target.parent, exc, action="create directory") from exc

    try:
        if exec_target.exists() and os.path.samefile(source, exec_target):
            log.info("Source is already installed at %s", exec_target)
        else:
            shutil.copyfile(source, exec_target)
    except OSError as exc:
        raise StagingFailed(exec_target, exc, action="copy file to") from exc

    try:
        os.chmod(exec_target, EXEC_MODE)
    except OSError as exc:
        raise StagingFailed(exec_target, exc, action="set permissions on") from exc
    log.info("Installed executable: %s", exec_target)


def _resolve_icon(
    icon_path: str | os.PathLike | None,
    icons_dir: Path,
) -> tuple[str | None, list[IconStagingDegraded]]:
    """
    Copy a custom icon into icons_dir.

    Returns (icon_value, warnings). icon_value is None when no usable icon was
    given, meaning the previous descriptor's Icon (or the default) applies.
    """
    if icon_path is None:
        return None, []
    icon = Path(icon_path)
    if not icon.exists():
        log.warning("Icon not found, keeping previous icon: %s", icon)
        return None, []

    destination = icons_dir / icon.name
    try:
        icons_dir.mkdir(parents=True, exist_ok=True)
        if destination.exists() and os.path.samefile(icon, destination):
            log.info("Icon already in place: %s", destination)
        else:
            shutil.copyfile(icon, destination)
    except OSError as exc:
        warning = IconStagingDegraded(icon, exc)
        log.warning("%s", warning)
        return str(icon), [warning]
    return str(destination), []


def _read_existing(desktop_file_path: Path) -> dict[str, str]:
    try:
        content = desktop_file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.warning("Couldn't read existing desktop file %s: %s", desktop_file_path, exc)
        return {}
    return parse_desktop_file(content)


class DesktopEntrySynchronizer:
    """Runs synchronize() against resolved user directories, then refreshes caches."""

    def __init__(
        self,
        resolver: XdgPathResolver | None = None,
        refresh_database: bool = True,
        refresh_icons: bool = True,
    ):
        self._resolver = resolver or XdgPathResolver()
        self._refresh_database = refresh_database
        self._refresh_icons = refresh_icons

    @property
    def resolver(self) -> XdgPathResolver:
        return self._resolver

    def sync(self, source_path: str | os.PathLike, icon_path: str | os.PathLike | None = None) -> SyncOutcome:
        log.info("Creating desktop entry...")
        source = Path(source_path)
        # Checked before the home lookup so a bad path reports as missing.
        if not source.exists():
            log.warning("File not found: %s", source)
            raise SourceNotFound(source)

        home_dir = self._resolver.home_dir()
        applications_dir = self._resolver.applications_dir()
        icons_dir = self._resolver.icons_dir()
        log.info("Applications directory: %s", applications_dir)

        outcome = synchronize(source, icon_path, home_dir, applications_dir, icons_dir)

        if self._refresh_database:
            system.refresh_desktop_database(applications_dir)
        if self._refresh_icons:
            system.refresh_icon_cache(icons_dir)

        log.info("%s", outcome.status_message)
        return outcome
