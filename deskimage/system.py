"""External commands: menu/icon cache refresh and global install."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path

log = logging.getLogger("deskimage.system")


def _run_best_effort(args: list[str]) -> bool:
    try:
        result = subprocess.run(
            args,
            check=False,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        log.warning("Failed to run %s: %s", args[0], exc)
        return False
    log.info("%s exited with: %d", args[0], result.returncode)
    return result.returncode == 0


def refresh_desktop_database(applications_dir: Path) -> bool:
    """Run update-desktop-database on the applications directory."""
    log.info("Updating desktop database...")
    return _run_best_effort(["update-desktop-database", str(applications_dir)])


def refresh_icon_cache(icons_dir: Path) -> bool:
    log.info("Updating icon cache...")
    return _run_best_effort(["gtk-update-icon-cache", "-f", "-t", str(icons_dir)])


def current_executable() -> Path:
    return Path(os.path.abspath(sys.argv[0]))


def is_globally_installed(current_exe_path: str | os.PathLike, target_path: str | os.PathLike) -> bool:
    """True when the running executable is the global install target."""
    try:
        return Path(current_exe_path).resolve() == Path(target_path).resolve()
    except OSError:
        return False


def install_globally(
    current_exe_path: str | os.PathLike,
    target_path: str | os.PathLike,
    elevate: str = "sudo",
) -> tuple[bool, str]:
    """
    Copy the running executable to target_path with elevated privileges.

    Returns (ok, message) for display.
    """
    target = Path(target_path)
    args = [elevate, "cp", str(current_exe_path), str(target)]
    try:
        result = subprocess.run(args, check=False)
    except OSError as exc:
        log.error("Failed to run %s: %s", elevate, exc)
        return False, f"Failed to install. Couldn't run {elevate}: {exc}"

    if result.returncode == 0:
        log.info("Installed %s to %s", current_exe_path, target)
        return True, f"Installed to {target.parent}. Now you can run `{target.name}` globally."

    log.error("%s cp exited with: %d", elevate, result.returncode)
    return False, f"Failed to install. Are you sure you have {elevate} permissions?"
