"""One-shot command line variant of DeskImage."""

from __future__ import annotations

import argparse
import logging
import sys

from deskimage import config
from deskimage import config_store
from deskimage import system
from deskimage.desktop_entry import to_lossy_text
from deskimage.errors import DeskImageError
from deskimage.paths import XdgPathResolver
from deskimage.synchronizer import DesktopEntrySynchronizer

log = logging.getLogger("deskimage.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deskimage-cli",
        description="Install an AppImage to ~/.local/bin and create its desktop entry.",
    )
    parser.add_argument("appimage", nargs="?", help="path to the AppImage (prompted for if omitted)")
    parser.add_argument("--icon", help="custom icon file to copy into ~/.local/share/icons")
    parser.add_argument(
        "--skip-install-check",
        action="store_true",
        help=f"don't offer to install {config.APP_ID} to {config.GLOBAL_INSTALL_PATH}",
    )
    parser.add_argument("--no-refresh", action="store_true", help="skip desktop database and icon cache refresh")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    return parser


def _prompt(text: str) -> str:
    print(text)
    try:
        return input().strip()
    except EOFError:
        return ""


def _offer_global_install() -> bool | None:
    """Returns None when no install was attempted, else whether it succeeded."""
    current_exe = system.current_executable()
    if system.is_globally_installed(current_exe, config.GLOBAL_INSTALL_PATH):
        return None

    print(f"{config.APP_NAME} is not installed globally.")
    choice = _prompt(f"Do you want to install it to {config.GLOBAL_INSTALL_PATH}? [y/N]")
    if choice.lower() != "y":
        return None

    ok, message = system.install_globally(
        current_exe,
        config.GLOBAL_INSTALL_PATH,
        elevate=config.CLI_ELEVATION_COMMAND,
    )
    print(message, file=sys.stdout if ok else sys.stderr)
    return ok


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config_store.apply_runtime(config_store.load_user_settings())

    if not args.skip_install_check:
        installed = _offer_global_install()
        if installed is not None:
            return 0 if installed else 1

    appimage = args.appimage or _prompt("Enter path to your AppImage file:")
    if not appimage:
        print("No AppImage selected.", file=sys.stderr)
        return 1

    refresh = not args.no_refresh
    synchronizer = DesktopEntrySynchronizer(
        XdgPathResolver(),
        refresh_database=refresh and config.REFRESH_DESKTOP_DATABASE,
        refresh_icons=refresh and config.REFRESH_ICON_CACHE,
    )
    try:
        outcome = synchronizer.sync(appimage, args.icon)
    except DeskImageError as exc:
        print(to_lossy_text(f"ERROR: {exc}"), file=sys.stderr)
        return 1

    for warning in outcome.warnings:
        print(to_lossy_text(f"WARNING: {warning}"), file=sys.stderr)
    print(outcome.status_message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
