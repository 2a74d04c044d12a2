"""DeskImage error types."""

from __future__ import annotations

from pathlib import Path


class DeskImageError(Exception):
    """Base error. str() is the message shown to the user."""


class HomeDirectoryUnavailable(DeskImageError):
    def __init__(self):
        super().__init__("Couldn't find home directory.")


class SourceNotFound(DeskImageError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"File not found: {path}")


class StagingFailed(DeskImageError):
    """Creating, copying or chmod-ing the installed executable failed."""

    def __init__(self, path: Path, cause: BaseException, action: str = "stage executable"):
        self.path = path
        self.cause = cause
        super().__init__(f"Couldn't {action} {path}: {cause}")


class IconStagingDegraded(DeskImageError):
    """Non-fatal: the custom icon could not be copied, original path is used."""

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Couldn't copy icon {path}: {cause}")


class ApplicationsDirUnavailable(DeskImageError):
    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Couldn't create applications directory {path}: {cause}")


class DescriptorWriteFailed(DeskImageError):
    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Couldn't write desktop file {path}: {cause}")
