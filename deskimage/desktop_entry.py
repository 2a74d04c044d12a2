"""Desktop entry (.desktop) parsing, merging and serialization."""

from __future__ import annotations

import re
from dataclasses import dataclass

from deskimage import config

APPIMAGE_SUFFIX = ".AppImage"
SECTION_HEADER = "[Desktop Entry]"

_NAME_SEPARATORS = re.compile(r"[-_]")


def clean_app_name(filename: str) -> str:
    """
    Derive the application name from an AppImage file name.

    "Foo-1.2.3.AppImage" -> "Foo", "bar_app.AppImage" -> "bar".
    Everything after the first '-' or '_' is dropped, so hyphenated names
    such as "My-App.AppImage" come out as "My". Unlike a plain prefix split,
    an empty prefix ("-beta.AppImage") falls back to the stripped name, then
    to the raw file name, so the result is never empty.
    """
    stripped = filename.removesuffix(APPIMAGE_SUFFIX)
    prefix = _NAME_SEPARATORS.split(stripped, maxsplit=1)[0]
    return prefix or stripped or filename


def to_lossy_text(value: str) -> str:
    """Replace undecodable file name bytes (surrogate escapes) with U+FFFD."""
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def parse_desktop_file(content: str) -> dict[str, str]:
    """Collect key=value lines. Later duplicates win, other lines are ignored."""
    values: dict[str, str] = {}
    for line in content.splitlines():
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def normalize_categories(categories: str | None) -> str:
    required = config.REQUIRED_CATEGORY
    if not categories:
        return f"{required};"
    if required not in categories:
        categories = f"{required};{categories}"
    if not categories.endswith(";"):
        categories += ";"
    return categories


@dataclass
class DescriptorRecord:
    name: str
    exec_path: str
    icon: str = ""
    categories: str = ""
    keywords: str = ""
    comment: str = ""

    @classmethod
    def merged(
        cls,
        name: str,
        exec_path: str,
        existing: dict[str, str] | None = None,
        icon: str | None = None,
    ) -> "DescriptorRecord":
        """
        Build a record for name/exec_path, carrying forward Icon, Keywords,
        Categories and Comment from an existing descriptor.

        An explicit icon overrides the carried-forward one.
        """
        existing = existing or {}
        if icon is None:
            icon = existing.get("Icon") or config.DEFAULT_ICON
        return cls(
            name=name,
            exec_path=exec_path,
            icon=icon,
            categories=normalize_categories(existing.get("Categories")),
            keywords=existing.get("Keywords", ""),
            comment=existing.get("Comment", ""),
        )

    def fields(self) -> list[tuple[str, str]]:
        out = [
            ("Type", "Application"),
            ("Name", self.name),
            ("Exec", self.exec_path),
            ("Icon", self.icon or config.DEFAULT_ICON),
            ("Terminal", "false"),
        ]
        for key, value in (
            ("Categories", self.categories),
            ("Keywords", self.keywords),
            ("Comment", self.comment),
        ):
            if value:
                out.append((key, value))
        return out

    def to_text(self) -> str:
        lines = [SECTION_HEADER]
        lines.extend(f"{key}={value}" for key, value in self.fields())
        return to_lossy_text("\n".join(lines) + "\n")
