"""Load per-user overrides of config values."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from deskimage import config

log = logging.getLogger("deskimage.config")


SETTING_KEYS = [
    "GLOBAL_INSTALL_PATH",
    "GUI_ELEVATION_COMMAND",
    "CLI_ELEVATION_COMMAND",
    "DEFAULT_ICON",
    "REFRESH_DESKTOP_DATABASE",
    "REFRESH_ICON_CACHE",
    "WINDOW_WIDTH",
    "WINDOW_HEIGHT",
    "PREFER_DARK_THEME",
    "STATUS_DURATION_SEC",
]

Setting = int | float | bool | str


def current_settings() -> dict[str, Setting]:
    return {key: getattr(config, key) for key in SETTING_KEYS}


def apply_runtime(settings: dict[str, Setting]) -> None:
    for key, value in sanitize_settings(settings).items():
        setattr(config, key, value)


def user_settings_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "deskimage" / "settings.json"
    return Path.home() / ".config" / "deskimage" / "settings.json"


def load_user_settings() -> dict[str, Setting]:
    path = user_settings_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring settings file %s: not a JSON object", path)
        return {}
    return sanitize_settings(data)


def sanitize_settings(settings: dict[str, object]) -> dict[str, Setting]:
    """Keep known keys, coerced to the type of the built-in default.

    Values that cannot be coerced are dropped.
    """
    out: dict[str, Setting] = {}
    defaults = current_settings()
    for key in SETTING_KEYS:
        if key not in settings:
            continue
        value = settings[key]
        default_value = defaults[key]
        try:
            if isinstance(default_value, bool):
                out[key] = _to_bool(value)
            elif isinstance(default_value, int):
                out[key] = int(value)
            elif isinstance(default_value, float):
                out[key] = float(value)
            else:
                text = str(value).strip()
                if not text:
                    continue
                out[key] = text
        except (TypeError, ValueError):
            log.warning("Ignoring invalid value for %s: %r", key, value)
    return out


def _to_bool(value: object) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
        raise ValueError(value)
    return bool(value)
