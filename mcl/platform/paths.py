"""User-level paths.

The installation root itself is chosen per run (``LaunchConfig``); this
module only locates the optional user settings file.
"""

from __future__ import annotations

import os
from pathlib import Path

from .detection import Platform, detect_platform

__all__ = ["home", "user_config_dir", "default_settings_path"]

APP_NAME = "mcl"


def home() -> Path:
    """Get user's home directory (USERPROFILE on Windows, HOME elsewhere)."""
    var = "USERPROFILE" if detect_platform() == Platform.WINDOWS else "HOME"
    value = os.environ.get(var)
    if value:
        return Path(value)
    return Path.home()


def user_config_dir() -> Path:
    """Get the user-level configuration directory.

    Location: $XDG_CONFIG_HOME/mcl or ~/.config/mcl (Linux/macOS),
    %APPDATA%/mcl (Windows).
    """
    if detect_platform() == Platform.WINDOWS:
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def default_settings_path() -> Path:
    return user_config_dir() / "config.toml"
