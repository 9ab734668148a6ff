"""Platform locations for the configuration file and the log file.

macOS keeps the configuration in ``~/Library/Preferences`` and logs in
``~/Library/Logs/display-switch``; Windows uses ``%APPDATA%`` and
``%LOCALAPPDATA%``; everything else follows the XDG base directory variables.
Both ``*_file_path`` helpers create their directory if it is missing.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

from display_switch.errors import DirectoryResolutionError

APP_NAME = "display-switch"
CONFIG_FILE_NAME = f"{APP_NAME}.ini"
LOG_FILE_NAME = f"{APP_NAME}.log"


def _system() -> str:
    return (platform.system() or "").lower()


def _home() -> Path:
    try:
        return Path.home()
    except RuntimeError as exc:
        msg = "Home directory not found"
        raise DirectoryResolutionError(msg) from exc


def _env_dir(name: str, fallback: Path) -> Path:
    value = os.environ.get(name)
    if value:
        return Path(value)
    return fallback


def config_dir() -> Path:
    """Return the platform configuration directory for display-switch."""
    system = _system()
    if system == "darwin":
        return _home() / "Library" / "Preferences"
    if system.startswith("windows"):
        return _env_dir("APPDATA", _home() / "AppData" / "Roaming") / APP_NAME
    return _env_dir("XDG_CONFIG_HOME", _home() / ".config") / APP_NAME


def log_dir() -> Path:
    """Return the platform log directory for display-switch."""
    system = _system()
    if system == "darwin":
        return _home() / "Library" / "Logs" / APP_NAME
    if system.startswith("windows"):
        return _env_dir("LOCALAPPDATA", _home() / "AppData" / "Local") / APP_NAME
    return _env_dir("XDG_DATA_HOME", _home() / ".local" / "share") / APP_NAME


def _ensure_dir(directory: Path) -> Path:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"failed to create directory: {directory}"
        raise DirectoryResolutionError(msg) from exc
    return directory


def config_file_path() -> Path:
    """Return the default configuration file, creating its directory.

    Raises
    ------
    DirectoryResolutionError
        If the directory cannot be determined or created.
    """
    return _ensure_dir(config_dir()) / CONFIG_FILE_NAME


def log_file_path() -> Path:
    """Return the log file, creating its directory.

    Raises
    ------
    DirectoryResolutionError
        If the directory cannot be determined or created.
    """
    return _ensure_dir(log_dir()) / LOG_FILE_NAME


__all__ = (
    "APP_NAME",
    "CONFIG_FILE_NAME",
    "LOG_FILE_NAME",
    "config_dir",
    "config_file_path",
    "log_dir",
    "log_file_path",
)
