"""
Platform-specific locations for persisted tracker state.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path


def _data_root() -> Path:
    """Base directory under which applications keep per-user data."""
    system = platform.system()
    home = Path.home()

    if system == "Darwin":
        return home / "Library" / "Application Support"
    if system == "Windows":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else home / "AppData" / "Roaming"
    xdg_data = os.environ.get("XDG_DATA_HOME")
    return Path(xdg_data) if xdg_data else home / ".local" / "share"


def get_user_data_dir(app_name: str) -> Path:
    """
    Directory holding the tracker database and legacy preferences for ``app_name``.
    Not created here; the SQLite store creates it on first use.
    """
    return _data_root() / app_name


__all__ = ["get_user_data_dir"]
