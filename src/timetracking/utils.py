from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

DEFAULT_APP_DIRNAME = "timetracking"


def default_config_dir() -> Path:
    """Return OS-appropriate config directory for timetracking.

    - Windows: %APPDATA%\\timetracking
    - macOS:  ~/Library/Application Support/timetracking
    - Linux:  ~/.config/timetracking (or $XDG_CONFIG_HOME)
    """
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / DEFAULT_APP_DIRNAME
        return Path.home() / "AppData" / "Roaming" / DEFAULT_APP_DIRNAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / DEFAULT_APP_DIRNAME

    if sys_platform() == "darwin":
        return Path.home() / "Library" / "Application Support" / DEFAULT_APP_DIRNAME

    return Path.home() / ".config" / DEFAULT_APP_DIRNAME


def sys_platform() -> str:
    import platform
    return platform.system().lower()


def whole_minutes(d: timedelta) -> int:
    # truncates toward zero, seconds are dropped
    return int(d.total_seconds() / 60)


def format_hhmm(minutes: int) -> str:
    """Format a minute count as HH:MM. Hours are not wrapped at 24."""
    sign = "-" if minutes < 0 else ""
    h, m = divmod(abs(minutes), 60)
    return f"{sign}{h:02d}:{m:02d}"
