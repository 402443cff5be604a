"""
Shared utility functions for Vibe Kanban.

Host-environment detection helpers used across services.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

_PROC_VERSION = Path("/proc/version")


def is_wsl2() -> bool:
    """Return ``True`` when running inside a WSL Linux distribution."""
    if platform.system() != "Linux":
        return False
    if os.environ.get("WSL_DISTRO_NAME"):
        return True
    try:
        version = _PROC_VERSION.read_text(encoding="utf-8", errors="replace").lower()
    except OSError:
        return False
    return "microsoft" in version or "wsl" in version
