"""
Platform classification for notification delivery.

Maps the OS identity plus the WSL detection flag to the one delivery
strategy the sound and push channels should use.
"""

from __future__ import annotations

import enum


class PlatformCategory(str, enum.Enum):
    """Delivery platform for sound and push notifications."""

    MACOS = "macos"
    LINUX = "linux"
    WSL = "wsl"
    WINDOWS = "windows"
    OTHER = "other"

    @property
    def uses_windows_host(self) -> bool:
        """``True`` when delivery goes through ``powershell.exe``."""
        return self in (PlatformCategory.WINDOWS, PlatformCategory.WSL)


def classify(system: str, is_wsl: bool) -> PlatformCategory:
    """Return the :class:`PlatformCategory` for *system*.

    Args:
        system: OS identity as reported by ``platform.system()``
                (``Darwin``, ``Linux``, ``Windows``).
        is_wsl: Whether a Linux host is a WSL distribution.

    Returns:
        The matching category; unsupported systems map to ``OTHER``.
    """
    if system == "Darwin":
        return PlatformCategory.MACOS
    if system == "Linux":
        return PlatformCategory.WSL if is_wsl else PlatformCategory.LINUX
    if system == "Windows":
        return PlatformCategory.WINDOWS
    return PlatformCategory.OTHER
