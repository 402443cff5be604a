"""
Asset resolution for Vibe Kanban.

Notification sounds live in the configured sounds directory; the Windows
toast helper script ships with this package and is copied into the cache
directory on first use so ``powershell.exe`` can run it from disk.
"""

from __future__ import annotations

import asyncio
from importlib import resources
from pathlib import Path

import structlog

from vk_common.config import Settings
from vk_common.models.notification import SoundFile

logger = structlog.get_logger()

TOAST_SCRIPT_NAME = "toast-notification.ps1"


class AssetNotFoundError(Exception):
    """Raised when a sound file or helper script cannot be located."""


def _locate_sound(path: Path) -> Path:
    if not path.is_file():
        raise AssetNotFoundError(f"Sound file not found: {path}")
    return path


def _materialise_script(target: Path) -> Path:
    try:
        bundled = resources.files(__name__).joinpath(TOAST_SCRIPT_NAME).read_text(encoding="utf-8")
    except (OSError, FileNotFoundError) as exc:
        raise AssetNotFoundError(f"Bundled {TOAST_SCRIPT_NAME} is unavailable: {exc}") from exc

    try:
        if target.is_file() and target.read_text(encoding="utf-8") == bundled:
            return target
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(bundled, encoding="utf-8")
    except OSError as exc:
        raise AssetNotFoundError(f"Cannot write {target}: {exc}") from exc
    logger.debug("toast_script_materialised", path=str(target))
    return target


async def resolve_sound_path(sound_file: SoundFile, settings: Settings) -> Path:
    """Return the local path of *sound_file*.

    Raises:
        AssetNotFoundError: If the sound file does not exist.
    """
    path = settings.resolved_sounds_dir / sound_file.file_name
    return await asyncio.to_thread(_locate_sound, path)


async def get_powershell_script(settings: Settings) -> Path:
    """Return the on-disk path of the toast notification helper script.

    Raises:
        AssetNotFoundError: If the script cannot be read or written.
    """
    return await asyncio.to_thread(_materialise_script, settings.cache_dir / TOAST_SCRIPT_NAME)
