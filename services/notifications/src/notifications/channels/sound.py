"""
Sound notification channel.

Plays the configured notification sound with whatever player the host
platform provides. Every launch is fire-and-forget and launch failures
are ignored; a missing sound is not worth failing a notification over.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path

import structlog

from vk_common.assets import AssetNotFoundError, resolve_sound_path
from vk_common.config import Settings
from vk_common.models.notification import NotificationConfig, SoundFile

from ..environment import Environment
from ..platforms import PlatformCategory, classify
from ..wsl import wsl_to_windows_path
from .base import NotificationChannel

logger = structlog.get_logger()

SoundResolver = Callable[[SoundFile], Awaitable[Path]]

# Tried in order on native Linux; the terminal bell is the last resort.
LINUX_PLAYERS: tuple[str, ...] = ("paplay", "aplay")


class SoundChannel(NotificationChannel):
    """Play a sound file on macOS, Linux, Windows or WSL.

    Args:
        environment: Host environment used for detection and launches.
        settings: Settings used to locate sound files.
        resolver: Override for sound-file resolution (tests).
    """

    name: str = "sound"

    def __init__(
        self,
        environment: Environment,
        settings: Settings,
        *,
        resolver: SoundResolver | None = None,
    ) -> None:
        self._env = environment
        self._settings = settings
        self._resolver = resolver

    def is_enabled(self, config: NotificationConfig) -> bool:
        return config.sound_enabled

    async def _resolve(self, sound_file: SoundFile) -> Path:
        if self._resolver is not None:
            return await self._resolver(sound_file)
        return await resolve_sound_path(sound_file, self._settings)

    async def send(self, config: NotificationConfig, title: str, message: str) -> bool:
        try:
            path = await self._resolve(config.sound_file)
        except AssetNotFoundError as exc:
            logger.error("sound_file_unavailable", sound_file=config.sound_file.value, error=str(exc))
            return False

        category = classify(self._env.system(), self._env.is_wsl())
        if category is PlatformCategory.MACOS:
            return await self._launch("afplay", str(path))
        if category is PlatformCategory.LINUX:
            return await self._play_linux(path)
        if category.uses_windows_host:
            return await self._play_windows(path, category)
        logger.debug("sound_platform_unsupported", platform=category.value)
        return False

    async def _launch(self, *argv: str, inherit_output: bool = False) -> bool:
        try:
            await self._env.spawn(*argv, inherit_output=inherit_output)
        except OSError:
            return False
        return True

    async def _play_linux(self, path: Path) -> bool:
        for player in LINUX_PLAYERS:
            if await self._launch(player, str(path)):
                return True
        return await self._launch("echo", "-e", "\\a", inherit_output=True)

    async def _play_windows(self, path: Path, category: PlatformCategory) -> bool:
        file_path = str(path)
        if category is PlatformCategory.WSL:
            file_path = await wsl_to_windows_path(path, self._env) or file_path

        return await self._launch(
            "powershell.exe",
            "-c",
            f'(New-Object Media.SoundPlayer "{file_path}").PlaySync()',
        )
