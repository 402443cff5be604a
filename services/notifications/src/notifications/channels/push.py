"""
Desktop push notification channel.

macOS uses ``osascript``; native Linux goes through plyer's notification
facade on a worker thread; Windows and WSL run the bundled toast helper
script with ``powershell.exe``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

import structlog
from plyer import notification as plyer_notification

from vk_common.assets import AssetNotFoundError, get_powershell_script
from vk_common.config import Settings
from vk_common.models.notification import NotificationConfig

from ..background import spawn_detached
from ..environment import Environment
from ..platforms import PlatformCategory, classify
from ..wsl import wsl_to_windows_path
from .base import NotificationChannel

logger = structlog.get_logger()

# Seconds the native Linux notification stays on screen.
LINUX_NOTIFICATION_TIMEOUT_S = 10

NativeNotify = Callable[..., None]
ScriptLocator = Callable[[], Awaitable[Path]]


def _escape_applescript(text: str) -> str:
    return text.replace('"', '\\"')


def macos_script(title: str, message: str) -> str:
    """Build the AppleScript that displays a notification."""
    return (
        f'display notification "{_escape_applescript(message)}" '
        f'with title "{_escape_applescript(title)}" '
        'sound name "Glass"'
    )


class PushChannel(NotificationChannel):
    """Raise a native desktop notification.

    Args:
        environment: Host environment used for detection and launches.
        settings: Settings providing the app name and cache directory.
        native_notify: Linux notification callable (defaults to plyer).
        script_locator: Override for locating the toast script (tests).
    """

    name: str = "push"

    def __init__(
        self,
        environment: Environment,
        settings: Settings,
        *,
        native_notify: NativeNotify | None = None,
        script_locator: ScriptLocator | None = None,
    ) -> None:
        self._env = environment
        self._settings = settings
        self._native_notify = native_notify
        self._script_locator = script_locator

    def is_enabled(self, config: NotificationConfig) -> bool:
        return config.push_enabled

    async def send(self, config: NotificationConfig, title: str, message: str) -> bool:
        category = classify(self._env.system(), self._env.is_wsl())
        if category is PlatformCategory.MACOS:
            return await self._send_macos(title, message)
        if category is PlatformCategory.LINUX:
            self._send_linux(title, message)
            return True
        if category.uses_windows_host:
            return await self._send_windows(title, message, category)
        logger.debug("push_platform_unsupported", platform=category.value)
        return False

    async def _send_macos(self, title: str, message: str) -> bool:
        try:
            await self._env.spawn("osascript", "-e", macos_script(title, message))
        except OSError as exc:
            logger.debug("push_launch_failed", error=str(exc))
            return False
        return True

    def _send_linux(self, title: str, message: str) -> None:
        spawn_detached(self._notify_linux(title, message), name="push-linux")

    async def _notify_linux(self, title: str, message: str) -> None:
        try:
            notify = self._native_notify or plyer_notification.notify
            await asyncio.to_thread(
                notify,
                title=title,
                message=message,
                app_name=self._settings.app_name,
                timeout=LINUX_NOTIFICATION_TIMEOUT_S,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error("linux_notification_failed", error=str(exc))

    async def _locate_script(self) -> Path:
        if self._script_locator is not None:
            return await self._script_locator()
        return await get_powershell_script(self._settings)

    async def _send_windows(self, title: str, message: str, category: PlatformCategory) -> bool:
        try:
            script_path = await self._locate_script()
        except AssetNotFoundError as exc:
            logger.error("toast_script_unavailable", error=str(exc))
            return False

        script = str(script_path)
        if category is PlatformCategory.WSL:
            script = await wsl_to_windows_path(script_path, self._env) or script

        try:
            await self._env.spawn(
                "powershell.exe",
                "-NoProfile",
                "-ExecutionPolicy",
                "Bypass",
                "-File",
                script,
                "-Title",
                title,
                "-Message",
                message,
            )
        except OSError as exc:
            logger.debug("push_launch_failed", error=str(exc))
            return False
        return True
