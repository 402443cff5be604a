"""
Environment-based configuration management for Vibe Kanban.

Uses pydantic-settings to load configuration values from environment
variables and .env files. The notification service reads its defaults
from here; per-call notification settings are served by
:class:`ConfigStore`.

All environment variables are prefixed with ``VK_`` to avoid collisions.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vk_common.models.notification import NotificationConfig, SoundFile


def _default_cache_dir() -> Path:
    return Path.home() / ".cache" / "vibe-kanban"


class Settings(BaseSettings):
    """Central configuration loaded from ``VK_``-prefixed environment variables.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render log lines as JSON (``False`` = console renderer).
        app_name: Application name shown in desktop notifications.
        cache_dir: Directory where helper assets are materialised.
        sounds_dir: Directory holding the notification sound files.
        service_host: Bind address for the notification HTTP service.
        service_port: Bind port for the notification HTTP service.
        sound_enabled: Default for ``NotificationConfig.sound_enabled``.
        push_enabled: Default for ``NotificationConfig.push_enabled``.
        slack_enabled: Default for ``NotificationConfig.slack_enabled``.
        slack_webhook_url: Default Slack incoming-webhook URL.
        sound_file: Default notification sound.
    """

    model_config = SettingsConfigDict(
        env_prefix="VK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=True, description="Emit JSON log lines.")

    # ── Assets ──
    app_name: str = Field(default="Vibe Kanban", description="Application display name.")
    cache_dir: Path = Field(
        default_factory=_default_cache_dir,
        description="Directory for materialised helper assets.",
    )
    sounds_dir: Path | None = Field(
        default=None,
        description="Directory holding sound files (defaults to <cache_dir>/sounds).",
    )

    # ── Service ──
    service_host: str = Field(default="127.0.0.1", description="HTTP service bind address.")
    service_port: int = Field(default=8087, ge=1, le=65535, description="HTTP service bind port.")

    # ── Notifications ──
    sound_enabled: bool = Field(default=False, description="Play notification sounds.")
    push_enabled: bool = Field(default=True, description="Raise desktop notifications.")
    slack_enabled: bool = Field(default=False, description="Post to Slack.")
    slack_webhook_url: str | None = Field(default=None, description="Slack incoming-webhook URL.")
    sound_file: SoundFile = Field(default=SoundFile.COW_MOOING, description="Notification sound.")

    @property
    def resolved_sounds_dir(self) -> Path:
        """Return ``sounds_dir`` or its default under ``cache_dir``."""
        return self.sounds_dir if self.sounds_dir is not None else self.cache_dir / "sounds"

    def notification_config(self) -> NotificationConfig:
        """Build the initial :class:`NotificationConfig` from these settings."""
        return NotificationConfig(
            sound_enabled=self.sound_enabled,
            push_enabled=self.push_enabled,
            slack_enabled=self.slack_enabled,
            slack_webhook_url=self.slack_webhook_url,
            sound_file=self.sound_file,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()


class ConfigStore:
    """Holds the live :class:`NotificationConfig`.

    Readers take a whole-value snapshot; writers swap the whole value, so
    a reader never sees fields from two different configurations.

    Args:
        initial: Starting configuration (defaults to all-default values).
    """

    def __init__(self, initial: NotificationConfig | None = None) -> None:
        self._lock = threading.Lock()
        self._config = initial or NotificationConfig()

    def snapshot(self) -> NotificationConfig:
        """Return a consistent copy of the current configuration."""
        with self._lock:
            return self._config.model_copy(deep=True)

    def replace(self, config: NotificationConfig) -> None:
        """Swap in *config* as the current configuration."""
        with self._lock:
            self._config = config
