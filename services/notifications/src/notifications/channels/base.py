"""
Abstract base class for notification channels.

Defines the NotificationChannel interface shared by the sound, push and
Slack channels so the dispatcher can fan out without knowing anything
channel-specific.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vk_common.models.notification import NotificationConfig


class NotificationChannel(ABC):
    """Base class every notification channel must implement.

    Subclasses decide from the config snapshot whether they are enabled
    and override :meth:`send` to trigger delivery.

    Attributes:
        name: Channel name used in logs and metrics.
    """

    name: str = "base"

    @abstractmethod
    def is_enabled(self, config: NotificationConfig) -> bool:
        """Return ``True`` if *config* turns this channel on."""

    @abstractmethod
    async def send(self, config: NotificationConfig, title: str, message: str) -> bool:
        """Trigger delivery of *title*/*message*.

        Returns ``True`` once delivery has been started (completion may
        happen in the background) and ``False`` if the channel skipped
        it. Failures the channel can anticipate are logged here; anything
        else propagates to the dispatcher, which logs it.
        """
