"""
Notification service facade for Vibe Kanban.

Receives notification events (title + message) and fans them out to the
sound, desktop push and Slack channels enabled in the current
configuration. Also builds deep links to kanban tasks.

Flow
----
1. Take one snapshot of the notification config.
2. For each channel the snapshot enables: trigger delivery.
3. A channel that raises is logged and skipped; the others still run.

Deliveries are best-effort: nothing is retried and ``notify`` never
raises.
"""

from __future__ import annotations

from uuid import UUID

import structlog

from vk_common.config import ConfigStore, Settings, get_settings

from .base_url import BaseUrlResolver
from .channels import NotificationChannel, PushChannel, SlackChannel, SoundChannel
from .environment import Environment
from .metrics import CHANNEL_ERRORS, NOTIFICATIONS_TRIGGERED

logger = structlog.get_logger()


def default_channels(environment: Environment, settings: Settings) -> list[NotificationChannel]:
    """Return the standard sound, push and Slack channels."""
    return [
        SoundChannel(environment, settings),
        PushChannel(environment, settings),
        SlackChannel(),
    ]


class NotificationService:
    """Dispatch notifications and build kanban task links.

    Args:
        config_store: Source of the live notification config.
        settings: Service settings (defaults to :func:`get_settings`).
        environment: Host environment (defaults to the real one).
        channels: Channels to fan out to (defaults to
                  :func:`default_channels`).
        base_url_resolver: Resolver used for task links.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        *,
        settings: Settings | None = None,
        environment: Environment | None = None,
        channels: list[NotificationChannel] | None = None,
        base_url_resolver: BaseUrlResolver | None = None,
    ) -> None:
        self._config_store = config_store
        settings = settings or get_settings()
        environment = environment or Environment()
        self.channels = channels if channels is not None else default_channels(environment, settings)
        self._base_url_resolver = base_url_resolver or BaseUrlResolver(environment)

    async def notify(self, title: str, message: str) -> None:
        """Send *title*/*message* on every enabled channel.

        Returns once every enabled channel has been triggered; deliveries
        may still be completing in the background.
        """
        config = self._config_store.snapshot()
        for channel in self.channels:
            if not channel.is_enabled(config):
                continue
            try:
                triggered = await channel.send(config, title, message)
            except Exception as exc:  # noqa: BLE001
                logger.error("notification_channel_failed", channel=channel.name, error=str(exc))
                CHANNEL_ERRORS.labels(channel=channel.name).inc()
                continue
            if triggered:
                NOTIFICATIONS_TRIGGERED.labels(channel=channel.name).inc()

    async def kanban_task_url(self, project_id: UUID | str, task_id: UUID | str) -> str | None:
        """Return the web UI URL of a task, or ``None`` if no base URL is known."""
        base_url = await self._base_url_resolver.resolve()
        if base_url is None:
            return None
        return f"{base_url}/projects/{project_id}/tasks/{task_id}"
