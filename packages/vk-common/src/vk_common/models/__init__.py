"""
Shared Pydantic data models for Vibe Kanban.
"""

from vk_common.models.notification import DevPorts, NotificationConfig, SoundFile

__all__ = [
    "DevPorts",
    "NotificationConfig",
    "SoundFile",
]
