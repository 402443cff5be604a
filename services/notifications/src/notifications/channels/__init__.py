"""
Notification channel implementations.

Contains the abstract NotificationChannel base class and the sound,
desktop push and Slack webhook channels.
"""

from .base import NotificationChannel
from .push import PushChannel
from .slack import SlackChannel
from .sound import SoundChannel

__all__ = [
    "NotificationChannel",
    "PushChannel",
    "SlackChannel",
    "SoundChannel",
]
