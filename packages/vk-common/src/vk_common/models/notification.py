"""
Notification data models for Vibe Kanban.

Defines the user-facing notification settings (which channels are
enabled, which sound to play, where to post Slack messages) and the
shape of the local development port-descriptor file.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class SoundFile(str, enum.Enum):
    """Bundled notification sounds."""

    ABSTRACT_SOUND1 = "abstract-sound1"
    ABSTRACT_SOUND2 = "abstract-sound2"
    ABSTRACT_SOUND3 = "abstract-sound3"
    ABSTRACT_SOUND4 = "abstract-sound4"
    COW_MOOING = "cow-mooing"
    PHONE_VIBRATION = "phone-vibration"
    ROOSTER = "rooster"

    @property
    def file_name(self) -> str:
        """On-disk file name of the sound (``<value>.wav``)."""
        return f"{self.value}.wav"


class NotificationConfig(BaseModel):
    """Snapshot of the notification settings.

    Instances are frozen so a snapshot taken for one ``notify`` call
    cannot change underneath it.

    Attributes:
        sound_enabled: Play a sound for each notification.
        push_enabled: Raise a native desktop notification.
        slack_enabled: Post to the Slack incoming webhook.
        slack_webhook_url: Slack incoming-webhook URL (may be blank).
        sound_file: Which bundled sound to play.
    """

    model_config = ConfigDict(frozen=True)

    sound_enabled: bool = Field(default=False, description="Play a notification sound.")
    push_enabled: bool = Field(default=True, description="Raise a desktop notification.")
    slack_enabled: bool = Field(default=False, description="Post to a Slack webhook.")
    slack_webhook_url: str | None = Field(default=None, description="Slack incoming-webhook URL.")
    sound_file: SoundFile = Field(default=SoundFile.COW_MOOING, description="Sound to play.")


class DevPorts(BaseModel):
    """Contents of ``.dev-ports.json`` written by the local dev tooling."""

    model_config = ConfigDict(extra="ignore")

    frontend: StrictInt = Field(..., ge=0, le=65535, description="Vite dev-server port.")
