"""
vk-common: Shared library for Vibe Kanban.

Provides configuration management, structured logging, notification data
models, asset resolution and the port-file registry used by Vibe Kanban
services.
"""

from vk_common.config import ConfigStore, Settings, get_settings

__all__ = [
    "ConfigStore",
    "Settings",
    "get_settings",
]
