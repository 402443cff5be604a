"""
Vibe Kanban Notification Service.

Delivers task events as notification sounds, desktop notifications and
Slack webhook messages, and builds deep links into the kanban web UI.
"""
