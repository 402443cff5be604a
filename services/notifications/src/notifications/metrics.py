"""
Prometheus metrics for the notification service.
"""

from __future__ import annotations

from prometheus_client import Counter

NOTIFICATIONS_TRIGGERED = Counter(
    "notifications_triggered_total",
    "Total notification deliveries triggered, per channel.",
    ["channel"],
)
CHANNEL_ERRORS = Counter(
    "notification_channel_errors_total",
    "Total unexpected notification channel failures.",
    ["channel"],
)
