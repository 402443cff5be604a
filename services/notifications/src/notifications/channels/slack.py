"""
Slack notification channel.

Posts notifications to a Slack incoming webhook as ``mrkdwn`` text. Lines
labelled ``点击查看:`` ("click to view") carry a link in one of several
informal notations; those are rewritten into Slack's ``<url|label>`` link
form. Delivery runs on a detached task and its outcome is only logged.
"""

from __future__ import annotations

import structlog
from slack_sdk.webhook.async_client import AsyncWebhookClient

from vk_common.models.notification import NotificationConfig

from ..background import spawn_detached
from .base import NotificationChannel

logger = structlog.get_logger()

LINK_MARKER = "点击查看:"
LINK_LABEL = "点击查看"

_URL_SCHEMES = ("http://", "https://")
_MRKDWN_SPECIALS = {
    "\\": "\\\\",
    "*": "\\*",
    "_": "\\_",
    "~": "\\~",
    "`": "\\`",
}


def escape_mrkdwn(text: str) -> str:
    """Backslash-escape Slack ``mrkdwn`` control characters in *text*."""
    return "".join(_MRKDWN_SPECIALS.get(ch, ch) for ch in text)


def _is_http_url(candidate: str) -> bool:
    return candidate.startswith(_URL_SCHEMES)


def extract_url(text: str) -> str | None:
    """Pull an http(s) URL out of *text*.

    Recognised forms, tried in order:

    * Slack style ``<url|label>`` or ``<url>``
    * Markdown ``[label](url)``, only when it spans the whole text
    * the first bare whitespace-separated ``http(s)://`` token, with
      surrounding ``)`` / ``]`` removed

    Returns:
        The URL, or ``None`` if no form yields an http(s) URL.
    """
    s = text.strip()

    if s.startswith("<"):
        close = s.find(">", 1)
        if close != -1:
            url = s[1:close].split("|", 1)[0].strip()
            if _is_http_url(url):
                return url

    if s.startswith("[") and s.endswith(")"):
        open_idx = s.find("](")
        if open_idx != -1:
            url = s[open_idx + 2 : -1].strip()
            if _is_http_url(url):
                return url

    for token in s.split():
        if _is_http_url(token):
            return token.strip(")]")

    return None


def format_slack_message(message: str) -> str:
    """Trim each newline-separated line of *message* and rewrite ``点击查看:`` link lines."""
    lines = message.split("\n")
    # A final newline terminates the last line rather than opening a new one.
    if lines[-1] == "":
        lines.pop()

    out: list[str] = []
    for line in lines:
        trimmed = line.strip()
        if trimmed.startswith(LINK_MARKER):
            url = extract_url(trimmed[len(LINK_MARKER) :])
            if url is not None:
                out.append(f"<{url}|{LINK_LABEL}>")
                continue
        out.append(trimmed)
    return "\n".join(out)


def build_payload(title: str, message: str) -> dict[str, object]:
    """Build the JSON body posted to the webhook."""
    text = f"*{escape_mrkdwn(title)}*\n{format_slack_message(message)}"
    return {"text": text, "mrkdwn": True}


class SlackChannel(NotificationChannel):
    """Send notifications to a Slack incoming webhook.

    The webhook URL comes from the config snapshot of each call, so a
    new client is built per delivery.
    """

    name: str = "slack"

    def is_enabled(self, config: NotificationConfig) -> bool:
        return config.slack_enabled

    async def send(self, config: NotificationConfig, title: str, message: str) -> bool:
        webhook_url = (config.slack_webhook_url or "").strip()
        if not webhook_url:
            logger.warning("slack_webhook_url_missing")
            return False

        payload = build_payload(title, message)
        spawn_detached(self._post(webhook_url, payload), name="slack-webhook")
        return True

    async def _post(self, webhook_url: str, payload: dict[str, object]) -> None:
        client = AsyncWebhookClient(url=webhook_url)
        try:
            response = await client.send_dict(payload)
        except Exception as exc:  # noqa: BLE001
            logger.error("slack_delivery_failed", error=str(exc))
            return

        if 200 <= response.status_code < 300:
            logger.debug("slack_delivered", status=response.status_code)
        else:
            logger.error("slack_non_2xx", status=response.status_code, body=response.body)
