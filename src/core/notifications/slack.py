"""
Slack webhook notification sender.

Posts an alert to a Slack channel via an incoming webhook whenever a
watch reports a change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from core.config import settings

if TYPE_CHECKING:
    from workers.dom_watch.models import ScrapeResult

logger = logging.getLogger(__name__)


def format_change_alert(result: ScrapeResult) -> tuple[str, list[dict]]:
    """Fallback text and Block Kit blocks for a CHANGE result."""
    watch = result.watch
    text = f"🔔 Watch '{watch.name}' changed: {watch.url}"

    fields = [
        {"type": "mrkdwn", "text": f"*Selector*\n`{watch.css_selector}`"},
        {"type": "mrkdwn", "text": f"*Expected*\n{watch.current_text or '(empty)'}"},
    ]
    if result.text is not None:
        found = result.text.strip()
        if len(found) > 200:
            found = found[:197] + "..."
        fields.append({"type": "mrkdwn", "text": f"*Found*\n{found or '(empty)'}"})
    else:
        fields.append({"type": "mrkdwn", "text": "*Found*\n_element is gone_"})

    section: dict = {
        "type": "section",
        "text": {"type": "mrkdwn", "text": f"*<{watch.url}|{watch.name}>* changed"},
        "fields": fields,
    }
    if watch.thumbnail:
        section["accessory"] = {"type": "image", "image_url": watch.thumbnail, "alt_text": watch.name}

    return text, [section]


async def send_slack_alert(
    text: str,
    *,
    blocks: list[dict] | None = None,
) -> bool:
    """
    Send a message to the configured Slack webhook.

    Args:
        text: Fallback text for notifications.
        blocks: Optional Slack Block Kit blocks for rich formatting.

    Returns:
        True if sent successfully, False otherwise.
    """
    if not settings.slack_webhook_url:
        logger.warning("SLACK_WEBHOOK_URL not configured. Alert skipped.")
        return False

    payload: dict = {"text": text}
    if blocks:
        payload["blocks"] = blocks

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.post(
                settings.slack_webhook_url,
                json=payload,
            )
            response.raise_for_status()
            logger.info("Slack alert sent successfully.")
            return True
    except httpx.HTTPError as exc:
        logger.error("Failed to send Slack alert: %s", exc)
        return False
