"""Slack notification channel — sends sales via Slack Incoming Webhook.

Uses an Incoming Webhook URL (no bot token needed).
Security: URL stored in env var SLACK_WEBHOOK_URL, never logged.
"""

from __future__ import annotations

from typing import Any

from lemonping.channels.protocol import NotifierChannel
from lemonping.models import SaleSummary


def _escape(text: str) -> str:
    """Escape the three characters Slack reserves for mrkdwn control sequences."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class SlackChannel(NotifierChannel):
    """Slack notification channel via Incoming Webhook."""

    channel_type = "slack"

    def __init__(
        self, channel_id: str = "slack", webhook_url: str = "", timeout: float | None = None
    ):
        super().__init__(channel_id, webhook_url, timeout)

    def format_message(self, sale: SaleSummary) -> dict[str, Any]:
        """Format as Slack Block Kit message."""
        product = _escape(sale.product_name)
        amount = _escape(sale.amount)
        customer = _escape(sale.customer_name)
        country = _escape(sale.country)

        return {
            "text": f"New sale: {customer} bought {product} for {amount}",
            "blocks": [
                {
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": "🍋 *New Sale on LemonSqueezy!*",
                    },
                },
                {
                    "type": "section",
                    "fields": [
                        {"type": "mrkdwn", "text": f"*Product*\n{product}"},
                        {"type": "mrkdwn", "text": f"*Amount*\n{amount}"},
                        {"type": "mrkdwn", "text": f"*Customer*\n{customer}"},
                        {"type": "mrkdwn", "text": f"*Country*\n{country}"},
                    ],
                },
            ],
        }
