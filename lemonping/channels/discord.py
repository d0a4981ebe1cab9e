"""Discord notification channel — one embed per sale via a channel webhook.

Security: URL stored in env var DISCORD_WEBHOOK_URL, never logged.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from lemonping.channels.protocol import NotifierChannel
from lemonping.models import SaleSummary

EMBED_COLOR = 0xF5E642  # lemon yellow
FOOTER_TEXT = "LemonPing"


class DiscordChannel(NotifierChannel):
    """Discord notification channel via webhook embeds."""

    channel_type = "discord"

    def __init__(
        self, channel_id: str = "discord", webhook_url: str = "", timeout: float | None = None
    ):
        super().__init__(channel_id, webhook_url, timeout)

    def format_message(self, sale: SaleSummary) -> dict[str, Any]:
        return {
            "embeds": [
                {
                    "title": "🍋 New Sale!",
                    "color": EMBED_COLOR,
                    "fields": [
                        {"name": "Product", "value": sale.product_name, "inline": True},
                        {"name": "Amount", "value": sale.amount, "inline": True},
                        {"name": "Customer", "value": sale.customer_name, "inline": True},
                        {"name": "Country", "value": sale.country, "inline": True},
                    ],
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "footer": {"text": FOOTER_TEXT},
                }
            ]
        }
