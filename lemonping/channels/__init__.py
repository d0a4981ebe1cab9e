"""Chat notification channels (Slack, Discord) and the concurrent dock."""

from __future__ import annotations

from lemonping.channels.discord import DiscordChannel
from lemonping.channels.protocol import Channel, ChannelDock, NotifierChannel, SendResult
from lemonping.channels.slack import SlackChannel
from lemonping.config import Settings


def build_dock(settings: Settings) -> ChannelDock:
    """Dock with every supported channel; unset URLs register as disabled."""
    return ChannelDock(
        [
            SlackChannel(
                webhook_url=settings.slack_webhook_url,
                timeout=settings.notify_timeout_seconds,
            ),
            DiscordChannel(
                webhook_url=settings.discord_webhook_url,
                timeout=settings.notify_timeout_seconds,
            ),
        ]
    )


__all__ = [
    "Channel",
    "ChannelDock",
    "DiscordChannel",
    "NotifierChannel",
    "SendResult",
    "SlackChannel",
    "build_dock",
]
