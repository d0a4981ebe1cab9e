"""LemonPing — relays Lemon Squeezy sale webhooks to Slack and Discord."""

__version__ = "1.0.0"
