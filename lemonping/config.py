"""LemonPing configuration.

Read once at startup from the environment (and an optional .env file).
The instance is frozen and passed explicitly to the app factory.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Environment-driven settings for the LemonPing relay."""

    host: str = "0.0.0.0"
    port: int = 3000

    # Shared secret from the Lemon Squeezy dashboard. Empty rejects every webhook.
    lemon_webhook_secret: str = ""

    # Chat destinations. An empty URL disables that channel.
    slack_webhook_url: str = ""
    discord_webhook_url: str = ""

    notify_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, built on first use."""
    return Settings()
