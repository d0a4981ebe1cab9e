"""Shared fixtures for the LemonPing test suite."""

from __future__ import annotations

import hashlib
import hmac
from typing import Any

import pytest

from lemonping.config import Settings

SECRET = "lemon-test-secret"
SLACK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"
DISCORD_URL = "https://discord.test/api/webhooks/123/abc"


@pytest.fixture()
def sign():
    """Factory computing a valid X-Signature header value for a body."""

    def _sign(body: bytes, secret: str = SECRET) -> str:
        return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()

    return _sign


@pytest.fixture()
def settings() -> Settings:
    """Settings with a secret and both chat channels configured."""
    return Settings(
        _env_file=None,
        lemon_webhook_secret=SECRET,
        slack_webhook_url=SLACK_URL,
        discord_webhook_url=DISCORD_URL,
        notify_timeout_seconds=2.0,
    )


@pytest.fixture()
def order_payload() -> dict[str, Any]:
    """A Lemon Squeezy order_created payload."""
    return {
        "meta": {"event_name": "order_created"},
        "data": {
            "type": "orders",
            "id": "1",
            "attributes": {
                "user_name": "Ana",
                "user_email": "ana@example.com",
                "total": 4999,
                "currency": "eur",
                "first_order_item": {"product_name": "Widget"},
                "customer_address": {"country": "ES"},
            },
        },
    }
