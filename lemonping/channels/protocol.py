"""Channel protocol and dock — concurrent sale notification dispatch.

- Each channel implements format_message() and an async send()
- NotifierChannel holds the shared HTTP delivery path
- ChannelDock fans one sale out to every registered channel at once

Security contract:
- Webhook URLs come from settings, never logged
- Channel failures isolated (one channel down doesn't block others)
- Unconfigured channels are skipped silently, never an error
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from lemonping.models import SaleSummary

logger = logging.getLogger(__name__)


@dataclass
class SendResult:
    """Result of delivering a notification to one channel."""
    success: bool
    channel_id: str
    error: str = ""
    skipped: bool = False  # channel not configured, nothing sent


@runtime_checkable
class Channel(Protocol):
    """Protocol for notification channels."""

    @property
    def channel_id(self) -> str:
        """Unique identifier for this channel."""
        ...

    @property
    def is_configured(self) -> bool:
        """Whether this channel has a destination URL."""
        ...

    async def deliver(self, client: httpx.AsyncClient, sale: SaleSummary) -> SendResult:
        """Format and send a sale. Never raises for delivery failures."""
        ...


class NotifierChannel:
    """Base for chat channels that POST JSON to an incoming-webhook URL."""

    channel_type = "webhook"

    def __init__(self, channel_id: str, webhook_url: str = "", timeout: float | None = None):
        self._channel_id = channel_id
        self._webhook_url = webhook_url
        # Deadline in seconds for the whole POST
        self._timeout = timeout

    @property
    def channel_id(self) -> str:
        return self._channel_id

    @property
    def is_configured(self) -> bool:
        return bool(self._webhook_url)

    def format_message(self, sale: SaleSummary) -> dict[str, Any]:
        raise NotImplementedError

    async def send(self, client: httpx.AsyncClient, formatted: dict[str, Any]) -> SendResult:
        """POST the formatted payload once. No retries.

        The whole call (connect, upload, response) is bounded by ``timeout``
        seconds when set, so a sink trickling bytes cannot hold it open.
        """
        try:
            resp = await asyncio.wait_for(
                client.post(self._webhook_url, json=formatted), self._timeout
            )
        except (httpx.TimeoutException, asyncio.TimeoutError):
            return SendResult(
                success=False,
                channel_id=self._channel_id,
                error=f"{self.channel_type} request timed out",
            )
        except httpx.HTTPError as e:
            return SendResult(
                success=False,
                channel_id=self._channel_id,
                error=f"{self.channel_type} request failed: {type(e).__name__}",
            )
        if resp.is_success:
            return SendResult(success=True, channel_id=self._channel_id)
        return SendResult(
            success=False,
            channel_id=self._channel_id,
            error=f"{self.channel_type} API error: {resp.status_code}",
        )

    async def deliver(self, client: httpx.AsyncClient, sale: SaleSummary) -> SendResult:
        if not self.is_configured:
            return SendResult(success=True, channel_id=self._channel_id, skipped=True)

        result = await self.send(client, self.format_message(sale))
        if result.success:
            logger.info("Sent to %s", self._channel_id)
        else:
            logger.warning("Channel %s send failed: %s", self._channel_id, result.error)
        return result


class ChannelDock:
    """Dispatcher for notification channels.

    One dock per application, built at startup. Dispatch launches every
    channel concurrently and waits for all of them to settle.
    """

    def __init__(self, channels: list[Channel] | None = None):
        self._channels: list[Channel] = []
        for channel in channels or []:
            self.register(channel)

    def register(self, channel: Channel) -> None:
        """Register a channel for receiving notifications."""
        self._channels.append(channel)
        logger.info(
            "Channel registered: %s status=%s",
            channel.channel_id,
            "active" if channel.is_configured else "disabled",
        )

    @property
    def channels(self) -> list[Channel]:
        return list(self._channels)

    @property
    def active_channels(self) -> list[str]:
        """IDs of channels that have a destination configured."""
        return [c.channel_id for c in self._channels if c.is_configured]

    async def dispatch(self, client: httpx.AsyncClient, sale: SaleSummary) -> list[SendResult]:
        """Deliver a sale to every channel.

        Returns:
            One SendResult per registered channel, in registration order
        """
        outcomes = await asyncio.gather(
            *(channel.deliver(client, sale) for channel in self._channels),
            return_exceptions=True,
        )

        results: list[SendResult] = []
        for channel, outcome in zip(self._channels, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.error(
                    "Channel %s dispatch error",
                    channel.channel_id,
                    exc_info=outcome,
                )
                outcome = SendResult(
                    success=False, channel_id=channel.channel_id, error=str(outcome)
                )
            results.append(outcome)
        return results
