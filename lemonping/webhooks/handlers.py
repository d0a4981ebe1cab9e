"""Webhook HTTP handlers — FastAPI route handler for Lemon Squeezy.

The handler:
1. Reads raw body (needed for HMAC verification)
2. Verifies the X-Signature header
3. Ignores every event except order_created
4. Formats the sale and dispatches it to all channels concurrently
5. Returns 200 once every channel has settled

Security contract:
- Never return error details to webhook caller (info disclosure)
- Return 200 for ignored events (sender must not retry them)
- Return 401 only for signature failures
- Log all webhook activity for audit trail
"""

from __future__ import annotations

import json
import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lemonping.webhooks.formatter import format_sale
from lemonping.webhooks.verification import SIGNATURE_HEADER, verify_signature

logger = logging.getLogger(__name__)

EVENT_NAME_HEADER = "x-event-name"
ORDER_CREATED = "order_created"

PROVIDER = "lemonsqueezy"
WEBHOOK_PATH = f"/webhook/{PROVIDER}"


def _log_webhook(event_type: str, status: str) -> None:
    """Audit log for webhook activity."""
    logger.info(
        "WEBHOOK_AUDIT provider=%s event=%s status=%s",
        PROVIDER,
        event_type,
        status,
    )


def _ignored() -> JSONResponse:
    return JSONResponse({"message": "Event ignored"}, status_code=200)


async def handle_webhook(request: Request) -> JSONResponse:
    """Lemon Squeezy webhook handler.

    Returns 401 on signature failure, 200 for ignored or delivered events,
    500 (generic body) on unexpected failure.
    """
    start = time.time()
    settings = request.app.state.settings

    body = await request.body()

    # 1. Verify signature
    if not verify_signature(
        body, request.headers.get(SIGNATURE_HEADER), settings.lemon_webhook_secret
    ):
        logger.warning("Invalid signature — request rejected")
        _log_webhook("unknown", "signature_failed")
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    # 2. Only order_created (a new sale) is acted on
    event_name = request.headers.get(EVENT_NAME_HEADER) or ""
    logger.info("Received event: %s", event_name or "<none>")
    if event_name != ORDER_CREATED:
        _log_webhook(event_name or "none", "ignored")
        return _ignored()

    # 3. Parse JSON payload
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):  # bad JSON, bad encoding, oversized ints, deep nesting
        # Signed but unparseable: acknowledge so the provider stops retrying
        _log_webhook(event_name, "invalid_json")
        return _ignored()

    # 4. Format and fan out
    try:
        message = format_sale(payload)
        logger.info("New sale: %s", message.plain)
        results = await request.app.state.dock.dispatch(
            request.app.state.http_client, message.details
        )
    except Exception:
        logger.exception("Failed to process webhook event: %s/%s", PROVIDER, event_name)
        _log_webhook(event_name, "failed")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    failed = [r.channel_id for r in results if not r.success]
    if failed:
        logger.warning("Sale delivered with failed channels: %s", ", ".join(failed))
        _log_webhook(event_name, "partial_failure")
    else:
        _log_webhook(event_name, "delivered")

    elapsed_ms = (time.time() - start) * 1000
    logger.debug("Webhook processed in %.1fms: %s/%s", elapsed_ms, PROVIDER, event_name)

    return JSONResponse({"success": True}, status_code=200)


def register_webhook_routes(app: FastAPI) -> None:
    """Register webhook endpoint routes on the FastAPI app."""

    @app.post(WEBHOOK_PATH)
    async def lemonsqueezy_webhook(request: Request):
        """Receive Lemon Squeezy webhooks (signature-verified)."""
        return await handle_webhook(request)

    logger.info("Webhook routes registered: %s", WEBHOOK_PATH)
