"""Webhook signature verification — constant-time HMAC-SHA256.

Security contract:
- The HMAC is computed over the raw request bytes, never a re-serialized body
- Comparison uses hmac.compare_digest() (constant-time)
- Missing signature or missing secret -> verification fails (fail-closed)
- Never raises; any verification problem is a plain False
"""

from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

# Lemon Squeezy sends a hex HMAC-SHA256 digest of the body in this header
SIGNATURE_HEADER = "x-signature"


def compute_signature(body: bytes, secret: str) -> str:
    """Hex HMAC-SHA256 of ``body`` keyed with ``secret``."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(body: bytes, signature: str | None, secret: str) -> bool:
    """Verify a Lemon Squeezy webhook signature.

    Args:
        body: Raw request body bytes, exactly as received
        signature: Value of the X-Signature header (None if absent)
        secret: Shared webhook signing secret

    Returns:
        True if signature is valid
    """
    if not secret:
        logger.warning("LEMON_WEBHOOK_SECRET not set — rejecting webhook")
        return False
    if not signature:
        return False

    expected = compute_signature(body, secret)
    # Compare as bytes so non-ASCII header values fail instead of raising
    return hmac.compare_digest(
        expected.encode("ascii"),
        signature.encode("utf-8", errors="replace"),
    )
