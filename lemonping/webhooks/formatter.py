"""Sale formatter — turns a Lemon Squeezy order payload into a SaleSummary.

Every field has a declared default, so any payload shape (missing keys,
nulls, wrong types at any nesting level) formats without raising.
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping

from lemonping.models import (
    DEFAULT_COUNTRY,
    DEFAULT_CURRENCY,
    DEFAULT_CUSTOMER_NAME,
    DEFAULT_PRODUCT_NAME,
    DEFAULT_TOTAL,
    FormattedSale,
    SaleSummary,
)

logger = logging.getLogger(__name__)

# Maximum display length for any single field
_MAX_FIELD_LENGTH = 200

_CENTS = Decimal("0.01")


def _mapping(value: Any) -> Mapping[str, Any]:
    """Return ``value`` if it is a mapping, else an empty one."""
    return value if isinstance(value, Mapping) else {}


def _sanitize_field(value: Any) -> str:
    """Normalize a payload value for display: str, collapsed whitespace, capped."""
    if value is None:
        return ""
    s = str(value)
    s = re.sub(r"\s+", " ", s).strip()
    if len(s) > _MAX_FIELD_LENGTH:
        s = s[:_MAX_FIELD_LENGTH] + "..."
    return s


def _text(value: Any, default: str) -> str:
    return _sanitize_field(value) or default


def format_total(total: Any) -> str:
    """Convert a minor-unit amount (cents) to a two-decimal major-unit string.

    Absent, boolean, non-numeric or non-finite totals give ``"0.00"``.
    """
    if total is None or isinstance(total, bool):
        return DEFAULT_TOTAL
    try:
        amount = Decimal(str(total).strip())
        if not amount.is_finite():
            return DEFAULT_TOTAL
        # quantize raises InvalidOperation past the context precision
        major = (amount / 100).quantize(_CENTS, rounding=ROUND_HALF_UP)
        if major.is_zero():
            return DEFAULT_TOTAL  # no "-0.00"
        return str(major)
    except (InvalidOperation, ValueError):
        logger.warning("Unparseable sale total: %r", total)
        return DEFAULT_TOTAL


def _extract_attributes(payload: Any) -> Mapping[str, Any]:
    """Order attributes live under data.attributes; accept a bare attributes key too."""
    body = _mapping(payload)
    attrs = _mapping(_mapping(body.get("data")).get("attributes"))
    if not attrs:
        attrs = _mapping(body.get("attributes"))
    return attrs


def extract_sale(payload: Any) -> SaleSummary:
    """Extract a SaleSummary from an order_created payload."""
    attrs = _extract_attributes(payload)
    item = _mapping(attrs.get("first_order_item"))
    address = _mapping(attrs.get("customer_address"))

    return SaleSummary(
        customer_name=_text(attrs.get("user_name"), DEFAULT_CUSTOMER_NAME),
        customer_email=_sanitize_field(attrs.get("user_email")),
        total=format_total(attrs.get("total")),
        currency=_text(attrs.get("currency"), DEFAULT_CURRENCY).upper(),
        product_name=_text(item.get("product_name"), DEFAULT_PRODUCT_NAME),
        country=_text(address.get("country"), DEFAULT_COUNTRY),
    )


def format_sale(payload: Any) -> FormattedSale:
    """Build the sale summary and its markup/plain text renderings."""
    sale = extract_sale(payload)
    return FormattedSale(
        text=(
            f"💰 New Sale! {sale.customer_name} just bought **{sale.product_name}** "
            f"for {sale.amount} ({sale.country})"
        ),
        plain=(
            f"💰 New Sale! {sale.customer_name} just bought {sale.product_name} "
            f"for {sale.amount} from {sale.country}"
        ),
        details=sale,
    )
