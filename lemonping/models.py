"""Sale data passed from the formatter to the notification channels."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CUSTOMER_NAME = "Someone"
DEFAULT_CURRENCY = "USD"
DEFAULT_PRODUCT_NAME = "your product"
DEFAULT_COUNTRY = "Unknown"
DEFAULT_TOTAL = "0.00"


@dataclass(frozen=True)
class SaleSummary:
    """Normalized, display-ready view of one sale.

    ``total`` is already in major currency units with exactly two decimals.
    """

    customer_name: str = DEFAULT_CUSTOMER_NAME
    customer_email: str = ""
    total: str = DEFAULT_TOTAL
    currency: str = DEFAULT_CURRENCY
    product_name: str = DEFAULT_PRODUCT_NAME
    country: str = DEFAULT_COUNTRY

    @property
    def amount(self) -> str:
        """Currency code and total, e.g. ``EUR 49.99``."""
        return f"{self.currency} {self.total}"


@dataclass(frozen=True)
class FormattedSale:
    """A sale summary plus its two rendered text variants."""

    text: str  # chat markup (**bold**)
    plain: str
    details: SaleSummary
