"""
Domain Layer - Pure Python business logic following DDD.
Value objects for order-to-voucher conversion (VAT rates, account codes, rounding).
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import NewType

AccountCode = NewType("AccountCode", str)
VatRate = NewType("VatRate", Decimal)

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Country is not derived from order data yet.
DEFAULT_COUNTRY = "XX"

VAT_25 = VatRate(Decimal("0.25"))
VAT_12 = VatRate(Decimal("0.12"))

# Rates that have dedicated revenue/VAT accounts, in row emission order.
RECOGNIZED_VAT_RATES: tuple[VatRate, ...] = (VAT_25, VAT_12)


class RowDescription(str, Enum):
    """TransactionInformation texts used on voucher rows."""
    RECEIVABLES = "Receivables"
    SALES_REVENUE_25 = "Sales Revenue 25%"
    OUTPUT_VAT_25 = "Output VAT 25%"
    SALES_REVENUE_12 = "Sales Revenue 12%"
    OUTPUT_VAT_12 = "Output VAT 12%"
    SHIPPING = "Shipping"


def round2(amount: Decimal) -> Decimal:
    """Round a monetary amount to two decimals, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert JSON-ish numbers to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def vat_rate(value: Decimal | int | float | str) -> VatRate:
    """Rate as a Decimal key; equal Decimals such as 0.25 and 0.250 hash alike."""
    return VatRate(to_decimal(value))
