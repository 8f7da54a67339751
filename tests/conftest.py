"""
Pytest configuration and fixtures.
"""

from decimal import Decimal

import pytest

from ordervoucher.domain.entities import (
    AccountsConfig,
    LineItem,
    Order,
    ShippingLine,
    TaxLine,
    VoucherConfig,
)
from ordervoucher.domain.value_objects import AccountCode, vat_rate


def make_order(
    items: list[tuple[str, int, str, str]],
    shipping: tuple[str, ...] | list[str] = (),
    total_price: str | None = None,
    taxes_included: bool = True,
    created_at: str = "2025-03-01",
    currency: str = "SEK",
    name: str | None = None,
) -> Order:
    """Order from (unit price, quantity, rate, tax amount) tuples."""
    line_items = tuple(
        LineItem(
            price=Decimal(price),
            quantity=quantity,
            tax_lines=(TaxLine(rate=vat_rate(rate), price=Decimal(tax)),),
        )
        for price, quantity, rate, tax in items
    )
    shipping_lines = tuple(ShippingLine(price=Decimal(price)) for price in shipping)
    if total_price is None:
        total = sum((item.total_price for item in line_items), Decimal("0"))
        total += sum((line.price for line in shipping_lines), Decimal("0"))
        if not taxes_included:
            total += sum((Decimal(tax) for _, _, _, tax in items), Decimal("0"))
    else:
        total = Decimal(total_price)
    return Order(
        created_at=created_at,
        currency=currency,
        total_price=total,
        taxes_included=taxes_included,
        line_items=line_items,
        shipping_lines=shipping_lines,
        name=name,
    )


@pytest.fixture
def order_factory():
    return make_order


@pytest.fixture
def accounts() -> AccountsConfig:
    return AccountsConfig(
        order_receivables=AccountCode("1510"),
        sales_revenue_25=AccountCode("3001"),
        output_vat_25=AccountCode("2611"),
        sales_revenue_12=AccountCode("3002"),
        output_vat_12=AccountCode("2621"),
        order_shipping=AccountCode("3520"),
    )


@pytest.fixture
def config(accounts: AccountsConfig) -> VoucherConfig:
    return VoucherConfig(accounts=accounts)


@pytest.fixture
def config_without_shipping(accounts: AccountsConfig) -> VoucherConfig:
    return VoucherConfig(accounts=AccountsConfig(
        order_receivables=accounts.order_receivables,
        sales_revenue_25=accounts.sales_revenue_25,
        output_vat_25=accounts.output_vat_25,
        sales_revenue_12=accounts.sales_revenue_12,
        output_vat_12=accounts.output_vat_12,
    ))


@pytest.fixture
def order_payload() -> dict:
    return {
        "name": "#1001",
        "created_at": "2025-03-01",
        "currency": "SEK",
        "total_price": "100.00",
        "taxes_included": True,
        "line_items": [
            {"price": "100.00", "quantity": 1, "tax_lines": [{"rate": 0.25, "price": "20.00"}]}
        ],
        "shipping_lines": [],
        "customer": {"id": 42},
    }


@pytest.fixture
def accounts_payload() -> dict:
    return {
        "accounts": {
            "order_receivables": "1510",
            "sales_revenue_25": "3001",
            "output_vat_25": "2611",
            "sales_revenue_12": "3002",
            "output_vat_12": "2621",
        }
    }
