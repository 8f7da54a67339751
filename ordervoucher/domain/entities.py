"""
Domain Entities - Orders, order groups and ledger vouchers.
Orders come in read-only; groups and vouchers are built fresh on every call.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from .value_objects import (
    DEFAULT_COUNTRY,
    VAT_12,
    VAT_25,
    ZERO,
    AccountCode,
    VatRate,
)


@dataclass(frozen=True, slots=True)
class TaxLine:
    """Tax applied to one line item: rate as a fraction and absolute amount."""
    rate: VatRate
    price: Decimal


@dataclass(frozen=True, slots=True)
class LineItem:
    price: Decimal
    quantity: int
    tax_lines: tuple[TaxLine, ...] = ()

    @property
    def total_price(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True, slots=True)
class ShippingLine:
    price: Decimal


@dataclass(frozen=True, slots=True)
class Order:
    """
    Entity - A completed sale.
    `created_at` is kept as the raw string; it is the grouping key.
    """
    created_at: str
    currency: str
    total_price: Decimal
    taxes_included: bool = False
    line_items: tuple[LineItem, ...] = ()
    shipping_lines: tuple[ShippingLine, ...] = ()
    name: str | None = None

    @property
    def shipping_total(self) -> Decimal:
        return sum((line.price for line in self.shipping_lines), ZERO)


@dataclass
class OrderGroup:
    """
    Entity - Orders sharing a transaction date and currency.
    Country is a placeholder until it is looked up from order data.
    """
    date: str
    currency: str
    country: str = DEFAULT_COUNTRY
    orders: list[Order] = field(default_factory=list)

    @property
    def total_price(self) -> Decimal:
        return sum((order.total_price for order in self.orders), ZERO)

    @property
    def shipping_total(self) -> Decimal:
        return sum((order.shipping_total for order in self.orders), ZERO)


@dataclass
class VatBucket:
    """Running net sales and VAT for one rate."""
    sales_net: Decimal = ZERO
    sales_vat: Decimal = ZERO

    def add(self, net: Decimal, vat: Decimal) -> None:
        self.sales_net += net
        self.sales_vat += vat


@dataclass(frozen=True, slots=True)
class VoucherRow:
    """One ledger line."""
    account: AccountCode
    debit: Decimal | None = None
    credit: Decimal | None = None
    transaction_information: str = ""
    quantity: int = 1


@dataclass
class Voucher:
    """
    Entity - One accounting entry for an order group.
    Debit = credit is checked by the caller, not enforced here.
    """
    rows: list[VoucherRow] = field(default_factory=list)

    @property
    def total_debit(self) -> Decimal:
        return sum((row.debit for row in self.rows if row.debit is not None), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((row.credit for row in self.rows if row.credit is not None), ZERO)


@dataclass(frozen=True)
class VoucherResult:
    voucher: Voucher
    total_debit: Decimal
    total_credit: Decimal
    unmapped_rates: tuple[VatRate, ...] = ()

    @property
    def difference(self) -> Decimal:
        return self.total_debit - self.total_credit

    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit


@dataclass(frozen=True, slots=True)
class AccountsConfig:
    """Account codes used when posting an order group."""
    order_receivables: AccountCode
    sales_revenue_25: AccountCode
    output_vat_25: AccountCode
    sales_revenue_12: AccountCode
    output_vat_12: AccountCode
    order_shipping: AccountCode | None = None

    def vat_accounts(self) -> dict[VatRate, tuple[AccountCode, AccountCode]]:
        """(sales revenue, output VAT) account pair per recognized rate."""
        return {
            VAT_25: (self.sales_revenue_25, self.output_vat_25),
            VAT_12: (self.sales_revenue_12, self.output_vat_12),
        }


@dataclass(frozen=True, slots=True)
class VoucherConfig:
    accounts: AccountsConfig
