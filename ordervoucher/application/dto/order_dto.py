"""
API DTOs - Data Transfer Objects for API requests/responses.
Field names follow the shop's order JSON on the way in and the ledger's voucher JSON on the way out.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from ordervoucher.domain.entities import (
    AccountsConfig,
    LineItem,
    Order,
    OrderGroup,
    ShippingLine,
    TaxLine,
    VoucherConfig,
    VoucherResult,
    VoucherRow,
)
from ordervoucher.domain.services import GroupVoucher
from ordervoucher.domain.value_objects import AccountCode, to_decimal, vat_rate

# Amounts are Decimal in the domain and plain JSON numbers on the wire.
# Floats go through str() so 0.12 stays 0.12.
Amount = Annotated[
    Decimal,
    BeforeValidator(lambda value: to_decimal(value) if isinstance(value, float) else value),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class TaxLineDTO(BaseModel):
    """DTO - Tax applied to a line item."""
    rate: Amount = Field(..., description="VAT rate as a fraction, e.g. 0.25")
    price: Amount = Field(..., description="Tax amount for the line item")

    def to_entity(self) -> TaxLine:
        return TaxLine(rate=vat_rate(self.rate), price=self.price)


class LineItemDTO(BaseModel):
    price: Amount = Field(..., description="Unit price")
    quantity: int = Field(..., description="Quantity sold")
    tax_lines: list[TaxLineDTO] = Field(default_factory=list)

    def to_entity(self) -> LineItem:
        return LineItem(
            price=self.price,
            quantity=self.quantity,
            tax_lines=tuple(tax.to_entity() for tax in self.tax_lines),
        )


class ShippingLineDTO(BaseModel):
    price: Amount = Field(..., description="Shipping charge")

    def to_entity(self) -> ShippingLine:
        return ShippingLine(price=self.price)


class OrderDTO(BaseModel):
    """DTO - Completed order as exported by the shop."""
    created_at: str = Field(..., description="Creation timestamp, used as the grouping key")
    currency: str = Field(..., min_length=1)
    total_price: Amount
    taxes_included: bool = False
    line_items: list[LineItemDTO] = Field(default_factory=list)
    shipping_lines: list[ShippingLineDTO] = Field(default_factory=list)
    name: str | None = Field(None, description="Order name, e.g. #1001")

    model_config = ConfigDict(extra="ignore", json_schema_extra={
        "example": {
            "name": "#1001",
            "created_at": "2025-03-01",
            "currency": "SEK",
            "total_price": 150,
            "taxes_included": True,
            "line_items": [
                {
                    "price": 100,
                    "quantity": 1,
                    "tax_lines": [{"rate": 0.25, "price": 20}]
                }
            ],
            "shipping_lines": [{"price": 50}]
        }
    })

    def to_entity(self) -> Order:
        return Order(
            created_at=self.created_at,
            currency=self.currency,
            total_price=self.total_price,
            taxes_included=self.taxes_included,
            line_items=tuple(item.to_entity() for item in self.line_items),
            shipping_lines=tuple(line.to_entity() for line in self.shipping_lines),
            name=self.name,
        )

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDTO":
        return cls(
            created_at=order.created_at,
            currency=order.currency,
            total_price=order.total_price,
            taxes_included=order.taxes_included,
            line_items=[
                LineItemDTO(
                    price=item.price,
                    quantity=item.quantity,
                    tax_lines=[TaxLineDTO(rate=t.rate, price=t.price) for t in item.tax_lines],
                )
                for item in order.line_items
            ],
            shipping_lines=[ShippingLineDTO(price=s.price) for s in order.shipping_lines],
            name=order.name,
        )


class AccountsConfigDTO(BaseModel):
    """DTO - Account codes for posting orders."""
    order_receivables: str = Field(..., min_length=1, description="Receivables account")
    sales_revenue_25: str = Field(..., min_length=1, description="Sales revenue 25% VAT")
    output_vat_25: str = Field(..., min_length=1, description="Output VAT 25%")
    sales_revenue_12: str = Field(..., min_length=1, description="Sales revenue 12% VAT")
    output_vat_12: str = Field(..., min_length=1, description="Output VAT 12%")
    order_shipping: str | None = Field(None, description="Shipping revenue account")

    def to_entity(self) -> AccountsConfig:
        return AccountsConfig(
            order_receivables=AccountCode(self.order_receivables),
            sales_revenue_25=AccountCode(self.sales_revenue_25),
            output_vat_25=AccountCode(self.output_vat_25),
            sales_revenue_12=AccountCode(self.sales_revenue_12),
            output_vat_12=AccountCode(self.output_vat_12),
            order_shipping=AccountCode(self.order_shipping) if self.order_shipping else None,
        )


class VoucherConfigDTO(BaseModel):
    accounts: AccountsConfigDTO

    def to_entity(self) -> VoucherConfig:
        return VoucherConfig(accounts=self.accounts.to_entity())


class OrderBatchDTO(BaseModel):
    orders: list[OrderDTO] = Field(default_factory=list)

    def to_entities(self) -> list[Order]:
        return [order.to_entity() for order in self.orders]


class VoucherPreviewRequestDTO(OrderBatchDTO):
    """DTO - Orders to convert, with an optional per-request account mapping."""
    config: VoucherConfigDTO | None = None


class OrderGroupDTO(BaseModel):
    date: str
    country: str
    currency: str
    orders: list[OrderDTO]

    @classmethod
    def from_entity(cls, group: OrderGroup) -> "OrderGroupDTO":
        return cls(
            date=group.date,
            country=group.country,
            currency=group.currency,
            orders=[OrderDTO.from_entity(order) for order in group.orders],
        )


class VoucherRowDTO(BaseModel):
    """DTO - Voucher row in the ledger's import format."""
    account: str = Field(..., alias="Account")
    debit: Amount | None = Field(None, alias="Debit")
    credit: Amount | None = Field(None, alias="Credit")
    transaction_information: str = Field("", alias="TransactionInformation")
    quantity: int = Field(1, alias="Quantity")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, row: VoucherRow) -> "VoucherRowDTO":
        return cls(
            account=row.account,
            debit=row.debit,
            credit=row.credit,
            transaction_information=row.transaction_information,
            quantity=row.quantity,
        )


class VoucherDTO(BaseModel):
    voucher_rows: list[VoucherRowDTO] = Field(..., alias="VoucherRows")

    model_config = ConfigDict(populate_by_name=True)


class VoucherPreviewDTO(BaseModel):
    """DTO - Voucher for one date/currency group with its balance check."""
    date: str
    country: str
    currency: str
    order_count: int = Field(..., alias="orderCount")
    voucher: VoucherDTO
    total_debit: Amount = Field(..., alias="totalDebit")
    total_credit: Amount = Field(..., alias="totalCredit")
    is_balanced: bool = Field(..., alias="isBalanced")
    unmapped_rates: list[Amount] = Field(default_factory=list, alias="unmappedRates")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, item: GroupVoucher) -> "VoucherPreviewDTO":
        group, result = item.group, item.result
        return cls(
            date=group.date,
            country=group.country,
            currency=group.currency,
            order_count=len(group.orders),
            voucher=voucher_to_dto(result),
            total_debit=result.total_debit,
            total_credit=result.total_credit,
            is_balanced=result.is_balanced(),
            unmapped_rates=list(result.unmapped_rates),
        )


def voucher_to_dto(result: VoucherResult) -> VoucherDTO:
    return VoucherDTO(voucher_rows=[VoucherRowDTO.from_entity(row) for row in result.voucher.rows])
