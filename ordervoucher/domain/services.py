"""
Domain Services - Grouping orders and building vouchers for order groups.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from .entities import (
    Order,
    OrderGroup,
    VatBucket,
    Voucher,
    VoucherConfig,
    VoucherResult,
    VoucherRow,
)
from .value_objects import (
    RECOGNIZED_VAT_RATES,
    VAT_12,
    VAT_25,
    ZERO,
    RowDescription,
    VatRate,
    round2,
    vat_rate,
)

logger = logging.getLogger(__name__)

_RATE_DESCRIPTIONS: dict[VatRate, tuple[RowDescription, RowDescription]] = {
    VAT_25: (RowDescription.SALES_REVENUE_25, RowDescription.OUTPUT_VAT_25),
    VAT_12: (RowDescription.SALES_REVENUE_12, RowDescription.OUTPUT_VAT_12),
}


class OrderGroupingService:
    """
    Service - Partition orders by transaction date and currency.
    """

    def group_orders_by_date_and_country(self, orders: Iterable[Order]) -> list[OrderGroup]:
        """
        Group orders sharing (created_at, currency).
        Groups keep the order of first occurrence; orders keep their relative order.
        """
        grouped: dict[tuple[str, str], OrderGroup] = {}
        for order in orders:
            key = (order.created_at, order.currency)
            if key not in grouped:
                grouped[key] = OrderGroup(date=order.created_at, currency=order.currency)
            grouped[key].orders.append(order)
        return list(grouped.values())


class VoucherBuilderService:
    """
    Service - Build one voucher per order group.
    Receivables on the debit side; revenue, output VAT and shipping on the credit side.
    """

    def get_orders_group_to_voucher(
        self,
        group: OrderGroup,
        config: VoucherConfig
    ) -> VoucherResult:
        vat_totals = self.accumulate_vat(group.orders)
        self.allocate_shipping(vat_totals, group.orders)

        rows = self._build_rows(group, vat_totals, config)
        voucher = Voucher(rows=rows)

        vat_accounts = config.accounts.vat_accounts()
        unmapped = tuple(rate for rate in vat_totals if rate not in vat_accounts)
        if unmapped:
            logger.warning(
                "Group %s/%s has VAT rates without accounts: %s",
                group.date, group.currency, ", ".join(str(rate) for rate in unmapped)
            )

        return VoucherResult(
            voucher=voucher,
            total_debit=voucher.total_debit,
            total_credit=voucher.total_credit,
            unmapped_rates=unmapped,
        )

    def accumulate_vat(self, orders: Iterable[Order]) -> dict[VatRate, VatBucket]:
        """Sum net sales and VAT per rate over every tax line of every item."""
        vat_totals: dict[VatRate, VatBucket] = {}
        for order in orders:
            for item in order.line_items:
                for tax in item.tax_lines:
                    rate = vat_rate(tax.rate)
                    item_total = item.total_price
                    net = item_total - tax.price if order.taxes_included else item_total
                    vat_totals.setdefault(rate, VatBucket()).add(net, tax.price)
        return vat_totals

    def allocate_shipping(
        self,
        vat_totals: dict[VatRate, VatBucket],
        orders: list[Order]
    ) -> None:
        """
        Spread shipping over the VAT buckets in proportion to their net sales.
        Runs once, after all line items are accumulated. No-op when net sales are zero.
        """
        total_net = sum((bucket.sales_net for bucket in vat_totals.values()), ZERO)
        if total_net == 0:
            if vat_totals:
                logger.debug("Net sales are zero, shipping is not allocated")
            return

        inclusive_shipping = sum(
            (order.shipping_total for order in orders if order.taxes_included), ZERO
        )
        exclusive_shipping = sum(
            (order.shipping_total for order in orders if not order.taxes_included), ZERO
        )

        # Shares are fixed before any bucket is touched.
        shares = {rate: bucket.sales_net / total_net for rate, bucket in vat_totals.items()}

        for rate, share in shares.items():
            bucket = vat_totals[rate]
            for shipping, taxes_included in (
                (inclusive_shipping, True),
                (exclusive_shipping, False),
            ):
                if not shipping:
                    continue
                shipping_share = round2(shipping * share)
                vat_part = round2(shipping_share * rate / (1 + rate))
                net_part = shipping_share - vat_part if taxes_included else shipping_share
                bucket.add(net_part, vat_part)

    def _build_rows(
        self,
        group: OrderGroup,
        vat_totals: dict[VatRate, VatBucket],
        config: VoucherConfig
    ) -> list[VoucherRow]:
        accounts = config.accounts
        rows = [
            VoucherRow(
                account=accounts.order_receivables,
                debit=group.total_price,
                transaction_information=RowDescription.RECEIVABLES.value,
            )
        ]

        vat_accounts = accounts.vat_accounts()
        for rate in RECOGNIZED_VAT_RATES:
            bucket = vat_totals.get(rate)
            if bucket is None:
                continue
            revenue_account, vat_account = vat_accounts[rate]
            revenue_text, vat_text = _RATE_DESCRIPTIONS[rate]
            rows.append(VoucherRow(
                account=revenue_account,
                credit=bucket.sales_net,
                transaction_information=revenue_text.value,
            ))
            rows.append(VoucherRow(
                account=vat_account,
                credit=bucket.sales_vat,
                transaction_information=vat_text.value,
            ))

        if accounts.order_shipping:
            # Whole shipping figure, not the per-rate shares allocated above.
            shipping = group.shipping_total
            if shipping > 0:
                rows.append(VoucherRow(
                    account=accounts.order_shipping,
                    credit=shipping,
                    transaction_information=RowDescription.SHIPPING.value,
                ))

        return rows


@dataclass(frozen=True)
class GroupVoucher:
    group: OrderGroup
    result: VoucherResult


class VoucherBatchService:
    """
    Service - Convert a batch of orders into one voucher per date/currency group.
    """

    def __init__(
        self,
        grouping: OrderGroupingService | None = None,
        builder: VoucherBuilderService | None = None
    ):
        self.grouping = grouping or OrderGroupingService()
        self.builder = builder or VoucherBuilderService()

    def build_vouchers(self, orders: Iterable[Order], config: VoucherConfig) -> list[GroupVoucher]:
        groups = self.grouping.group_orders_by_date_and_country(orders)
        logger.info("Building vouchers for %d order group(s)", len(groups))

        batch = []
        for group in groups:
            result = self.builder.get_orders_group_to_voucher(group, config)
            logger.debug(
                "Group %s/%s: %d order(s), debit %s, credit %s",
                group.date, group.currency, len(group.orders),
                result.total_debit, result.total_credit
            )
            if not result.is_balanced():
                logger.warning(
                    "Voucher for %s/%s is unbalanced: debit %s != credit %s",
                    group.date, group.currency, result.total_debit, result.total_credit
                )
            batch.append(GroupVoucher(group=group, result=result))
        return batch


def group_orders_by_date_and_country(orders: Iterable[Order]) -> list[OrderGroup]:
    return OrderGroupingService().group_orders_by_date_and_country(orders)


def get_orders_group_to_voucher(group: OrderGroup, config: VoucherConfig) -> VoucherResult:
    return VoucherBuilderService().get_orders_group_to_voucher(group, config)


def unbalanced(batch: list[GroupVoucher]) -> list[GroupVoucher]:
    """Vouchers a caller must reject before submitting to the ledger."""
    return [item for item in batch if not item.result.is_balanced()]
