"""Domain layer - Pure Python business logic."""

from ordervoucher.domain.entities import (
    AccountsConfig,
    LineItem,
    Order,
    OrderGroup,
    ShippingLine,
    TaxLine,
    VatBucket,
    Voucher,
    VoucherConfig,
    VoucherResult,
    VoucherRow,
)
from ordervoucher.domain.services import (
    GroupVoucher,
    OrderGroupingService,
    VoucherBatchService,
    VoucherBuilderService,
    get_orders_group_to_voucher,
    group_orders_by_date_and_country,
)
from ordervoucher.domain.value_objects import (
    AccountCode,
    RowDescription,
    VatRate,
    round2,
)
