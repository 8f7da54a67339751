"""Application layer - Use cases and DTOs."""

from ordervoucher.application.dto.order_dto import (
    AccountsConfigDTO,
    OrderBatchDTO,
    OrderDTO,
    OrderGroupDTO,
    VoucherConfigDTO,
    VoucherDTO,
    VoucherPreviewDTO,
    VoucherPreviewRequestDTO,
    VoucherRowDTO,
)
