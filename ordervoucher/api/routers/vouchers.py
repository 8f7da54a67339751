"""
API Routers - FastAPI endpoints for order grouping and voucher preview.
"""

import logging

from fastapi import APIRouter, Depends, status

from ordervoucher.application.dto.order_dto import (
    OrderBatchDTO,
    OrderGroupDTO,
    VoucherPreviewDTO,
    VoucherPreviewRequestDTO,
)
from ordervoucher.core.config import get_voucher_config
from ordervoucher.domain.entities import VoucherConfig
from ordervoucher.domain.services import OrderGroupingService, VoucherBatchService, unbalanced

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Vouchers"])


def get_batch_service() -> VoucherBatchService:
    return VoucherBatchService()


@router.post("/order-groups", response_model=list[OrderGroupDTO])
def group_orders(dto: OrderBatchDTO):
    """Group orders by transaction date and currency."""
    groups = OrderGroupingService().group_orders_by_date_and_country(dto.to_entities())
    return [OrderGroupDTO.from_entity(group) for group in groups]


@router.post(
    "/vouchers/preview",
    response_model=list[VoucherPreviewDTO],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def preview_vouchers(
    dto: VoucherPreviewRequestDTO,
    service: VoucherBatchService = Depends(get_batch_service),
    default_config: VoucherConfig = Depends(get_voucher_config)
):
    """
    Build one voucher per date/currency group.

    - Receivables debit, revenue and output VAT credits per rate, shipping credit
    - Unbalanced vouchers are returned with isBalanced=false, not rejected
    - Rates without accounts are listed in unmappedRates
    """
    config = dto.config.to_entity() if dto.config else default_config
    batch = service.build_vouchers(dto.to_entities(), config)

    rejected = unbalanced(batch)
    if rejected:
        logger.info("%d of %d voucher(s) are unbalanced", len(rejected), len(batch))

    return [VoucherPreviewDTO.from_entity(item) for item in batch]
