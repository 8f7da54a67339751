"""
Build ledger vouchers from a shop order export (JSON).

Usage: python scripts/build_vouchers.py orders.json [-c config.json] [-o vouchers.json]

The input is either a list of orders or {"orders": [...]}.
Without -c the account mapping comes from VOUCHER_CONFIG_PATH / VOUCHER_ACCOUNT_*.
"""

import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ordervoucher.application.dto.order_dto import OrderBatchDTO, VoucherPreviewDTO
from ordervoucher.core.config import (
    ConfigError,
    config_from_file,
    get_log_level,
    get_voucher_config,
)
from ordervoucher.domain.services import VoucherBatchService, unbalanced

logger = logging.getLogger("build_vouchers")


def read_orders(path: Path) -> OrderBatchDTO:
    """Read orders JSON, accepting a bare list or an {"orders": [...]} object."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"orders": data}
    return OrderBatchDTO.model_validate(data)


def option_path(args: list[str], flag: str) -> Path | None:
    """Path following `flag`; exits with the usage text when the value is missing."""
    if flag not in args:
        return None
    index = args.index(flag) + 1
    if index >= len(args) or args[index].startswith("-"):
        sys.exit(__doc__)
    return Path(args[index])


def main(argv: list[str] | None = None):
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    args = sys.argv[1:] if argv is None else argv
    if not args or args[0].startswith("-"):
        sys.exit(__doc__)
    input_path = Path(args[0])
    config_path = option_path(args, "-c")
    output_path = option_path(args, "-o")

    if not input_path.exists():
        sys.exit(f"Error: File not found: {input_path}")

    try:
        config = config_from_file(config_path) if config_path else get_voucher_config()
        batch_dto = read_orders(input_path)
    except (ConfigError, ValidationError, json.JSONDecodeError) as exc:
        sys.exit(f"Error: {exc}")

    batch = VoucherBatchService().build_vouchers(batch_dto.to_entities(), config)
    previews = [
        VoucherPreviewDTO.from_entity(item).model_dump(mode="json", by_alias=True, exclude_none=True)
        for item in batch
    ]
    output = json.dumps(previews, indent=2, ensure_ascii=False)

    if output_path:
        output_path.write_text(output + "\n", encoding="utf-8")
        print(f"✓ Output: {output_path}")
    else:
        print(output)

    rejected = unbalanced(batch)
    print(f"✓ Read {len(batch_dto.orders)} orders, built {len(batch)} vouchers", file=sys.stderr)
    if rejected:
        for item in rejected:
            logger.error(
                "Unbalanced voucher %s %s: debit %s, credit %s",
                item.group.date, item.group.currency,
                item.result.total_debit, item.result.total_credit
            )
        sys.exit(1)
