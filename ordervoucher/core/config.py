"""
Configuration - Account mapping for voucher rows.
Read from a JSON file (VOUCHER_CONFIG_PATH) or from VOUCHER_ACCOUNT_* variables.
Defaults follow the Swedish BAS chart of accounts.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from ordervoucher.application.dto.order_dto import AccountsConfigDTO, VoucherConfigDTO
from ordervoucher.domain.entities import VoucherConfig

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS: dict[str, str] = {
    "order_receivables": "1510",  # Kundfordringar
    "sales_revenue_25": "3001",   # Försäljning 25% moms
    "output_vat_25": "2611",      # Utgående moms 25%
    "sales_revenue_12": "3002",   # Försäljning 12% moms
    "output_vat_12": "2621",      # Utgående moms 12%
    "order_shipping": "3520",     # Fakturerade frakter
}

ENV_VARIABLES: dict[str, str] = {
    "order_receivables": "VOUCHER_ACCOUNT_RECEIVABLES",
    "sales_revenue_25": "VOUCHER_ACCOUNT_SALES_25",
    "output_vat_25": "VOUCHER_ACCOUNT_VAT_25",
    "sales_revenue_12": "VOUCHER_ACCOUNT_SALES_12",
    "output_vat_12": "VOUCHER_ACCOUNT_VAT_12",
    "order_shipping": "VOUCHER_ACCOUNT_SHIPPING",
}


class ConfigError(ValueError):
    """Account configuration is missing or malformed."""


def config_from_env(environ: dict[str, str] | None = None) -> VoucherConfig:
    """
    Build the account mapping from environment variables.
    An empty VOUCHER_ACCOUNT_SHIPPING disables the shipping row.
    """
    environ = os.environ if environ is None else environ
    accounts = {
        key: environ.get(variable, DEFAULT_ACCOUNTS[key])
        for key, variable in ENV_VARIABLES.items()
    }
    if not accounts["order_shipping"]:
        accounts["order_shipping"] = None

    try:
        dto = AccountsConfigDTO(**accounts)
    except ValidationError as exc:
        missing = [ENV_VARIABLES[str(err["loc"][0])] for err in exc.errors()]
        raise ConfigError(f"Invalid account configuration: {', '.join(missing)}") from exc
    return VoucherConfigDTO(accounts=dto).to_entity()


def config_from_file(path: str | Path) -> VoucherConfig:
    """Load {"accounts": {...}} from a JSON file."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        dto = VoucherConfigDTO.model_validate_json(raw)
    except ValidationError as exc:
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        raise ConfigError(f"Invalid config file {path}: {', '.join(fields)}") from exc
    return dto.to_entity()


@lru_cache
def get_voucher_config() -> VoucherConfig:
    """Service-wide configuration, loaded once."""
    path = os.getenv("VOUCHER_CONFIG_PATH")
    if path:
        logger.info("Loading account configuration from %s", path)
        return config_from_file(path)
    return config_from_env()


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
