"""
Main FastAPI application - Shop orders to ledger vouchers.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ordervoucher.api.routers import vouchers
from ordervoucher.core.config import get_log_level, get_voucher_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan - fail fast on a broken account mapping."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    config = get_voucher_config()
    logger.info("Receivables account %s", config.accounts.order_receivables)
    yield


app = FastAPI(
    title="Order Voucher API",
    description="""
## Shop orders to double-entry vouchers

### Features:
- **Grouping**: orders grouped by transaction date and currency
- **VAT split**: net sales and output VAT per rate, tax-inclusive or exclusive prices
- **Shipping**: allocated across VAT rates in proportion to net sales
- **Balance check**: total debit and credit returned for every voucher
    """,
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(vouchers.router)


@app.get("/")
def root():
    return {
        "name": "Order Voucher API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle configuration and validation errors."""
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
