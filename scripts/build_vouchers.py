#!/usr/bin/env python3
"""
Build ledger vouchers from a shop order export (JSON).

Usage: python scripts/build_vouchers.py orders.json [-c config.json] [-o vouchers.json]
"""

from ordervoucher.cli import main

if __name__ == "__main__":
    main()
