#!/usr/bin/env python3
"""
WooCommerce → PrestaShop Catalog Migration

Creates the products of a WordPress/WooCommerce WXR export on a
PrestaShop shop through its webservice: products, images, size option
values and combinations.

Requirements:
    pip install -e .

Configuration (.env or environment):
    PS_BASE_URL, PS_API_KEY          required
    PS_LANG_ID, PS_SHOP_ID, PS_HOME_CATEGORY_ID, PS_TAX_RULE_GROUP_ID,
    WXR_PATH, CONCURRENCY            optional

Usage:
    # Preview the extracted products
    python3 migrate_catalog.py --export export.xml --dry-run

    # Check the webservice key
    python3 migrate_catalog.py --check

    # Migrate with 5 workers and keep a JSON report
    python3 migrate_catalog.py --export export.xml --concurrency 5 --report output/report.json
"""

import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(__file__))

from src.cli import main

if __name__ == "__main__":
    sys.exit(main())
