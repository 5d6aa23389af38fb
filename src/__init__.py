"""
WooCommerce WXR to PrestaShop Catalog Migrator

Modules:
    models      - Data models (RawItem, Product, MigrationOutcome)
    common      - Shared utilities (settings, errors, logging, slugs)
    export      - WXR parsing and product extraction
    prestashop  - PrestaShop webservice client
    migration   - Concurrent product migration and reporting
    cli         - Command-line entry point
"""
