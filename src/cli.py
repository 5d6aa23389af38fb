"""
Command-line entry point for the catalog migration.

Reads the WXR export, extracts the products and creates them on
PrestaShop. Exits with 0 once every product has settled (failed products
are only reported) and with 1 on configuration or export errors.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .common.config_loader import load_mapping, load_settings
from .common.errors import ConfigError, ExportError
from .common.log_config import setup_logging
from .export import extract_products, read_export
from .migration import MigrationOrchestrator, write_report
from .models import Product
from .prestashop import PrestaShopAPIClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Migrate WooCommerce products from a WXR export to PrestaShop"
    )
    parser.add_argument(
        "--export", "-e",
        help="WXR export file (default: WXR_PATH or ./export.xml)"
    )
    parser.add_argument(
        "--concurrency", "-c",
        type=int,
        help="Number of products migrated in parallel (default: CONCURRENCY or 3)"
    )
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=0,
        help="Migrate only the first N products (default: all)"
    )
    parser.add_argument(
        "--mapping",
        help="Extraction mapping YAML (default: config/migration.yaml)"
    )
    parser.add_argument(
        "--env-file",
        help="Path of the .env file (default: search from the working directory)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Extract and print the products, don't call PrestaShop"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only test the PrestaShop webservice connection"
    )
    parser.add_argument(
        "--report",
        help="Write per-product outcomes to this JSON file"
    )
    parser.add_argument(
        "--log-file",
        help="Also write log records to this file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )
    return parser


def print_products(products: List[Product]) -> None:
    """Print the extracted products (dry run)."""
    print("=" * 60)
    print(f"Products found: {len(products)}")
    print("=" * 60)
    for product in products:
        kind = "variable" if product.is_variable else "simple"
        print(f"\n{product.sku}  {product.title}")
        print(f"  Price: {product.price}  ({kind})")
        if product.sizes:
            print(f"  Sizes: {', '.join(product.sizes)}")
        if product.categories:
            print(f"  Categories: {', '.join(product.categories)}")
        print(f"  Images: {len(product.image_urls)}")
        for url in product.image_urls:
            print(f"    {url}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        settings = load_settings(args.env_file, require_credentials=not args.dry_run)
        if args.export:
            settings = replace(settings, export_path=args.export)
        if args.concurrency is not None:
            if args.concurrency < 1:
                raise ConfigError(f"--concurrency must be at least 1, got {args.concurrency}")
            settings = replace(settings, concurrency=args.concurrency)

        if args.check:
            with PrestaShopAPIClient.from_settings(settings) as client:
                return 0 if client.test_connection() else 1

        mapping = load_mapping(args.mapping)
        items = read_export(settings.export_path)
    except (ConfigError, ExportError, FileNotFoundError) as e:
        logger.error("Fatal: %s", e)
        return 1

    products = extract_products(items, mapping)
    if args.limit > 0:
        products = products[:args.limit]
        logger.info("Limited to %d products", len(products))

    if args.dry_run:
        print_products(products)
        return 0

    with PrestaShopAPIClient.from_settings(settings) as client:
        orchestrator = MigrationOrchestrator(
            client,
            concurrency=settings.concurrency,
            option_group_name=settings.option_group_name,
            home_category_id=settings.home_category_id,
        )
        report = orchestrator.run(products)

    print()
    for line in report.summary_lines():
        print(line)

    if args.report:
        write_report(report, args.report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
