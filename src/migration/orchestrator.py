"""
Migration Orchestrator

Creates the extracted products on PrestaShop with a fixed pool of worker
threads.

Per product, strictly in this order:
1. Create the product (standard or combinations) in the home category
2. Download and upload each image; a failed image is only a warning
3. For variable products: make sure the shared size option group exists,
   then create one option value and one combination per size

Only a failure of step 1 or step 3 marks the product as failed. Objects
already created on PrestaShop are never rolled back, and running the same
export twice creates the products twice.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Iterable, Optional, Protocol

from ..common.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_HOME_CATEGORY_ID,
    DEFAULT_OPTION_GROUP_NAME,
    DEFAULT_PRICE_IMPACT,
    PRODUCT_TYPE_COMBINATIONS,
    PRODUCT_TYPE_STANDARD,
)
from ..common.errors import MigrationError
from ..models import (
    Combination,
    MigrationOutcome,
    OptionGroup,
    OptionValue,
    PipelineStage,
    Product,
)
from .report import MigrationReport

if TYPE_CHECKING:
    from ..prestashop import MediaFile

logger = logging.getLogger(__name__)


class CommerceClient(Protocol):
    """Remote operations the orchestrator needs (see PrestaShopAPIClient)."""

    def create_product(self, product_type, name, reference, price, description="",
                       short_description="", meta_description="", category_ids=None) -> int: ...

    def create_option_group(self, name) -> int: ...

    def create_option_value(self, group_id, value) -> int: ...

    def create_combination(self, product_id, option_value_id, reference,
                           price_impact=DEFAULT_PRICE_IMPACT) -> int: ...

    def upload_image(self, product_id, content, filename, mime_type="image/jpeg") -> None: ...

    def fetch_media(self, url) -> "MediaFile": ...


class SharedOptionGroup:
    """
    Option group shared by every variable product of a run.

    The group is created on first use and at most once: the check and the
    remote creation happen under the same lock. A failed creation leaves
    the cell empty, so the next product that needs it tries again.
    """

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._group: Optional[OptionGroup] = None

    @property
    def group(self) -> Optional[OptionGroup]:
        return self._group

    def get_or_create(self, client: CommerceClient) -> OptionGroup:
        with self._lock:
            if self._group is None:
                group_id = client.create_option_group(self.name)
                self._group = OptionGroup(id=group_id, name=self.name)
                logger.info('Option group "%s" id=%d', self.name, group_id)
            return self._group


class MigrationOrchestrator:
    """
    Runs the per-product creation pipeline under bounded concurrency.

    Usage:
        orchestrator = MigrationOrchestrator(client, concurrency=3)
        report = orchestrator.run(products)
    """

    def __init__(
        self,
        client: CommerceClient,
        concurrency: int = DEFAULT_CONCURRENCY,
        option_group_name: str = DEFAULT_OPTION_GROUP_NAME,
        home_category_id: int = DEFAULT_HOME_CATEGORY_ID,
    ):
        """
        Initialize the orchestrator.

        Args:
            client: PrestaShop client (must be safe to share between threads)
            concurrency: Number of products migrated at the same time
            option_group_name: Name of the shared size option group
            home_category_id: Category every product is created in
        """
        if concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {concurrency}")

        self.client = client
        self.concurrency = concurrency
        self.home_category_id = home_category_id
        self.option_group = SharedOptionGroup(option_group_name)

    def run(self, products: Iterable[Product]) -> MigrationReport:
        """
        Migrate all products and wait for every one of them to settle.

        Products are submitted in export order; completion order is not
        deterministic. A product that fails never stops the others.

        Returns:
            MigrationReport with one outcome per product, in submission order
        """
        products = list(products)
        logger.info("Migrating %d products with %d workers", len(products), self.concurrency)

        outcomes = []
        with ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="migrate") as pool:
            futures = [(product, pool.submit(self.migrate_product, product)) for product in products]

            for product, future in futures:
                try:
                    outcomes.append(future.result())
                except Exception as e:
                    # Bugs in a single pipeline must not abort the run
                    logger.exception("Unexpected error migrating %s", product.sku)
                    outcome = MigrationOutcome(sku=product.sku)
                    outcome.fail(f"{type(e).__name__}: {e}")
                    outcomes.append(outcome)

        report = MigrationReport(outcomes)
        logger.info("Migration finished: OK=%d / KO=%d", len(report.succeeded), len(report.failed))
        return report

    def migrate_product(self, product: Product) -> MigrationOutcome:
        """
        Run the full pipeline for one product.

        Returns:
            Outcome; remote failures are recorded on it, not raised
        """
        outcome = MigrationOutcome(sku=product.sku)
        product_type = PRODUCT_TYPE_COMBINATIONS if product.is_variable else PRODUCT_TYPE_STANDARD

        try:
            product_id = self.client.create_product(
                product_type=product_type,
                name=product.title,
                reference=product.sku,
                price=product.price,
                description=product.description,
                short_description=product.short_description,
                meta_description=product.meta_description,
                category_ids=[self.home_category_id],
            )
        except MigrationError as e:
            logger.error("%s: product creation failed: %s", product.sku, e)
            outcome.fail(str(e))
            return outcome

        outcome.product_id = product_id
        outcome.stage = PipelineStage.PRODUCT_CREATED
        logger.info("%s -> productId=%d (%s)", product.sku, product_id, product_type)

        self._migrate_images(product, product_id, outcome)
        outcome.stage = PipelineStage.IMAGES_PROCESSED

        if product.has_variants:
            try:
                self._migrate_variants(product, product_id, outcome)
            except MigrationError as e:
                logger.error("%s: variant creation failed: %s", product.sku, e)
                outcome.fail(str(e))
                return outcome
            outcome.stage = PipelineStage.VARIANTS_PROCESSED
        elif product.is_variable:
            logger.warning("%s: variable product without sizes, no combinations created", product.sku)

        outcome.stage = PipelineStage.DONE
        return outcome

    def _migrate_images(self, product: Product, product_id: int, outcome: MigrationOutcome) -> None:
        """Download and upload images one by one. Failures are warnings."""
        total = len(product.image_urls)

        for position, url in enumerate(product.image_urls, 1):
            outcome.images_attempted += 1
            try:
                media = self.client.fetch_media(url)
                filename = f"{product.sku}-{position}.{media.extension}"
                self.client.upload_image(product_id, media.content, filename, media.content_type)
            except MigrationError as e:
                message = f"image {url} failed: {e}"
                logger.warning("%s: %s", product.sku, message)
                outcome.warnings.append(message)
                continue

            outcome.images_succeeded += 1
            logger.info("%s: image %d/%d OK", product.sku, position, total)

    def _migrate_variants(self, product: Product, product_id: int, outcome: MigrationOutcome) -> None:
        """Create one option value and one combination per size, in order."""
        group = self.option_group.get_or_create(self.client)

        # Duplicate sizes are kept: each occurrence gets its own value and combination
        for size in product.sizes:
            value = OptionValue(
                id=self.client.create_option_value(group.id, size),
                group_id=group.id,
                value=size,
            )

            reference = f"{product.sku}-{size}"
            combination_id = self.client.create_combination(
                product_id, value.id, reference, DEFAULT_PRICE_IMPACT
            )
            outcome.combinations.append(Combination(
                id=combination_id,
                product_id=product_id,
                option_value_id=value.id,
                reference=reference,
                price_impact=DEFAULT_PRICE_IMPACT,
            ))
            logger.info("%s: combination %s -> combinationId=%d", product.sku, size, combination_id)
