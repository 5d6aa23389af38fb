"""
Product data models.

Pure data classes for the normalized catalog and the objects created on
PrestaShop. No business logic beyond field validation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..common.text_utils import normalize_price


@dataclass(frozen=True)
class Product:
    """
    Normalized product, ready to be created on PrestaShop.

    Field Groups:
    - Identity: title, sku (PrestaShop reference), post_id
    - Pricing: price as a decimal string
    - Content: description, short_description, meta_description
    - Variants: is_variable flag and the size axis values
    - Catalog: category names from the export
    - Images: URLs, thumbnail first
    """

    title: str
    sku: str
    price: str = "0"
    post_id: str = ""
    description: str = ""
    short_description: str = ""
    meta_description: str = ""
    is_variable: bool = False
    sizes: Tuple[str, ...] = ()              # not deduplicated
    categories: Tuple[str, ...] = ()
    image_urls: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate fields after initialization."""
        if not self.sku:
            raise ValueError("Product SKU is required")
        if normalize_price(self.price) != self.price:
            raise ValueError(f"Product price must be a non-negative decimal, got {self.price!r}")
        if len(set(self.image_urls)) != len(self.image_urls):
            raise ValueError("Product image URLs must be unique")

    @property
    def has_variants(self) -> bool:
        """True if combinations have to be created for this product."""
        return self.is_variable and bool(self.sizes)


@dataclass(frozen=True)
class OptionGroup:
    """PrestaShop product_option (attribute group)."""
    id: int
    name: str


@dataclass(frozen=True)
class OptionValue:
    """PrestaShop product_option_value (attribute)."""
    id: int
    group_id: int
    value: str


@dataclass(frozen=True)
class Combination:
    """PrestaShop combination linking a product to one option value."""
    id: int
    product_id: int
    option_value_id: int
    reference: str
    price_impact: str


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class PipelineStage(str, Enum):
    """Last step a product pipeline reached."""
    PENDING = "pending"
    PRODUCT_CREATED = "product_created"
    IMAGES_PROCESSED = "images_processed"
    VARIANTS_PROCESSED = "variants_processed"
    DONE = "done"


@dataclass
class MigrationOutcome:
    """Result of migrating one product."""
    sku: str
    status: OutcomeStatus = OutcomeStatus.SUCCESS
    stage: PipelineStage = PipelineStage.PENDING
    error: Optional[str] = None
    product_id: Optional[int] = None
    images_attempted: int = 0
    images_succeeded: int = 0
    combinations: List[Combination] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def fail(self, error: str) -> None:
        self.status = OutcomeStatus.FAILURE
        self.error = error
