"""
Product Extractor

Rebuilds normalized Product records from WooCommerce export items.

WooCommerce spreads a product over several places of the export:
- post metadata: SKU, prices, thumbnail id, gallery ids, SEO description
- <category> terms: product type, size attribute values, categories
- attachment items: image URLs, referenced by post id

Which meta keys and taxonomy domains are used comes from the extraction
mapping (config/migration.yaml).
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..common.config_loader import load_mapping
from ..common.text_utils import clean_text, normalize_price
from ..models import Product, RawItem
from .attachments import build_attachment_map

logger = logging.getLogger(__name__)

PRODUCT_TYPE = "product"


class ProductExtractor:
    """
    Extracts Product records from export items.

    Usage:
        extractor = ProductExtractor()
        products = extractor.extract(items, attachment_map)
    """

    def __init__(self, mapping: Optional[Dict[str, Any]] = None):
        """
        Initialize the extractor.

        Args:
            mapping: Extraction mapping (if None, loads config/migration.yaml)
        """
        if mapping is None:
            mapping = load_mapping()

        self.sku_prefix: str = mapping["sku_prefix"]
        self.variable_type: str = mapping["variable_type"]

        taxonomies = mapping["taxonomies"]
        self.product_type_domain: str = taxonomies["product_type"]
        self.variant_domain: str = taxonomies["variant_axis"]
        self.category_domain: str = taxonomies["category"]

        meta_keys = mapping["meta_keys"]
        self.sku_keys: List[str] = list(meta_keys["sku"])
        self.price_keys: List[str] = list(meta_keys["price"])
        self.thumbnail_keys: List[str] = list(meta_keys["thumbnail"])
        self.gallery_keys: List[str] = list(meta_keys["gallery"])
        self.meta_description_keys: List[str] = list(meta_keys["meta_description"])

    def extract(self, items: Iterable[RawItem], attachments: Mapping[str, str]) -> List[Product]:
        """
        Extract every product item, in export order.

        Args:
            items: All export items
            attachments: Attachment id -> URL lookup

        Returns:
            List of Product
        """
        products = [
            self.extract_product(item, attachments)
            for item in items
            if item.post_type == PRODUCT_TYPE
        ]
        logger.info("Extracted %d products", len(products))
        return products

    def extract_product(self, item: RawItem, attachments: Mapping[str, str]) -> Product:
        """Build the Product for one product item."""
        meta = item.meta
        sku = meta.resolve(*self.sku_keys) or f"{self.sku_prefix}-{item.post_id}"

        return Product(
            title=clean_text(item.title),
            sku=sku,
            price=self._resolve_price(item, sku),
            post_id=item.post_id,
            description=clean_text(item.content),
            short_description=clean_text(item.excerpt),
            meta_description=meta.resolve(*self.meta_description_keys),
            is_variable=item.has_term(self.product_type_domain, self.variable_type),
            sizes=self._term_values(item, self.variant_domain),
            categories=self._term_values(item, self.category_domain),
            image_urls=tuple(self._resolve_images(item, attachments)),
        )

    @staticmethod
    def _term_values(item: RawItem, domain: str) -> Tuple[str, ...]:
        """Trimmed non-empty term values of a domain, duplicates kept."""
        values = (clean_text(v) for v in item.terms_in(domain))
        return tuple(v for v in values if v)

    def _resolve_price(self, item: RawItem, sku: str) -> str:
        raw = item.meta.resolve(*self.price_keys)
        if not raw:
            return "0"

        price = normalize_price(raw)
        if price is None:
            logger.warning("%s: invalid price %r, using 0", sku, raw)
            return "0"
        return price

    def _resolve_images(self, item: RawItem, attachments: Mapping[str, str]) -> List[str]:
        """Thumbnail first, then gallery images in listed order, without duplicates."""
        urls: List[str] = []

        thumbnail_id = item.meta.resolve(*self.thumbnail_keys)
        if thumbnail_id and thumbnail_id in attachments:
            urls.append(attachments[thumbnail_id])

        gallery = item.meta.resolve(*self.gallery_keys)
        for attachment_id in (part.strip() for part in gallery.split(",")):
            if not attachment_id:
                continue
            url = attachments.get(attachment_id)
            if url is None:
                logger.debug("Gallery attachment %s not found in export", attachment_id)
                continue
            if url not in urls:
                urls.append(url)

        return urls


def extract_products(items: List[RawItem], mapping: Optional[Dict[str, Any]] = None) -> List[Product]:
    """
    Resolve attachments and extract products in one step.

    Args:
        items: All export items (attachments and products)
        mapping: Extraction mapping (if None, loads config/migration.yaml)

    Returns:
        List of Product, in export order
    """
    attachments = build_attachment_map(items)
    return ProductExtractor(mapping).extract(items, attachments)
