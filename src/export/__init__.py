"""
WXR export processing.

Modules:
    wxr_reader - Parse the export into RawItem records
    attachments - Attachment id -> URL lookup
    product_extractor - Normalized Product records from product items
"""

from .attachments import build_attachment_map, collect_attachments
from .product_extractor import ProductExtractor, extract_products
from .wxr_reader import parse_export, read_export

__all__ = [
    # Reader
    'parse_export',
    'read_export',
    # Attachments
    'build_attachment_map',
    'collect_attachments',
    # Products
    'ProductExtractor',
    'extract_products',
]
