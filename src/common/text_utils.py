"""
Text Utilities

Helper functions for text normalization, URL slugs and prices.
"""

import re
import unicodedata
from typing import Optional

from .constants import SLUG_FALLBACK, SLUG_MAX_LENGTH

_PRICE_PATTERN = re.compile(r"[0-9]+(\.[0-9]+)?")


def clean_text(value: Optional[str]) -> str:
    """
    Trim a text value, mapping None and whitespace-only strings to "".

    Args:
        value: Raw text (may be None)

    Returns:
        Stripped text
    """
    if not value:
        return ""
    return value.strip()


def strip_accents(text: str) -> str:
    """Remove combining marks after canonical decomposition."""
    return "".join(
        c for c in unicodedata.normalize("NFD", text) if unicodedata.category(c) != "Mn"
    )


def slugify(name: Optional[str], max_length: int = SLUG_MAX_LENGTH, fallback: str = SLUG_FALLBACK) -> str:
    """
    Generate an ASCII URL slug (PrestaShop link_rewrite) from a name.

    Lowercases, strips diacritics, collapses every run of characters
    outside [a-z0-9] into a single hyphen and trims hyphens at both ends.

    Args:
        name: Product name
        max_length: Maximum slug length
        fallback: Returned when nothing usable is left

    Returns:
        URL-friendly slug, never empty

    Example:
        >>> slugify("Café Déjà Vu!!")
        'cafe-deja-vu'
        >>> slugify("!!!")
        'produit'
    """
    text = strip_accents((name or "").lower())
    slug = re.sub(r"[^a-z0-9]+", "-", text).strip("-")

    # Truncation can leave a hyphen at the cut
    slug = slug[:max_length].rstrip("-")

    return slug or fallback


def normalize_price(value: Optional[str]) -> Optional[str]:
    """
    Validate a price string from the export.

    Accepts a decimal comma ("12,50"). Returns the trimmed price with a
    dot separator, or None unless it is plain digits with an optional
    fractional part (no sign, exponent or digit separators).

    Example:
        >>> normalize_price(" 12,50 ")
        '12.50'
        >>> normalize_price("-3") is None
        True
        >>> normalize_price("1e3") is None
        True
    """
    text = clean_text(value).replace(",", ".")
    if not _PRICE_PATTERN.fullmatch(text):
        return None
    return text
