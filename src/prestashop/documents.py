"""
PrestaShop Webservice Documents

Builds the XML request bodies for the webservice and reads created ids
back from its responses.

Text is set on ElementTree nodes and escaped on serialization, so names
and descriptions from the export can contain markup, quotes or CDATA
terminators without breaking the document.
"""

import re
import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from ..common.constants import DEFAULT_PRICE_IMPACT
from ..common.errors import PrestaShopAPIError

XLINK_NS = "http://www.w3.org/1999/xlink"

# Characters that are not allowed anywhere in an XML 1.0 document
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _xml_text(value) -> str:
    return _INVALID_XML_CHARS.sub("", str(value))


def _document(entity: str):
    root = ET.Element("prestashop", {"xmlns:xlink": XLINK_NS})
    return root, ET.SubElement(root, entity)


def _add(parent, tag: str, value, **attrib) -> ET.Element:
    elem = ET.SubElement(parent, tag, {k: str(v) for k, v in attrib.items()})
    if value is not None:
        elem.text = _xml_text(value)
    return elem


def _add_localized(parent, tag: str, lang_id: int, value: str) -> ET.Element:
    elem = ET.SubElement(parent, tag)
    _add(elem, "language", value or "", id=lang_id)
    return elem


def _serialize(root) -> bytes:
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def product_document(
    *,
    product_type: str,
    name: str,
    link_rewrite: str,
    reference: str,
    price: str,
    lang_id: int,
    shop_id: int,
    tax_rule_group_id: int,
    category_ids: Iterable[int],
    description: str = "",
    short_description: str = "",
    meta_description: str = "",
) -> bytes:
    """
    Build the body of POST /api/products.

    The first category id is also the default category.
    """
    category_ids = list(category_ids)
    if not category_ids:
        raise ValueError("At least one category id is required")

    root, product = _document("product")
    _add(product, "id_shop_default", shop_id)
    _add(product, "id_category_default", category_ids[0])
    _add(product, "id_tax_rules_group", tax_rule_group_id)
    _add(product, "product_type", product_type)
    _add(product, "type", 1)
    _add(product, "active", 1)
    _add(product, "reference", reference)
    _add(product, "price", price)

    _add_localized(product, "meta_description", lang_id, meta_description)
    _add_localized(product, "name", lang_id, name)
    _add_localized(product, "link_rewrite", lang_id, link_rewrite)
    _add_localized(product, "description", lang_id, description)
    _add_localized(product, "description_short", lang_id, short_description)

    associations = ET.SubElement(product, "associations")
    categories = ET.SubElement(associations, "categories")
    for category_id in category_ids:
        category = ET.SubElement(categories, "category")
        _add(category, "id", category_id)

    return _serialize(root)


def option_group_document(name: str, lang_id: int) -> bytes:
    """Build the body of POST /api/product_options (single select, not a color group)."""
    root, option = _document("product_option")
    _add(option, "is_color_group", 0)
    _add(option, "group_type", "select")
    _add_localized(option, "name", lang_id, name)
    _add_localized(option, "public_name", lang_id, name)
    return _serialize(root)


def option_value_document(group_id: int, value: str, lang_id: int) -> bytes:
    """Build the body of POST /api/product_option_values."""
    root, option_value = _document("product_option_value")
    _add(option_value, "id_attribute_group", group_id)
    _add_localized(option_value, "name", lang_id, value)
    return _serialize(root)


def combination_document(
    product_id: int,
    option_value_id: int,
    reference: str,
    price_impact: str = DEFAULT_PRICE_IMPACT,
) -> bytes:
    """Build the body of POST /api/combinations for a single option value."""
    root, combination = _document("combination")
    _add(combination, "id_product", product_id)
    _add(combination, "reference", reference)
    _add(combination, "price", price_impact)
    _add(combination, "minimal_quantity", 1)

    associations = ET.SubElement(combination, "associations")
    values = ET.SubElement(associations, "product_option_values", {
        "nodeType": "product_option_value",
        "api": "product_option_values",
    })
    value = ET.SubElement(values, "product_option_value")
    _add(value, "id", option_value_id)

    return _serialize(root)


def extract_id(content: bytes, entity: str, url: str = "") -> int:
    """
    Read the id of a created entity from a webservice response.

    Args:
        content: Response body, e.g. <prestashop><product><id>42</id>...
        entity: Entity element name ("product", "combination", ...)
        url: Requested URL, for the error message

    Returns:
        The positive integer id

    Raises:
        PrestaShopAPIError: If the body is not XML or carries no usable id
    """
    body = content.decode("utf-8", errors="replace") if content else ""

    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise PrestaShopAPIError(f"Unreadable {entity} response: {e}", body=body, url=url) from e

    id_elem: Optional[ET.Element] = root.find(f"{entity}/id")
    raw_id = "".join(id_elem.itertext()).strip() if id_elem is not None else ""

    try:
        entity_id = int(raw_id)
    except ValueError:
        entity_id = 0

    if entity_id <= 0:
        raise PrestaShopAPIError(f"No {entity} id in PrestaShop response", body=body, url=url)
    return entity_id
