"""
WXR Export Reader

Parses a WordPress eXtended RSS export into RawItem records.

Elements are matched by local name so the WXR 1.0, 1.1 and 1.2 namespace
URIs are all accepted. The only namespace that matters is the one telling
<content:encoded> (post body) apart from <excerpt:encoded>.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Tuple, Union

from ..common.errors import ExportError
from ..common.text_utils import clean_text
from ..models import MetaBag, RawItem, TaxonomyTerm

logger = logging.getLogger(__name__)


def _split_tag(tag: str) -> Tuple[str, str]:
    """Split '{namespace}local' into (namespace, local)."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


def _text(elem) -> str:
    """Text of an element, CDATA sections included. Missing element gives ''."""
    if elem is None:
        return ""
    return "".join(elem.itertext())


def _parse_postmeta(elem) -> Tuple[str, str]:
    key = value = ""
    for child in elem:
        _, local = _split_tag(child.tag)
        if local == "meta_key":
            key = _text(child)
        elif local == "meta_value":
            value = _text(child)
    return key, value


def _parse_item(item) -> RawItem:
    """Convert one <item> element to a RawItem."""
    fields = {}
    meta = MetaBag()
    terms: List[TaxonomyTerm] = []

    for child in item:
        namespace, local = _split_tag(child.tag)

        if local == "postmeta":
            meta.merge(*_parse_postmeta(child))
        elif local == "category" and not namespace:
            terms.append(TaxonomyTerm(
                domain=child.get("domain", ""),
                value=clean_text(_text(child)),
                nicename=child.get("nicename", ""),
            ))
        elif local == "encoded":
            field_name = "excerpt" if "excerpt" in namespace else "content"
            fields[field_name] = _text(child)
        elif local in ("post_type", "post_id", "title", "attachment_url", "guid"):
            fields[local] = _text(child)

    return RawItem(
        post_type=fields.get("post_type", "").strip(),
        post_id=fields.get("post_id", "").strip(),
        title=fields.get("title", ""),
        content=fields.get("content", ""),
        excerpt=fields.get("excerpt", ""),
        attachment_url=fields.get("attachment_url", "").strip(),
        guid=fields.get("guid", "").strip(),
        meta=meta,
        terms=tuple(terms),
    )


def parse_export(content: Union[str, bytes]) -> List[RawItem]:
    """
    Parse WXR content into RawItem records, in export order.

    Args:
        content: The whole export document

    Returns:
        List of RawItem, one per <item> of the channel

    Raises:
        ExportError: If the content is empty, not well-formed XML, or has
            no RSS channel
    """
    if not content or not content.strip():
        raise ExportError("Export is empty")

    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ExportError(f"Export is not well-formed XML: {e}") from e

    channel = None
    for elem in root.iter():
        if _split_tag(elem.tag)[1] == "channel":
            channel = elem
            break

    if channel is None:
        raise ExportError("Export has no <channel> element")

    items = [
        _parse_item(child)
        for child in channel
        if _split_tag(child.tag)[1] == "item"
    ]
    logger.debug("Parsed %d export items", len(items))
    return items


def read_export(path: Union[str, Path]) -> List[RawItem]:
    """
    Read and parse a WXR export file.

    Raises:
        ExportError: If the file cannot be read or parsed
    """
    logger.info("Reading export %s", path)
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        raise ExportError(f"Cannot read export {path}: {e}") from e

    return parse_export(content)
