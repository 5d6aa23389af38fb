"""
Attachment Resolver

Maps attachment post ids to media URLs.
"""

import logging
from typing import Dict, Iterable, List

from ..models import Attachment, RawItem

logger = logging.getLogger(__name__)

ATTACHMENT_TYPE = "attachment"


def collect_attachments(items: Iterable[RawItem]) -> List[Attachment]:
    """
    Build Attachment records from attachment items.

    The explicit attachment URL is preferred, the guid is the fallback.
    Items without an id or without any URL are skipped.
    """
    attachments = []
    for item in items:
        if item.post_type != ATTACHMENT_TYPE:
            continue
        url = item.attachment_url or item.guid
        if item.post_id and url:
            attachments.append(Attachment(id=item.post_id, url=url))
    return attachments


def build_attachment_map(items: Iterable[RawItem]) -> Dict[str, str]:
    """
    Build the attachment id -> URL lookup used by the product extractor.

    Args:
        items: All export items

    Returns:
        Dictionary mapping post id to media URL
    """
    attachment_map = {a.id: a.url for a in collect_attachments(items)}
    logger.info("Resolved %d attachments", len(attachment_map))
    return attachment_map
