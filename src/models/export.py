"""
Export data models.

Read-only records built from the WXR export. They only live until the
products have been extracted.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from ..common.text_utils import clean_text


class MetaBag(Mapping[str, str]):
    """
    Flattened post metadata of one export item.

    Keys are merged in export order and the last value written for a key
    wins. Entries with an empty key are ignored.
    """

    def __init__(self, pairs: Iterable[Tuple[str, str]] = ()):
        self._values: Dict[str, str] = {}
        for key, value in pairs:
            self.merge(key, value)

    def merge(self, key: str, value: str) -> None:
        """Record a key/value pair, replacing any earlier value."""
        if not key:
            return
        self._values[key] = value

    def resolve(self, *keys: str) -> str:
        """
        Return the first non-empty (trimmed) value among keys, in order.

        Example:
            >>> MetaBag([("_regular_price", "9.90")]).resolve("_price", "_regular_price")
            '9.90'
        """
        for key in keys:
            value = clean_text(self._values.get(key))
            if value:
                return value
        return ""

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"MetaBag({self._values!r})"


@dataclass(frozen=True)
class TaxonomyTerm:
    """A <category> element: taxonomy domain plus display value."""
    domain: str
    value: str
    nicename: str = ""


@dataclass(frozen=True)
class RawItem:
    """
    One <item> of the WXR channel.

    post_type is the discriminator ("product", "attachment", "post", ...).
    The same <category> list carries product type, variant axis values and
    product categories, told apart by their domain.
    """
    post_type: str
    post_id: str
    title: str = ""
    content: str = ""
    excerpt: str = ""
    attachment_url: str = ""
    guid: str = ""
    meta: MetaBag = field(default_factory=MetaBag)
    terms: Tuple[TaxonomyTerm, ...] = ()

    def terms_in(self, domain: str) -> List[str]:
        """Values of every term in a domain, in occurrence order."""
        return [term.value for term in self.terms if term.domain == domain]

    def has_term(self, domain: str, value: str) -> bool:
        """True if the item carries the given term."""
        return any(term.domain == domain and term.value == value for term in self.terms)


@dataclass(frozen=True)
class Attachment:
    """Media attachment resolved to its URL."""
    id: str
    url: str
