"""Shared test fixtures."""

import threading
from pathlib import Path

import pytest

from src.common.constants import DEFAULT_MAPPING
from src.common.errors import MediaFetchError, PrestaShopAPIError
from src.models import MetaBag, Product, RawItem, TaxonomyTerm
from src.prestashop import MediaFile

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def export_path():
    """Path of the WXR export fixture."""
    return FIXTURES_DIR / "export.xml"


@pytest.fixture
def export_xml(export_path):
    """Load the WXR export fixture."""
    return export_path.read_bytes()


@pytest.fixture
def mapping():
    """Default extraction mapping, independent of config files."""
    return DEFAULT_MAPPING


def make_item(post_id="1", post_type="product", meta=(), terms=(), **kwargs) -> RawItem:
    """Build a RawItem from (key, value) meta pairs and (domain, value) terms."""
    return RawItem(
        post_type=post_type,
        post_id=post_id,
        meta=MetaBag(meta),
        terms=tuple(TaxonomyTerm(domain=d, value=v) for d, v in terms),
        **kwargs,
    )


@pytest.fixture
def simple_product():
    """A product without variants."""
    return Product(
        title="Mug",
        sku="WP-123",
        price="9.90",
        post_id="123",
        image_urls=("https://shop.example.com/mug.jpg",),
    )


@pytest.fixture
def variable_product():
    """A product with two sizes and two images."""
    return Product(
        title="Café Déjà Vu T-shirt",
        sku="TS-CAFE",
        price="19.90",
        post_id="10",
        is_variable=True,
        sizes=("S", "M"),
        categories=("T-shirts",),
        image_urls=(
            "https://shop.example.com/tee-front.jpg",
            "https://shop.example.com/tee-back.png",
        ),
    )


class FakeCommerceClient:
    """
    Thread-safe in-memory stand-in for PrestaShopAPIClient.

    Records every call; failures are injected per operation.
    """

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self._lock = threading.Lock()
        self._next_id = 100
        self.calls = []
        self.fail_products = set()          # product references
        self.fail_media = set()             # media URLs
        self.fail_option_values = set()     # value texts
        self.fail_option_group = False
        self.active = 0
        self.max_active = 0

    def _record(self, name, *args):
        with self._lock:
            self.calls.append((name,) + args)
            self._next_id += 1
            return self._next_id

    def calls_to(self, name):
        return [c for c in self.calls if c[0] == name]

    def create_product(self, product_type, name, reference, price, description="",
                       short_description="", meta_description="", category_ids=None):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                threading.Event().wait(self.delay)
            if reference in self.fail_products:
                raise PrestaShopAPIError("POST products failed", status_code=500, body="boom")
            return self._record("create_product", product_type, name, reference, price, category_ids)
        finally:
            with self._lock:
                self.active -= 1

    def create_option_group(self, name):
        if self.delay:
            threading.Event().wait(self.delay)
        if self.fail_option_group:
            raise PrestaShopAPIError("POST product_options failed", status_code=500)
        return self._record("create_option_group", name)

    def create_option_value(self, group_id, value):
        if value in self.fail_option_values:
            raise PrestaShopAPIError("POST product_option_values failed", status_code=400)
        return self._record("create_option_value", group_id, value)

    def create_combination(self, product_id, option_value_id, reference, price_impact="0.000000"):
        return self._record("create_combination", product_id, option_value_id, reference, price_impact)

    def upload_image(self, product_id, content, filename, mime_type="image/jpeg"):
        self._record("upload_image", product_id, filename, mime_type)

    def fetch_media(self, url):
        if url in self.fail_media:
            raise MediaFetchError(url, status_code=404)
        self._record("fetch_media", url)
        content_type = "image/png" if url.endswith(".png") else "image/jpeg"
        return MediaFile(content=b"\x89data", content_type=content_type)


@pytest.fixture
def fake_client():
    return FakeCommerceClient()


@pytest.fixture
def item_factory():
    """Factory for RawItem records (see make_item)."""
    return make_item
