"""
PrestaShop API Client

Client for the PrestaShop webservice (XML over REST).
Handles authentication, request documents and error reporting.

The client does not retry: every failed call raises PrestaShopAPIError
with the HTTP status and response body.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter

from ..common.config_loader import Settings
from ..common.constants import DEFAULT_PRICE_IMPACT, DEFAULT_REQUEST_TIMEOUT
from ..common.errors import MediaFetchError, PrestaShopAPIError
from ..common.text_utils import slugify
from . import documents

logger = logging.getLogger(__name__)

# Content type -> file extension for uploaded images
IMAGE_EXTENSIONS = {
    "png": "png",
    "gif": "gif",
    "webp": "webp",
}


@dataclass(frozen=True)
class MediaFile:
    """Downloaded media bytes with their content type."""
    content: bytes
    content_type: str = "image/jpeg"

    @property
    def extension(self) -> str:
        """File extension inferred from the content type (jpg by default)."""
        for marker, extension in IMAGE_EXTENSIONS.items():
            if marker in self.content_type.lower():
                return extension
        return "jpg"


class PrestaShopAPIClient:
    """
    Client for the PrestaShop webservice.

    Handles:
    - Basic authentication with the webservice key
    - XML request documents and created-id extraction
    - Multipart image uploads
    - Media downloads from the source site (without PrestaShop credentials)

    Usage:
        with PrestaShopAPIClient(base_url="https://shop.example.com", api_key="KEY") as client:
            product_id = client.create_product("standard", "T-shirt", "TS-1", "19.90")
            client.upload_image(product_id, content, "TS-1-1.jpg")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        lang_id: int = 1,
        shop_id: int = 1,
        home_category_id: int = 2,
        tax_rule_group_id: int = 1,
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
        pool_size: int = 10,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Shop root URL (the webservice lives under /api)
            api_key: Webservice key, sent as the basic-auth user name
            lang_id: Language id for localized fields
            shop_id: Default shop id for created products
            home_category_id: Category used when a product has no category
            tax_rule_group_id: Tax rules group for created products
            timeout: Request timeout in seconds
            pool_size: Connection pool size (at least the number of workers)
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/api"
        self.lang_id = lang_id
        self.shop_id = shop_id
        self.home_category_id = home_category_id
        self.tax_rule_group_id = tax_rule_group_id
        self.timeout = timeout

        adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)

        self.session = requests.Session()
        self.session.auth = (api_key, "")
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        # Separate session so the webservice key never reaches the media host
        self.media_session = requests.Session()
        media_adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
        self.media_session.mount("https://", media_adapter)
        self.media_session.mount("http://", media_adapter)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PrestaShopAPIClient":
        """Create a client from run settings."""
        return cls(
            base_url=settings.base_url,
            api_key=settings.api_key,
            lang_id=settings.lang_id,
            shop_id=settings.shop_id,
            home_category_id=settings.home_category_id,
            tax_rule_group_id=settings.tax_rule_group_id,
            timeout=settings.request_timeout,
            pool_size=max(10, settings.concurrency),
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self.session.close()
        self.media_session.close()

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Send a webservice request and check its status.

        Args:
            method: HTTP method (GET, POST)
            endpoint: Path below /api (e.g., "products")
            **kwargs: Passed to requests (data, files, headers)

        Returns:
            The successful response

        Raises:
            PrestaShopAPIError: On transport errors and non-2xx responses
        """
        url = f"{self.api_url}/{endpoint}" if endpoint else self.api_url

        try:
            if method == "GET":
                response = self.session.get(url, timeout=self.timeout, **kwargs)
            elif method == "POST":
                response = self.session.post(url, timeout=self.timeout, **kwargs)
            else:
                raise ValueError(f"Unsupported method: {method}")
        except requests.exceptions.RequestException as e:
            raise PrestaShopAPIError(f"{method} {endpoint} failed: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise PrestaShopAPIError(
                f"{method} {endpoint} failed",
                status_code=response.status_code,
                body=response.text,
                url=url,
            )

        return response

    def _create(self, endpoint: str, entity: str, document: bytes) -> int:
        """POST a document and return the id of the created entity."""
        response = self._request(
            "POST",
            endpoint,
            data=document,
            headers={"Content-Type": "application/xml"},
        )
        entity_id = documents.extract_id(response.content, entity, url=f"{self.api_url}/{endpoint}")
        logger.debug("Created %s id=%d", entity, entity_id)
        return entity_id

    def create_product(
        self,
        product_type: str,
        name: str,
        reference: str,
        price: str,
        description: str = "",
        short_description: str = "",
        meta_description: str = "",
        category_ids: Optional[List[int]] = None,
    ) -> int:
        """
        Create a product.

        Args:
            product_type: "standard" or "combinations"
            name: Product name (also the source of the URL slug)
            reference: Product reference (SKU)
            price: Tax-excluded price as a decimal string
            description: Long description (HTML)
            short_description: Short description (HTML)
            meta_description: SEO description
            category_ids: Category ids, the first one is the default category
                (default: the home category)

        Returns:
            Created product id
        """
        document = documents.product_document(
            product_type=product_type,
            name=name,
            link_rewrite=slugify(name),
            reference=reference,
            price=price,
            lang_id=self.lang_id,
            shop_id=self.shop_id,
            tax_rule_group_id=self.tax_rule_group_id,
            category_ids=category_ids or [self.home_category_id],
            description=description,
            short_description=short_description,
            meta_description=meta_description,
        )
        return self._create("products", "product", document)

    def create_option_group(self, name: str) -> int:
        """Create a select-type, non-color attribute group. Returns its id."""
        document = documents.option_group_document(name, self.lang_id)
        return self._create("product_options", "product_option", document)

    def create_option_value(self, group_id: int, value: str) -> int:
        """Create an attribute value in a group. Returns its id."""
        document = documents.option_value_document(group_id, value, self.lang_id)
        return self._create("product_option_values", "product_option_value", document)

    def create_combination(
        self,
        product_id: int,
        option_value_id: int,
        reference: str,
        price_impact: str = DEFAULT_PRICE_IMPACT,
    ) -> int:
        """Create a combination of a product with one option value. Returns its id."""
        document = documents.combination_document(product_id, option_value_id, reference, price_impact)
        return self._create("combinations", "combination", document)

    def upload_image(
        self,
        product_id: int,
        content: bytes,
        filename: str,
        mime_type: str = "image/jpeg",
    ) -> None:
        """
        Upload an image to a product.

        Raises:
            PrestaShopAPIError: If the upload is rejected
        """
        self._request(
            "POST",
            f"images/products/{product_id}",
            files={"image": (filename, content, mime_type)},
        )
        logger.debug("Uploaded %s to product %d", filename, product_id)

    def fetch_media(self, url: str) -> MediaFile:
        """
        Download a media file from the source site.

        Raises:
            MediaFetchError: On transport errors and non-2xx responses
        """
        try:
            response = self.media_session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise MediaFetchError(url, reason=str(e)) from e

        if not 200 <= response.status_code < 300:
            raise MediaFetchError(url, status_code=response.status_code)

        content_type = response.headers.get("Content-Type") or "image/jpeg"
        return MediaFile(content=response.content, content_type=content_type)

    def test_connection(self) -> bool:
        """
        Test API connection by fetching the webservice resource list.

        Returns:
            True if connection successful
        """
        try:
            self._request("GET", "")
        except PrestaShopAPIError as e:
            logger.error("PrestaShop connection failed: %s", e)
            return False

        logger.info("Connected to: %s", self.api_url)
        return True
