"""
Migration Errors

Exception hierarchy shared by the whole migration.

Fatal errors (ConfigError, ExportError) stop the run before any remote
call is made. PrestaShopAPIError and MediaFetchError are raised per
request and handled by the orchestrator.
"""

from typing import Optional


class MigrationError(Exception):
    """Base class for all migration errors."""


class ConfigError(MigrationError):
    """Missing or invalid configuration."""


class ExportError(MigrationError):
    """The WXR export is missing, unreadable or not well-formed XML."""


class PrestaShopAPIError(MigrationError):
    """
    A PrestaShop webservice call failed.

    Carries the HTTP status code (None for transport errors), the
    response body and the requested URL for diagnostics.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
        url: str = "",
    ):
        self.status_code = status_code
        self.body = body
        self.url = url

        details = message
        if status_code is not None:
            details = f"{details} (HTTP {status_code})"
        if url:
            details = f"{details} {url}"
        if body:
            details = f"{details}\n{body[:500]}"
        super().__init__(details)


class MediaFetchError(MigrationError):
    """Downloading a media file from the source site failed."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code

        if status_code is not None:
            message = f"Download {url} => HTTP {status_code}"
        else:
            message = f"Download {url} failed: {reason}"
        super().__init__(message)
