"""
PrestaShop integration modules.

Modules:
    api_client - Webservice client (products, options, combinations, images)
    documents - XML request bodies and response id extraction
"""

from .api_client import MediaFile, PrestaShopAPIClient

__all__ = [
    'MediaFile',
    'PrestaShopAPIClient',
]
