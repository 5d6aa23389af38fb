"""
Shared constants for the project.

Defaults for the environment settings and the WXR extraction mapping.
Each value can be overridden through the environment or config/migration.yaml.
"""

# PrestaShop webservice defaults
DEFAULT_LANG_ID = 1
DEFAULT_SHOP_ID = 1
DEFAULT_HOME_CATEGORY_ID = 2
DEFAULT_TAX_RULE_GROUP_ID = 1
DEFAULT_REQUEST_TIMEOUT = 30

# Migration run defaults
DEFAULT_EXPORT_PATH = "./export.xml"
DEFAULT_CONCURRENCY = 3
DEFAULT_OPTION_GROUP_NAME = "Taille"

# Product types accepted by the PrestaShop 8 products endpoint
PRODUCT_TYPE_STANDARD = "standard"
PRODUCT_TYPE_COMBINATIONS = "combinations"

# Combinations are created without a price impact
DEFAULT_PRICE_IMPACT = "0.000000"

# link_rewrite column is VARCHAR(128) in PrestaShop
SLUG_MAX_LENGTH = 128
SLUG_FALLBACK = "produit"

# WooCommerce export mapping
DEFAULT_MAPPING = {
    "sku_prefix": "WP",
    "taxonomies": {
        "product_type": "product_type",
        "variant_axis": "pa_taille",
        "category": "product_cat",
    },
    "variable_type": "variable",
    "meta_keys": {
        "sku": ["_sku"],
        "price": ["_price", "_regular_price"],
        "thumbnail": ["_thumbnail_id"],
        "gallery": ["_product_image_gallery"],
        "meta_description": ["_yoast_wpseo_metadesc"],
    },
}
