# Common utilities
from .config_loader import Settings, load_mapping, load_settings
from .errors import (
    ConfigError,
    ExportError,
    MediaFetchError,
    MigrationError,
    PrestaShopAPIError,
)
from .log_config import setup_logging
from .text_utils import clean_text, normalize_price, slugify
