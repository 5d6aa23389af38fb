"""
Configuration Loader

Loads run settings from the environment (.env supported) and the WXR
extraction mapping from config/migration.yaml.
"""

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_EXPORT_PATH,
    DEFAULT_HOME_CATEGORY_ID,
    DEFAULT_LANG_ID,
    DEFAULT_MAPPING,
    DEFAULT_OPTION_GROUP_NAME,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SHOP_ID,
    DEFAULT_TAX_RULE_GROUP_ID,
)
from .errors import ConfigError

MAPPING_FILENAME = "migration.yaml"


@dataclass(frozen=True)
class Settings:
    """PrestaShop credentials and migration run settings."""

    base_url: str
    api_key: str
    lang_id: int = DEFAULT_LANG_ID
    shop_id: int = DEFAULT_SHOP_ID
    home_category_id: int = DEFAULT_HOME_CATEGORY_ID
    tax_rule_group_id: int = DEFAULT_TAX_RULE_GROUP_ID
    export_path: str = DEFAULT_EXPORT_PATH
    concurrency: int = DEFAULT_CONCURRENCY
    option_group_name: str = DEFAULT_OPTION_GROUP_NAME
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        require_credentials: bool = True,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (tests)
            require_credentials: If False, PS_BASE_URL / PS_API_KEY may be
                empty (dry runs never talk to PrestaShop)

        Raises:
            ConfigError: If credentials are missing or a number is invalid
        """
        env = os.environ if environ is None else environ

        base_url = env.get("PS_BASE_URL", "").strip().rstrip("/")
        api_key = env.get("PS_API_KEY", "").strip()

        if require_credentials:
            missing = []
            if not base_url:
                missing.append("PS_BASE_URL")
            if not api_key:
                missing.append("PS_API_KEY")
            if missing:
                raise ConfigError(f"Missing env vars: {', '.join(missing)}")

        concurrency = _read_int(env, "CONCURRENCY", DEFAULT_CONCURRENCY)
        if concurrency < 1:
            raise ConfigError(f"CONCURRENCY must be at least 1, got {concurrency}")

        return cls(
            base_url=base_url,
            api_key=api_key,
            lang_id=_read_int(env, "PS_LANG_ID", DEFAULT_LANG_ID),
            shop_id=_read_int(env, "PS_SHOP_ID", DEFAULT_SHOP_ID),
            home_category_id=_read_int(env, "PS_HOME_CATEGORY_ID", DEFAULT_HOME_CATEGORY_ID),
            tax_rule_group_id=_read_int(env, "PS_TAX_RULE_GROUP_ID", DEFAULT_TAX_RULE_GROUP_ID),
            # xml_PATH: legacy name
            export_path=env.get("WXR_PATH") or env.get("xml_PATH") or DEFAULT_EXPORT_PATH,
            concurrency=concurrency,
            option_group_name=env.get("PS_OPTION_GROUP_NAME") or DEFAULT_OPTION_GROUP_NAME,
            request_timeout=_read_int(env, "PS_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        )


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(env_file: Optional[str] = None, require_credentials: bool = True) -> Settings:
    """
    Load .env (if present) into the process environment and build Settings.

    Variables already set in the environment take precedence over .env.
    """
    load_dotenv(env_file)
    return Settings.from_env(require_credentials=require_credentials)


def _get_config_dir() -> Optional[Path]:
    """Get the config directory path, or None if there is none."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    return None


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_mapping(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the WXR extraction mapping.

    Values from the YAML file are merged over DEFAULT_MAPPING, so the file
    only needs the keys it changes. A missing file yields the defaults.

    Args:
        path: Explicit YAML path (default: config/migration.yaml)

    Returns:
        Mapping dictionary (see DEFAULT_MAPPING for the layout)

    Raises:
        ConfigError: If the file exists but is not a YAML mapping
        FileNotFoundError: If an explicit path does not exist
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        config_dir = _get_config_dir()
        if config_dir is None or not (config_dir / MAPPING_FILENAME).exists():
            return copy.deepcopy(DEFAULT_MAPPING)
        config_path = config_dir / MAPPING_FILENAME

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return copy.deepcopy(DEFAULT_MAPPING)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping, got {type(data).__name__}")

    return _merge(DEFAULT_MAPPING, data.get('mapping', data))
