"""Tests for src/common/config_loader.py"""

import pytest

from src.common.config_loader import Settings, load_mapping, load_settings
from src.common.constants import DEFAULT_MAPPING
from src.common.errors import ConfigError

CREDENTIALS = {"PS_BASE_URL": "https://shop.example.com/", "PS_API_KEY": "KEY"}


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env(CREDENTIALS)
        assert settings.base_url == "https://shop.example.com"
        assert settings.api_key == "KEY"
        assert settings.lang_id == 1
        assert settings.shop_id == 1
        assert settings.home_category_id == 2
        assert settings.tax_rule_group_id == 1
        assert settings.export_path == "./export.xml"
        assert settings.concurrency == 3
        assert settings.option_group_name == "Taille"

    def test_overrides(self):
        env = dict(CREDENTIALS, PS_LANG_ID="2", PS_SHOP_ID="3", PS_HOME_CATEGORY_ID="10",
                   PS_TAX_RULE_GROUP_ID="4", WXR_PATH="/data/export.xml", CONCURRENCY="8")
        settings = Settings.from_env(env)
        assert settings.lang_id == 2
        assert settings.shop_id == 3
        assert settings.home_category_id == 10
        assert settings.tax_rule_group_id == 4
        assert settings.export_path == "/data/export.xml"
        assert settings.concurrency == 8

    def test_legacy_export_path_variable(self):
        settings = Settings.from_env(dict(CREDENTIALS, xml_PATH="old.xml"))
        assert settings.export_path == "old.xml"

    def test_missing_base_url_raises(self):
        with pytest.raises(ConfigError, match="PS_BASE_URL"):
            Settings.from_env({"PS_API_KEY": "KEY"})

    def test_missing_api_key_raises(self):
        with pytest.raises(ConfigError, match="PS_API_KEY"):
            Settings.from_env({"PS_BASE_URL": "https://shop.example.com"})

    def test_credentials_optional_for_dry_run(self):
        settings = Settings.from_env({}, require_credentials=False)
        assert settings.base_url == ""

    def test_invalid_integer_raises(self):
        with pytest.raises(ConfigError, match="PS_LANG_ID"):
            Settings.from_env(dict(CREDENTIALS, PS_LANG_ID="fr"))

    def test_zero_concurrency_raises(self):
        with pytest.raises(ConfigError, match="CONCURRENCY"):
            Settings.from_env(dict(CREDENTIALS, CONCURRENCY="0"))


class TestLoadSettings:
    def test_reads_env_file(self, tmp_path, monkeypatch):
        for name in ("PS_BASE_URL", "PS_API_KEY", "CONCURRENCY"):
            monkeypatch.delenv(name, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("PS_BASE_URL=https://shop.example.com\nPS_API_KEY=SECRET\nCONCURRENCY=5\n")

        settings = load_settings(str(env_file))

        assert settings.api_key == "SECRET"
        assert settings.concurrency == 5
        for name in ("PS_BASE_URL", "PS_API_KEY", "CONCURRENCY"):
            monkeypatch.delenv(name, raising=False)


class TestLoadMapping:
    def test_repo_mapping_matches_defaults(self):
        assert load_mapping() == DEFAULT_MAPPING

    def test_partial_override_is_merged(self, tmp_path):
        path = tmp_path / "mapping.yaml"
        path.write_text("mapping:\n  taxonomies:\n    variant_axis: pa_size\n")

        mapping = load_mapping(str(path))

        assert mapping["taxonomies"]["variant_axis"] == "pa_size"
        assert mapping["taxonomies"]["category"] == "product_cat"
        assert mapping["meta_keys"] == DEFAULT_MAPPING["meta_keys"]

    def test_defaults_are_not_mutated(self, tmp_path):
        path = tmp_path / "mapping.yaml"
        path.write_text("sku_prefix: WC\n")
        assert load_mapping(str(path))["sku_prefix"] == "WC"
        assert DEFAULT_MAPPING["sku_prefix"] == "WP"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "mapping.yaml"
        path.write_text("")
        assert load_mapping(str(path)) == DEFAULT_MAPPING

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "mapping.yaml"
        path.write_text("mapping: [unclosed\n")
        with pytest.raises(ConfigError):
            load_mapping(str(path))

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "mapping.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_mapping(str(path))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_mapping(str(tmp_path / "nonexistent.yaml"))
