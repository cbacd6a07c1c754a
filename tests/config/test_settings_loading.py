"""Tests for marketplace_config.get_active_config."""

from decimal import Decimal

import pytest
import yaml

from marketplace_config import MarketplaceSettings, get_active_config
from marketplace_config.loader import merge, parse_ratio


def _write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


class TestDefaults:

    def test_packaged_defaults(self):
        settings = get_active_config(environ={})

        assert isinstance(settings, MarketplaceSettings)
        assert settings.database_url.startswith("postgresql://")
        assert settings.transfer_isolation_level == "SERIALIZABLE"
        assert settings.deposit_threshold_ratio == Decimal("0.25")
        assert settings.log_level == "INFO"
        assert settings.pool_size == 20

    def test_settings_are_frozen(self):
        settings = get_active_config(environ={})
        with pytest.raises(AttributeError):
            settings.log_level = "DEBUG"


class TestOverlay:

    def test_file_overrides_defaults(self, tmp_path):
        path = _write_yaml(tmp_path / "local.yaml", {
            "database": {"url": "sqlite:////tmp/local.db", "pool_size": 5},
            "deposit": {"threshold_ratio": 0.5},
        })

        settings = get_active_config(path, environ={})

        assert settings.database_url == "sqlite:////tmp/local.db"
        assert settings.pool_size == 5
        assert settings.max_overflow == 10
        assert settings.deposit_threshold_ratio == Decimal("0.5")

    def test_environment_beats_file(self, tmp_path):
        path = _write_yaml(tmp_path / "local.yaml", {"database": {"url": "sqlite:////tmp/a.db"}})

        settings = get_active_config(path, environ={
            "DATABASE_URL": "sqlite:////tmp/b.db",
            "MARKETPLACE_LOG_LEVEL": "debug",
            "MARKETPLACE_TRANSFER_ISOLATION": "repeatable read",
        })

        assert settings.database_url == "sqlite:////tmp/b.db"
        assert settings.log_level == "DEBUG"
        assert settings.transfer_isolation_level == "REPEATABLE READ"

    def test_empty_environment_value_ignored(self):
        settings = get_active_config(environ={"DATABASE_URL": ""})
        assert settings.database_url.startswith("postgresql://")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "nope.yaml", environ={})


class TestValidation:

    @pytest.mark.parametrize("overlay", [
        {"database": {"pool_size": 0}},
        {"database": {"max_overflow": -1}},
        {"database": {"pool_timeout": "soon"}},
        {"transfer": {"isolation_level": "CHAOS"}},
        {"deposit": {"threshold_ratio": "a quarter"}},
        {"deposit": {"threshold_ratio": -1}},
        {"logging": {"level": "LOUD"}},
        {"database": "not a mapping"},
    ])
    def test_invalid_values(self, tmp_path, overlay):
        path = _write_yaml(tmp_path / "bad.yaml", overlay)
        with pytest.raises(ValueError):
            get_active_config(path, environ={})

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            get_active_config(path, environ={})


class TestHelpers:

    def test_merge_is_recursive(self):
        merged = merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_parse_ratio_is_exact(self):
        assert parse_ratio(0.1) == Decimal("0.1")
        assert parse_ratio("0.25") == Decimal("0.25")

    def test_parse_ratio_rejects_bool(self):
        with pytest.raises(ValueError):
            parse_ratio(True)
