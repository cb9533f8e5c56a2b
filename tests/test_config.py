"""Tests for environment configuration."""
import importlib

import config
from config import AppConfig, PayloadDefaults


class TestPayloadDefaults:
    """Test payload defaults."""

    def test_defaults_without_env(self, monkeypatch):
        """Test built-in defaults."""
        for name in ("TWQRP_SERVICE_NAME", "TWQRP_COUNTRY", "TWQRP_MUTABLE", "TWQRP_SORTED"):
            monkeypatch.delenv(name, raising=False)

        defaults = PayloadDefaults.from_env()

        assert defaults.service_name == ""
        assert defaults.country == 158
        assert defaults.mutable is False
        assert defaults.sorted_output is True

    def test_from_env(self, monkeypatch):
        """Test values read from the environment."""
        monkeypatch.setenv("TWQRP_SERVICE_NAME", "shop")
        monkeypatch.setenv("TWQRP_COUNTRY", "840")
        monkeypatch.setenv("TWQRP_MUTABLE", "yes")
        monkeypatch.setenv("TWQRP_SORTED", "0")

        defaults = PayloadDefaults.from_env()

        assert defaults.service_name == "shop"
        assert defaults.country == 840
        assert defaults.mutable is True
        assert defaults.sorted_output is False

    def test_bad_country_kept_as_text(self, monkeypatch):
        """Test non-numeric country loads without raising."""
        monkeypatch.setenv("TWQRP_COUNTRY", "TW")

        defaults = PayloadDefaults.from_env()

        assert defaults.country == "TW"

    def test_bad_country_module_import(self, monkeypatch):
        """Test the config module still imports with a non-numeric country."""
        monkeypatch.setenv("TWQRP_COUNTRY", "TW")

        try:
            reloaded = importlib.reload(config)
            assert reloaded.app_config.payload.country == "TW"
        finally:
            monkeypatch.delenv("TWQRP_COUNTRY")
            importlib.reload(config)


class TestAppConfig:
    """Test application config."""

    def test_log_level(self, monkeypatch):
        """Test log level from the environment."""
        monkeypatch.setenv("TWQRP_LOG_LEVEL", "DEBUG")

        assert AppConfig.from_env().log_level == "DEBUG"

    def test_payload_defaults_filled(self):
        """Test payload defaults are loaded when not given."""
        config = AppConfig()

        assert isinstance(config.payload, PayloadDefaults)
