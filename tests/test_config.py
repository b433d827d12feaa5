"""
Restaurant API - Settings Unit Tests
=====================================

What:  Environment loading and validation of the Settings model.
"""

import pytest
from pydantic import ValidationError as SettingsValidationError

from restaurant_api.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("PORT", "MONGODB_URI", "CORS_ORIGINS", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        config = Settings(_env_file=None)

        assert config.port == 5080
        assert config.mongodb_uri == "mongodb://localhost:27017/food-delivery-app"
        assert config.mongodb_collection == "restaurants"
        assert config.cors_origins_list == ["*"]

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        assert Settings(_env_file=None).port == 9000

    def test_store_target_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://store:27017/eats")
        assert Settings(_env_file=None).mongodb_uri == "mongodb://store:27017/eats"

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(SettingsValidationError, match="Invalid log_level"):
            Settings(_env_file=None)

    def test_cors_origins_split(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
        assert Settings(_env_file=None).cors_origins_list == ["http://a.example", "http://b.example"]
