"""
Tests for configuration management
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.config import Settings, get_config, reset_config


class TestSettings:
    """Test Settings model"""

    def test_settings_default_values(self):
        """Test settings with default values"""
        settings = Settings()
        assert settings.bot_token == "test_bot_token_123456789"
        assert settings.backend_url == "http://backend.test"
        assert settings.backend_timeout_seconds == 10.0
        assert settings.port == 3001
        assert settings.webhook_url is None
        assert settings.webhook_mode is False
        assert settings.orders_page_size == 5

    def test_delivery_defaults(self):
        """Test delivery pricing defaults"""
        settings = Settings()
        assert settings.restaurant_lat == -16.389385
        assert settings.restaurant_lng == -68.119294
        assert settings.delivery_base_fare == 5.0
        assert settings.delivery_free_radius_km == 1.0
        assert settings.delivery_per_km_rate == 2.0

    def test_settings_custom_values(self):
        """Test settings with custom values"""
        with patch.dict(os.environ, {
            "BACKEND_URL": "https://api.example.com",
            "BACKEND_TIMEOUT_SECONDS": "2.5",
            "WEBHOOK_URL": "https://bot.example.com",
            "WEBHOOK_MODE": "true",
            "PORT": "8080",
            "ENVIRONMENT": "production",
        }):
            settings = Settings()
            assert settings.backend_url == "https://api.example.com"
            assert settings.backend_timeout_seconds == 2.5
            assert settings.webhook_url == "https://bot.example.com"
            assert settings.webhook_mode is True
            assert settings.port == 8080
            assert settings.environment == "production"

    def test_missing_bot_token(self):
        """Test settings validation error without a bot token"""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(backend_timeout_seconds=0)


class TestGetConfig:
    """Test the settings singleton"""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_config_rereads_environment(self):
        first = get_config()
        with patch.dict(os.environ, {"PORT": "9000"}):
            reset_config()
            second = get_config()
        assert second is not first
        assert second.port == 9000
