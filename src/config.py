"""
Configuration management for the MyFood ordering bot
"""


import threading
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Bot configuration
    bot_token: str = Field(description="Telegram bot token", min_length=1)

    # Commerce backend
    backend_url: str = Field(
        default="http://localhost:3000", description="Order management backend base URL"
    )
    backend_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout applied to every backend call"
    )

    # Webhook server
    webhook_url: Optional[str] = Field(
        default=None, description="Public base URL the webhook path is appended to"
    )
    webhook_mode: bool = Field(default=False, description="Force webhook mode")
    port: int = Field(default=3001, gt=0, description="Webhook server port")

    # Application settings
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(
        default="development", description="Application environment"
    )

    # Restaurant location used as the delivery origin
    restaurant_lat: float = Field(default=-16.389385, description="Restaurant latitude")
    restaurant_lng: float = Field(default=-68.119294, description="Restaurant longitude")

    # Delivery pricing
    delivery_base_fare: float = Field(default=5.0, ge=0, description="Flat delivery fare")
    delivery_free_radius_km: float = Field(
        default=1.0, ge=0, description="Radius covered by the flat fare"
    )
    delivery_per_km_rate: float = Field(
        default=2.0, ge=0, description="Charge per km beyond the free radius"
    )

    # Presentation
    orders_page_size: int = Field(
        default=5, gt=0, description="Number of orders listed in 'my orders'"
    )


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
