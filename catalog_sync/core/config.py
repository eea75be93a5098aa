# catalog_sync/core/config.py

import os
from functools import lru_cache
from typing import Optional
from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # Database settings
    DATABASE_URL: str = ""
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_POOL_TIMEOUT: int = 30

    # Shopify Admin API
    SHOPIFY_API_VERSION: str = "2024-01"
    SHOPIFY_ADMIN_API_ACCESS_TOKEN: Optional[str] = None
    SHOPIFY_API_SECRET: Optional[str] = None  # Signs inbound webhooks
    SHOPIFY_PRODUCTS_PER_PAGE: int = 50
    SHOPIFY_REQUEST_TIMEOUT: float = 30.0

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists('.env') else None,
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator('SHOPIFY_PRODUCTS_PER_PAGE')
    @classmethod
    def validate_page_size(cls, v):
        # Shopify caps connection pages at 250 nodes
        if v < 1 or v > 250:
            raise ValueError('SHOPIFY_PRODUCTS_PER_PAGE must be between 1 and 250')
        return v


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every request"""
    return Settings()

def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
