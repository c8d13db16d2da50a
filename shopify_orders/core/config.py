"""
Centralized application configuration.

This module loads every setting from environment variables (or a `.env`
file) using Pydantic Settings for automatic validation.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration backed by Pydantic Settings.

    All values are read from environment variables with defaults
    suitable for local development.
    """

    # === SHOPIFY CONFIGURATION ===
    SHOPIFY_SHOP_URL: str = Field(default="your-shop.myshopify.com")
    SHOPIFY_ACCESS_TOKEN: str = Field(default="your-access-token")
    SHOPIFY_API_VERSION: str = Field(default="2025-04")
    SHOPIFY_MAX_RETRIES: int = Field(default=3)
    # Seconds between two consecutive requests on the same client
    SHOPIFY_MIN_REQUEST_INTERVAL: float = Field(default=0.5)
    SHOPIFY_REQUEST_TIMEOUT: int = Field(default=30)
    SHOPIFY_CONNECT_TIMEOUT: int = Field(default=10)

    # === BULK OPERATIONS ===
    BULK_POLL_INTERVAL_SECONDS: float = Field(default=5.0)
    BULK_POLL_MAX_INTERVAL_SECONDS: float = Field(default=30.0)
    BULK_TIMEOUT_MINUTES: int = Field(default=30)

    # === LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_JSON: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("SHOPIFY_SHOP_URL")
    @classmethod
    def validate_shopify_url(cls, v):
        """Validate that the shop URL points to a myshopify.com domain."""
        # Skip validation for the placeholder value
        if v in ["your-shop.myshopify.com"]:
            return v
        if not v.rstrip("/").endswith(".myshopify.com"):
            raise ValueError("SHOPIFY_SHOP_URL must end with .myshopify.com")
        if not v.startswith("https://") and not v.startswith("http://"):
            v = f"https://{v}"
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate the log level name."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("SHOPIFY_MAX_RETRIES")
    @classmethod
    def validate_max_retries(cls, v):
        """At least one attempt is always made."""
        if v < 1:
            raise ValueError("SHOPIFY_MAX_RETRIES must be >= 1")
        return v

    @property
    def graphql_url(self) -> str:
        """Admin GraphQL endpoint for the configured shop and API version."""
        shop_url = self.SHOPIFY_SHOP_URL
        if not shop_url.startswith(("http://", "https://")):
            shop_url = f"https://{shop_url}"
        return f"{shop_url}/admin/api/{self.SHOPIFY_API_VERSION}/graphql.json"


@lru_cache()
def get_settings() -> Settings:
    """
    Return the cached application settings.

    Returns:
        Settings: Singleton settings instance
    """
    return Settings()
