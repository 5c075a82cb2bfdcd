"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field can be overridden with a ``STOREFRONT_``-prefixed
    variable, e.g. ``STOREFRONT_DATABASE_URL``.
    """

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://storefront:storefront_dev_password@db:5432/storefront"
    create_tables: bool = False

    # Authentication
    admin_api_key: str = "dev-admin-key-change-in-production"

    # Icon asset storage (Cloudinary-compatible API)
    icon_storage_url: str = "https://api.cloudinary.com"
    icon_storage_cloud_name: str = "storefront"
    icon_storage_api_key: str = "dev-icon-key"
    icon_storage_api_secret: str = "dev-icon-secret-change-in-production"
    icon_folder: str = "storefront/icons"
    icon_storage_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_prefix = "STOREFRONT_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
