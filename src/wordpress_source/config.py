# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the source site, download flags, and logging settings

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROUTES = {
    "post": "/:slug",
    "post_tag": "/tag/:slug",
    "category": "/category/:slug",
    "author": "/author/:slug",
}


class Config(BaseSettings):
    """Connector settings; every field can be set through a WORDPRESS_SOURCE_* variable."""

    model_config = SettingsConfigDict(
        env_prefix="WORDPRESS_SOURCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Source site
    base_url: str = Field(default="", description="Base URL of the WordPress site, e.g. https://example.com")
    api_base: str = Field(default="wp-json", description="REST API path prefix below the base URL")
    per_page: int = Field(default=100, ge=1, le=100, description="Page size for collection requests (1-100)")
    concurrent: int = Field(default=10, ge=1, description="Maximum number of pages fetched at the same time")
    request_timeout: float | None = Field(
        default=None, description="Per-request timeout in seconds, unset means wait indefinitely"
    )

    # Content graph naming
    type_name: str = Field(default="WordPress", description="Prefix used to derive every entity type name")
    routes: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_ROUTES), description="Route templates keyed by post type or taxonomy"
    )

    # Post body and image handling
    split_posts_into_fragments: bool = Field(default=False, description="Split post content into html/image parts")
    download_remote_images_from_posts: bool = Field(default=False, description="Download images found in post bodies")
    download_remote_featured_images: bool = Field(default=False, description="Download each post's featured image")
    download_acf_images: bool = Field(default=False, description="Download images found in ACF field groups")
    download_dir: Path = Field(default=Path("wp-images"), description="Persistent directory for downloaded images")
    tmp_dir: Path = Field(default=Path(".temp/downloads"), description="Staging directory for partial downloads")

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./wordpress_source.db", description="Database URL for async SQLite snapshots"
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


_config_instance: Config | None = None


def get_config() -> Config:
    """Process-wide settings, read from the environment on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Discard the cached settings and read the environment again."""
    global _config_instance
    _config_instance = Config()
    return _config_instance
