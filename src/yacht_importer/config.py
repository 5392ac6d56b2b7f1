# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to extraction thresholds, fetch limits and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="YACHT_IMPORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Listing quality gate
    min_listing_confidence: int = Field(
        default=40, ge=0, le=100, description="Minimum confidence (0-100) for a listing to be kept"
    )
    min_yacht_keywords: int = Field(
        default=3, ge=0, description="Minimum distinct yacht keywords for a page to pass site validation"
    )

    # Plausible price bounds (currency-unit agnostic)
    min_yacht_price: float = Field(default=5_000, description="Smallest price accepted by heuristic extraction")
    max_yacht_price: float = Field(default=100_000_000, description="Largest price accepted by heuristic extraction")

    # Image size requirements
    min_image_width: int = Field(default=200, description="Minimum image width in pixels")
    min_image_height: int = Field(default=150, description="Minimum image height in pixels")

    # Display
    max_listings_display: int = Field(
        default=10, ge=1, description="Maximum listings surfaced to a caller (total found is still reported)"
    )
    debug: bool = Field(default=True, description="Emit per-strategy diagnostics at debug level")

    # Fetch Configuration
    request_timeout: float = Field(default=30.0, description="Timeout in seconds for a single page fetch")
    fetch_max_attempts: int = Field(default=3, ge=1, description="Attempts per fetch before giving up")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
        ),
        description="User-Agent header sent with page fetches",
    )
    proxy_prefixes: list[str] = Field(
        default_factory=list,
        description="Relay URL prefixes tried in order when a direct fetch fails (target URL is appended encoded)",
    )
    max_inventory_pages: int = Field(default=5, ge=0, description="Discovered inventory pages followed per run")
    max_pagination_pages: int = Field(default=3, ge=0, description="Pagination pages followed per listings page")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] | None = Field(
        default=None, description="Logging output mode (detected from the terminal when unset)"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
