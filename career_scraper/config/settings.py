"""Configuration settings for Career-Scraper."""

from enum import Enum
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from career_scraper.extraction.models import CompositePolicy


class SectionPages(str, Enum):
    """Where each section is read from."""

    # One sub-page per section: <profile>/details/experience, .../education
    DETAILS = "details"
    # The profile URL itself, for every section
    PROFILE = "profile"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables with the SCRAPER_ prefix or a .env file.
    The selector configuration and profile list live in the scrape
    config document instead (see ``career_scraper.extraction.loader``).
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Browser settings
    headless: bool = Field(
        default=False,
        description="Run browser headless (the operator usually logs in by hand first)",
    )
    window_width: int = Field(
        default=1920,
        description="Browser viewport width",
    )
    window_height: int = Field(
        default=1080,
        description="Browser viewport height",
    )
    start_url: str = Field(
        default="https://www.linkedin.com",
        description="Page opened before the start gate so the operator can log in",
    )

    # Navigation settings
    navigation_timeout_ms: Annotated[int, Field(gt=0)] = Field(
        default=60000,
        description="Timeout for a single page navigation in milliseconds",
    )
    settle_delay_seconds: Annotated[float, Field(ge=0)] = Field(
        default=3.0,
        description="Fixed wait after navigation so dynamic content can render",
    )
    section_delay_seconds: Annotated[float, Field(ge=0)] = Field(
        default=2.0,
        description="Fixed pause between two sections of the same profile",
    )
    profile_delay_seconds: Annotated[float, Field(ge=0)] = Field(
        default=2.0,
        description="Fixed pause between two profiles",
    )
    section_pages: SectionPages = Field(
        default=SectionPages.DETAILS,
        description="'details' to open <profile>/details/<section>, 'profile' to stay on the profile URL",
    )
    continue_on_navigation_timeout: bool = Field(
        default=False,
        description="Extract from a partially loaded page when navigation times out",
    )

    # Extraction settings
    composite_policy: CompositePolicy = Field(
        default=CompositePolicy.OUTERMOST,
        description="'outermost' keeps grouping items and skips nested ones; 'innermost' does the reverse",
    )
    wait_for_start: bool = Field(
        default=True,
        description="Wait for the operator to press Enter before scraping starts",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("section_pages", "composite_policy", mode="before")
    @classmethod
    def normalize_choice(cls, v: object) -> object:
        """Accept enum values case-insensitively."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


# Singleton instance for easy import
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
