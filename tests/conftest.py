"""Pytest configuration and shared fixtures."""

import pytest

from career_scraper.config.settings import reset_settings
from career_scraper.extraction.events import ExtractionEvent
from career_scraper.extraction.models import SectionSelectors, SelectorsConfig
from career_scraper.utils.logging import reset_logging


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset the settings singleton and logging configuration after each test."""
    yield
    reset_settings()
    reset_logging()


@pytest.fixture
def sample_profile_url() -> str:
    """Sample profile URL for testing."""
    return "https://www.linkedin.com/in/jane-doe"


@pytest.fixture
def experience_selectors() -> SectionSelectors:
    """Experience selectors matching ``tests.fakes.experience_item``."""
    return SectionSelectors(
        item="li.item",
        title="div.title span",
        details="div.details > span.line",
        description="div.extra > div.desc",
    )


@pytest.fixture
def education_selectors() -> SectionSelectors:
    """Education selectors matching ``tests.fakes.education_item``."""
    return SectionSelectors(
        item="li.edu",
        title="div.title span",
        details="div.details > span.line",
    )


@pytest.fixture
def selectors_config(
    experience_selectors: SectionSelectors, education_selectors: SectionSelectors
) -> SelectorsConfig:
    return SelectorsConfig(experience=experience_selectors, education=education_selectors)


@pytest.fixture
def recorded_events() -> list[ExtractionEvent]:
    """List that an observer appends events to (pass ``recorded_events.append``)."""
    return []
