"""Selector-driven extraction of experience and education records.

Public API:
    - RunAggregator: Scrape many profiles into a RunResult
    - SectionExtractor: Extract one section of one profile
    - CancellationToken: Start gate and stop flag
    - load_scrape_config: Load the JSON/YAML scrape config
    - ScrapeConfig, RunResult, ExperienceRecord, EducationRecord: Data models
"""

from career_scraper.extraction.aggregator import RunAggregator, ScopeProvider
from career_scraper.extraction.cancellation import CancellationToken
from career_scraper.extraction.errors import (
    BrowserLaunchError,
    ConfigError,
    ItemExtractionError,
    NavigationError,
    ScraperError,
    SectionError,
)
from career_scraper.extraction.events import EventKind, ExtractionEvent, LoggingObserver
from career_scraper.extraction.loader import load_scrape_config
from career_scraper.extraction.models import (
    CompositePolicy,
    EducationRecord,
    ExperienceRecord,
    ProfileOutcome,
    RunResult,
    ScrapeConfig,
    Section,
    SectionSelectors,
    SelectorsConfig,
)
from career_scraper.extraction.pipeline import SectionExtractor

__all__ = [
    "BrowserLaunchError",
    "CancellationToken",
    "CompositePolicy",
    "ConfigError",
    "EducationRecord",
    "EventKind",
    "ExperienceRecord",
    "ExtractionEvent",
    "ItemExtractionError",
    "LoggingObserver",
    "NavigationError",
    "ProfileOutcome",
    "RunAggregator",
    "RunResult",
    "ScopeProvider",
    "ScrapeConfig",
    "ScraperError",
    "Section",
    "SectionError",
    "SectionExtractor",
    "SectionSelectors",
    "SelectorsConfig",
    "load_scrape_config",
]
