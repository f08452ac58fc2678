"""Error taxonomy for the extraction engine.

Only ``ConfigError`` and ``BrowserLaunchError`` abort a run. The others are
caught at the item or target boundary, logged, and folded into the result.
"""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for all Career-Scraper errors."""


class ConfigError(ScraperError):
    """The scrape configuration is missing, malformed, or has the wrong shape."""


class BrowserLaunchError(ScraperError):
    """The browser or page could not be acquired."""


class NavigationError(ScraperError):
    """A profile page failed to load or settle."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Navigation to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class SectionError(ScraperError):
    """Enumerating the items of a section failed."""

    def __init__(self, section: str, profile_url: str, reason: str) -> None:
        super().__init__(f"Section '{section}' failed for {profile_url}: {reason}")
        self.section = section
        self.profile_url = profile_url
        self.reason = reason


class ItemExtractionError(ScraperError):
    """Reading one field group of a single item failed."""

    def __init__(self, index: int, field_group: str, reason: str) -> None:
        super().__init__(f"Item {index}: failed reading {field_group}: {reason}")
        self.index = index
        self.field_group = field_group
        self.reason = reason
