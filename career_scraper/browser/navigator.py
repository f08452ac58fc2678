"""Profile navigation: open a section page and let it settle."""

from __future__ import annotations

import asyncio
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from career_scraper.browser.dom import PlaywrightNode
from career_scraper.config.settings import SectionPages, Settings, get_settings
from career_scraper.extraction.errors import NavigationError
from career_scraper.extraction.models import Section

logger = logging.getLogger(__name__)


class ProfileNavigator:
    """Scope provider backed by a single Playwright page.

    Called as ``await navigator(profile_url, section)``. Waits are fixed
    durations: a pause between sections of the same profile or between
    profiles, then a settle delay after each navigation.
    """

    def __init__(self, page: Page, settings: Settings | None = None) -> None:
        self.page = page
        self.settings = settings or get_settings()
        self._last_profile: str | None = None

    def section_url(self, profile_url: str, section: Section) -> str:
        base = profile_url.rstrip("/")
        if self.settings.section_pages is SectionPages.DETAILS:
            return f"{base}/details/{section.value}"
        return base

    async def __call__(self, profile_url: str, section: Section) -> PlaywrightNode:
        await self._pause_before(profile_url)
        self._last_profile = profile_url

        url = self.section_url(profile_url, section)
        logger.info(f"Navigating to: {url}")
        try:
            await self.page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.settings.navigation_timeout_ms,
            )
        except PlaywrightTimeoutError as e:
            if not self.settings.continue_on_navigation_timeout:
                raise NavigationError(url, "timeout") from e
            logger.warning(f"Navigation timeout for {url} - continuing anyway...")
        except PlaywrightError as e:
            raise NavigationError(url, e.message) from e

        await asyncio.sleep(self.settings.settle_delay_seconds)
        return PlaywrightNode(self.page)

    async def _pause_before(self, profile_url: str) -> None:
        if self._last_profile is None:
            return
        if self._last_profile == profile_url:
            delay = self.settings.section_delay_seconds
        else:
            delay = self.settings.profile_delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)
