"""Browser lifecycle: one Chromium window and one long-lived page."""

from __future__ import annotations

import contextlib
import logging

from playwright.async_api import Browser, Page, Playwright, async_playwright

from career_scraper.config.settings import Settings, get_settings
from career_scraper.extraction.errors import BrowserLaunchError

logger = logging.getLogger(__name__)

_CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]


class BrowserSession:
    """Own the Playwright driver, the browser and the page used for scraping.

    The engine receives the page by reference and never closes it; closing
    happens here, when the session exits.
    """

    def __init__(self, settings: Settings | None = None, headless: bool | None = None) -> None:
        self.settings = settings or get_settings()
        self.headless = self.settings.headless if headless is None else headless
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session is not open.")
        return self._page

    async def open(self) -> Page:
        """Launch Chromium and open the start page.

        Raises:
            BrowserLaunchError: If the browser or page cannot be created.
        """
        if self._page is not None:
            return self._page

        logger.info(f"Launching browser (headless: {self.headless})...")
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=_CHROMIUM_ARGS
            )
            context = await self._browser.new_context(
                viewport={
                    "width": self.settings.window_width,
                    "height": self.settings.window_height,
                }
            )
            self._page = await context.new_page()
        except Exception as e:
            await self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

        logger.info("Browser launched")

        if self.settings.start_url:
            try:
                await self._page.goto(
                    self.settings.start_url,
                    wait_until="domcontentloaded",
                    timeout=self.settings.navigation_timeout_ms,
                )
            except Exception as e:
                logger.warning(f"Could not open start page {self.settings.start_url}: {e}")

        return self._page

    async def close(self) -> None:
        if self._browser is not None:
            with contextlib.suppress(Exception):
                await self._browser.close()
            self._browser = None
            self._page = None

        if self._playwright is not None:
            with contextlib.suppress(Exception):
                await self._playwright.stop()
            self._playwright = None

    async def __aenter__(self) -> BrowserSession:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
        logger.info("Browser closed")
