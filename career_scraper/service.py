"""End-to-end scrape run: browser, operator control, extraction."""

from __future__ import annotations

import asyncio
import logging
from typing import TextIO

from career_scraper.browser import BrowserSession, ProfileNavigator
from career_scraper.config.settings import Settings, get_settings
from career_scraper.control import (
    KeyboardControl,
    install_signal_handlers,
    remove_signal_handlers,
)
from career_scraper.extraction import (
    CancellationToken,
    LoggingObserver,
    RunAggregator,
    RunResult,
    ScrapeConfig,
    SectionExtractor,
)

logger = logging.getLogger(__name__)

_BANNER = """
==========================================
  Log in in the browser window if needed.
  Press Enter to START scraping.
  Press Enter again to STOP scraping.
==========================================
"""


async def run_scrape(
    config: ScrapeConfig,
    *,
    settings: Settings | None = None,
    headless: bool | None = None,
    assume_yes: bool = False,
    stream: TextIO | None = None,
) -> RunResult:
    """Scrape every configured profile and return the run result.

    Args:
        config: Profiles and selectors.
        settings: Application settings (defaults to the singleton).
        headless: Override for the browser headless flag.
        assume_yes: Skip the start gate.
        stream: Operator input stream (defaults to stdin).

    Raises:
        BrowserLaunchError: If the browser cannot be started.
    """
    settings = settings or get_settings()
    if headless is None:
        headless = config.options.headless
    token = CancellationToken()
    loop = asyncio.get_running_loop()

    async with BrowserSession(settings, headless=headless) as session:
        installed = install_signal_handlers(token, loop)
        control = KeyboardControl(token, stream=stream)
        try:
            if settings.wait_for_start and not assume_yes:
                print(_BANNER, flush=True)
                control.start()
                if not await token.wait_started():
                    logger.info("Stopped before scraping started")
                    return RunResult(total_profiles=len(config.profiles), stopped=True)
            else:
                token.start()
                control.start()

            aggregator = RunAggregator(
                scope_provider=ProfileNavigator(session.page, settings),
                extractor=SectionExtractor(
                    policy=settings.composite_policy,
                    observers=[LoggingObserver()],
                ),
            )
            return await aggregator.run_all(config.profiles, config.selectors, token)
        finally:
            remove_signal_handlers(loop, installed)
