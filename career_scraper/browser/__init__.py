"""Playwright-backed page access for the extraction engine."""

from career_scraper.browser.dom import PlaywrightNode
from career_scraper.browser.navigator import ProfileNavigator
from career_scraper.browser.session import BrowserSession

__all__ = ["BrowserSession", "PlaywrightNode", "ProfileNavigator"]
