"""Tests for ProfileNavigator."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from career_scraper.browser.dom import PlaywrightNode
from career_scraper.browser.navigator import ProfileNavigator
from career_scraper.config.settings import SectionPages, Settings
from career_scraper.extraction.errors import NavigationError
from career_scraper.extraction.models import Section

PROFILE_A = "https://www.linkedin.com/in/a"
PROFILE_B = "https://www.linkedin.com/in/b"


@pytest.fixture
def mock_page():
    page = MagicMock(spec=Page)
    page.goto = AsyncMock()
    return page


@pytest.fixture
def mock_sleep(monkeypatch):
    sleep = AsyncMock()
    monkeypatch.setattr("career_scraper.browser.navigator.asyncio.sleep", sleep)
    return sleep


def _settings(**overrides) -> Settings:
    values = {
        "settle_delay_seconds": 3.0,
        "section_delay_seconds": 2.0,
        "profile_delay_seconds": 5.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSectionUrl:
    """Test which URL each section is read from."""

    def test_details_pages(self, mock_page):
        navigator = ProfileNavigator(mock_page, _settings())

        assert (
            navigator.section_url(PROFILE_A + "/", Section.EXPERIENCE)
            == f"{PROFILE_A}/details/experience"
        )
        assert (
            navigator.section_url(PROFILE_A, Section.EDUCATION)
            == f"{PROFILE_A}/details/education"
        )

    def test_profile_page(self, mock_page):
        navigator = ProfileNavigator(
            mock_page, _settings(section_pages=SectionPages.PROFILE)
        )

        assert navigator.section_url(PROFILE_A, Section.EDUCATION) == PROFILE_A


class TestNavigate:
    """Test navigation and waits."""

    async def test_returns_page_scope_after_settling(self, mock_page, mock_sleep):
        navigator = ProfileNavigator(mock_page, _settings(navigation_timeout_ms=1234))

        scope = await navigator(PROFILE_A, Section.EXPERIENCE)

        assert isinstance(scope, PlaywrightNode)
        assert scope.handle is mock_page
        mock_page.goto.assert_awaited_once_with(
            f"{PROFILE_A}/details/experience",
            wait_until="domcontentloaded",
            timeout=1234,
        )
        mock_sleep.assert_awaited_once_with(3.0)

    async def test_pauses_between_sections_and_profiles(self, mock_page, mock_sleep):
        navigator = ProfileNavigator(mock_page, _settings())

        await navigator(PROFILE_A, Section.EXPERIENCE)
        await navigator(PROFILE_A, Section.EDUCATION)
        await navigator(PROFILE_B, Section.EXPERIENCE)

        delays = [call.args[0] for call in mock_sleep.await_args_list]
        assert delays == [3.0, 2.0, 3.0, 5.0, 3.0]

    async def test_timeout_raises_navigation_error(self, mock_page, mock_sleep):
        mock_page.goto.side_effect = PlaywrightTimeoutError("Timeout 60000ms exceeded")
        navigator = ProfileNavigator(mock_page, _settings())

        with pytest.raises(NavigationError, match="timeout") as exc_info:
            await navigator(PROFILE_A, Section.EXPERIENCE)

        assert exc_info.value.url == f"{PROFILE_A}/details/experience"
        mock_sleep.assert_not_awaited()

    async def test_timeout_can_be_tolerated(self, mock_page, mock_sleep):
        mock_page.goto.side_effect = PlaywrightTimeoutError("Timeout 60000ms exceeded")
        navigator = ProfileNavigator(
            mock_page, _settings(continue_on_navigation_timeout=True)
        )

        scope = await navigator(PROFILE_A, Section.EXPERIENCE)

        assert scope.handle is mock_page
        mock_sleep.assert_awaited_once_with(3.0)

    async def test_other_browser_errors_raise(self, mock_page, mock_sleep):
        mock_page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        navigator = ProfileNavigator(
            mock_page, _settings(continue_on_navigation_timeout=True)
        )

        with pytest.raises(NavigationError, match="ERR_NAME_NOT_RESOLVED"):
            await navigator(PROFILE_A, Section.EXPERIENCE)
