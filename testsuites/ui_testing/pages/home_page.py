"""
================================================================================
Search Home Page Object (Async / Playwright)
================================================================================

Landing page of the search engine under test (Bing by default; override the
base URL with ``UI_SEARCH_BASE_URL`` or ``ui.search_base_url``).

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.pages.results_page import ResultsPage


class HomePage(BasePage):
    """Search home page object (async)."""

    URL_PATH = "/"
    PAGE_TITLE = "Bing"

    SEARCH_INPUT = "input[name='q']"
    RESULTS_URL_PATTERN = "**/search?**"

    @property
    def search_box(self) -> Locator:
        return self.page.locator(self.SEARCH_INPUT)

    @allure.step("Open search home page")
    async def open(self) -> "HomePage":
        """Navigate to the search home page."""
        await self.navigate()
        return self

    @allure.step("Search for '{text}'")
    async def search(self, text: str) -> None:
        """
        Fill the search box and submit with Enter.

        Does not wait for the results page; use ``search_and_wait_for_results``
        when the next step needs it.
        """
        await self.search_box.fill(text)
        await self.page.keyboard.press("Enter")
        logger.debug(f"Submitted search: {text}")

    async def search_and_wait_for_results(
        self,
        text: str,
        timeout: Optional[float] = None,
    ) -> ResultsPage:
        """
        Search, then block until the URL matches the results page.

        Args:
            text: Query to submit
            timeout: Wait-for-URL timeout in milliseconds

        Returns:
            ResultsPage bound to the same page handle
        """
        await self.search(text)
        await self.wait_for_url(self.RESULTS_URL_PATTERN, timeout=timeout)
        return ResultsPage(self.page, base_url=self.base_url)
