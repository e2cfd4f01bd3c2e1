"""
================================================================================
Search Results Page Object (Async / Playwright)
================================================================================

Results page of the search engine under test (Bing markup).

Locators are declared as properties so they are re-resolved against the
current DOM on every use; nothing is cached between calls.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.page_base import BasePage


class ResultsPage(BasePage):
    """Search results page object (async)."""

    URL_PATH = "/search"

    RESULTS_CONTAINER = "#b_results"
    RESULT_ITEM = "#b_results li.b_algo"
    FIRST_RESULT_LINK = "#b_results li.b_algo h2 a"

    @property
    def results_list(self) -> Locator:
        return self.page.locator(self.RESULTS_CONTAINER)

    @property
    def first_result(self) -> Locator:
        """First result link in document order."""
        return self.page.locator(self.FIRST_RESULT_LINK).first

    async def get_first_result_text(self) -> str:
        """
        Text of the first result link, trimmed.

        Returns an empty string when there are no results or the link has no
        text, so callers can assert on content without handling absence.
        """
        if await self.page.locator(self.FIRST_RESULT_LINK).count() == 0:
            logger.debug("No first result present")
            return ""
        text = await self.first_result.text_content()
        return (text or "").strip()

    @allure.step("Click first search result")
    async def click_first_result(self) -> None:
        """Click the first result and wait for the new document's DOMContentLoaded."""
        await self.first_result.click()
        await self.wait_for_page_load("domcontentloaded")
        logger.debug(f"Opened first result: {self.page.url}")

    async def get_results_count(self) -> int:
        """Number of result items currently in the DOM."""
        return await self.page.locator(self.RESULT_ITEM).count()
