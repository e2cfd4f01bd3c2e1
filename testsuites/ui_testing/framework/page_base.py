"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Page objects receive the page handle through their constructor as a
``PageDriver``: the narrow capability set they actually use (navigate,
locate, press keys, wait). Playwright's ``Page`` satisfies it as-is; unit
tests pass a fake.

Provides:
    - Navigation and URL handling
    - Wait strategies
    - Allure steps and loguru logging around page actions

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from typing import Any, Optional, Pattern, Protocol, Union

import allure
from loguru import logger
from playwright.async_api import Locator


URLMatcher = Union[str, Pattern[str]]


class KeyboardDriver(Protocol):
    async def press(self, key: str, **kwargs: Any) -> None: ...


class PageDriver(Protocol):
    """Capabilities a page object needs from a live page."""

    @property
    def url(self) -> str: ...

    @property
    def keyboard(self) -> KeyboardDriver: ...

    async def goto(self, url: str, **kwargs: Any) -> Any: ...

    async def title(self) -> str: ...

    def locator(self, selector: str, **kwargs: Any) -> Locator: ...

    async def wait_for_url(self, url: URLMatcher, **kwargs: Any) -> None: ...

    async def wait_for_load_state(self, state: Optional[str] = None, **kwargs: Any) -> None: ...


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class HomePage(BasePage):
            URL_PATH = "/"

            async def search(self, text: str):
                await self.page.locator("input[name='q']").fill(text)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""
    BASE_URL_ENV: str = "UI_SEARCH_BASE_URL"
    DEFAULT_BASE_URL: str = "https://www.bing.com"

    def __init__(
        self,
        page: PageDriver,
        base_url: str = "",
    ):
        """
        Initialize page object.

        Args:
            page: Page handle (Playwright Page or any PageDriver)
            base_url: Base URL; falls back to $BASE_URL_ENV, then DEFAULT_BASE_URL
        """
        self.page = page
        if not base_url:
            base_url = os.getenv(self.BASE_URL_ENV, self.DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip("/")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        """URL the page is showing right now."""
        return self.page.url

    async def title(self) -> str:
        return await self.page.title()

    async def verify_title(self) -> bool:
        """True if the document title contains PAGE_TITLE (case-insensitive)."""
        title = await self.title()
        return self.PAGE_TITLE.lower() in title.lower()

    async def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle', 'commit'
        """
        with allure.step(f"Navigate to {self.url}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    async def wait_for_url(
        self,
        url_pattern: URLMatcher,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Wait for URL to match pattern.

        Args:
            url_pattern: Glob pattern (``**/search?**``) or compiled regex
            timeout: Timeout in milliseconds; None keeps the page default
        """
        with allure.step(f"Wait for URL: {url_pattern}"):
            await self.page.wait_for_url(url_pattern, timeout=timeout)
            logger.debug(f"URL matched {url_pattern}: {self.page.url}")

    async def wait_for_page_load(
        self,
        state: str = "load",
        timeout: Optional[float] = None,
    ) -> None:
        """
        Wait for the page to reach a load state.

        Args:
            state: 'load', 'domcontentloaded' or 'networkidle'
            timeout: Timeout in milliseconds; None keeps the page default
        """
        await self.page.wait_for_load_state(state, timeout=timeout)


__all__ = [
    "BasePage",
    "PageDriver",
]
