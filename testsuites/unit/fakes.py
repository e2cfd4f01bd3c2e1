"""
In-memory stand-ins for the Playwright objects the framework touches.

Every lifecycle call is appended to a shared ``events`` list so tests can
assert on ordering. ``fail`` holds event names (e.g. "page.close") that
should raise instead of succeeding.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from playwright.async_api import TimeoutError as PlaywrightTimeoutError


# Smallest valid PNG (1x1 transparent pixel)
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d49444154789c63000100000500010d0a2db40000000049454e44ae426082"
)


def glob_to_regex(pattern: str) -> "re.Pattern[str]":
    """Playwright-style URL glob: ``**`` any text, ``*`` no slash, rest literal."""
    parts = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts))


class Recorder:
    def __init__(self, fail: Optional[Set[str]] = None):
        self.events: List[str] = []
        self.fail: Set[str] = set(fail or ())

    def record(self, event: str) -> None:
        self.events.append(event)
        if event in self.fail:
            raise RuntimeError(f"{event} failed")


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, nth: Optional[int] = None):
        self._page = page
        self.selector = selector
        self._nth = nth

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._page, self.selector, 0)

    def _matches(self) -> List[Optional[str]]:
        return self._page.elements.get(self.selector, [])

    async def fill(self, value: str, **kwargs: Any) -> None:
        self._page.calls.append(("fill", self.selector, value))
        self._page.values[self.selector] = value

    async def input_value(self, **kwargs: Any) -> str:
        return self._page.values.get(self.selector, "")

    async def count(self) -> int:
        self._page.calls.append(("count", self.selector))
        return len(self._matches())

    async def text_content(self, **kwargs: Any) -> Optional[str]:
        matches = self._matches()
        if not matches:
            raise PlaywrightTimeoutError(f"Timeout waiting for {self.selector}")
        return matches[self._nth or 0]

    async def click(self, **kwargs: Any) -> None:
        if not self._matches():
            raise PlaywrightTimeoutError(f"Timeout waiting for {self.selector}")
        self._page.calls.append(("click", self.selector))
        self._page.url = self._page.click_targets.get(self.selector, self._page.url)


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self._page = page

    async def press(self, key: str, **kwargs: Any) -> None:
        self._page.calls.append(("press", key))
        if key == "Enter" and self._page.url_after_enter:
            self._page.url = self._page.url_after_enter


class FakePage:
    """
    Page double for page objects and screenshots.

    Attributes:
        elements: selector -> list of text contents of matching elements
        values: selector -> current input value
        calls: ordered interaction log
        url_after_enter: URL the page "navigates" to when Enter is pressed
        click_targets: selector -> URL reached by clicking it
    """

    def __init__(
        self,
        url: str = "about:blank",
        title: str = "",
        recorder: Optional[Recorder] = None,
    ):
        self.url = url
        self.title_text = title
        self.elements: Dict[str, List[Optional[str]]] = {}
        self.values: Dict[str, str] = {}
        self.calls: List[tuple] = []
        self.url_after_enter: Optional[str] = None
        self.click_targets: Dict[str, str] = {}
        self.keyboard = FakeKeyboard(self)
        self._recorder = recorder or Recorder()

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.calls.append(("goto", url, kwargs.get("wait_until")))
        self.url = url

    async def title(self) -> str:
        return self.title_text

    def locator(self, selector: str, **kwargs: Any) -> FakeLocator:
        return FakeLocator(self, selector)

    async def wait_for_url(self, url: Any, timeout: Optional[float] = None, **kwargs: Any) -> None:
        self.calls.append(("wait_for_url", url))
        regex = url if hasattr(url, "search") else glob_to_regex(url)
        if not regex.fullmatch(self.url):
            raise PlaywrightTimeoutError(f"Timeout waiting for URL {url}, current {self.url}")

    async def wait_for_load_state(self, state: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.calls.append(("wait_for_load_state", state))

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False, **kwargs: Any) -> bytes:
        self.calls.append(("screenshot", path, full_page))
        if path:
            Path(path).write_bytes(PNG_BYTES)
        return PNG_BYTES

    async def close(self) -> None:
        self._recorder.record("page.close")


class FakeTracing:
    def __init__(self, recorder: Recorder):
        self._recorder = recorder
        self.stop_path: Optional[str] = None

    async def start(self, **kwargs: Any) -> None:
        self._recorder.record("tracing.start")

    async def stop(self, path: Optional[str] = None) -> None:
        self._recorder.record("tracing.stop")
        self.stop_path = path


class FakeContext:
    def __init__(self, recorder: Recorder, options: Dict[str, Any]):
        self._recorder = recorder
        self.options = options
        self.tracing = FakeTracing(recorder)
        self.default_timeout: Optional[float] = None
        self.default_navigation_timeout: Optional[float] = None
        self.pages: List[FakePage] = []
        self.request = object()

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.default_navigation_timeout = timeout

    async def new_page(self) -> FakePage:
        self._recorder.record("context.new_page")
        page = FakePage(recorder=self._recorder)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self._recorder.record("context.close")


class FakeBrowser:
    def __init__(self, recorder: Recorder, launch_options: Dict[str, Any]):
        self._recorder = recorder
        self.launch_options = launch_options
        self.contexts: List[FakeContext] = []

    async def new_context(self, **options: Any) -> FakeContext:
        self._recorder.record("browser.new_context")
        context = FakeContext(self._recorder, options)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self._recorder.record("browser.close")


class FakeBrowserType:
    def __init__(self, name: str, recorder: Recorder):
        self.name = name
        self._recorder = recorder
        self.browsers: List[FakeBrowser] = []

    async def launch(self, **options: Any) -> FakeBrowser:
        self._recorder.record(f"{self.name}.launch")
        browser = FakeBrowser(self._recorder, options)
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, recorder: Recorder):
        self._recorder = recorder
        self.chromium = FakeBrowserType("chromium", recorder)
        self.firefox = FakeBrowserType("firefox", recorder)
        self.webkit = FakeBrowserType("webkit", recorder)

    async def stop(self) -> None:
        self._recorder.record("playwright.stop")


class FakePlaywrightFactory:
    """Drop-in for ``async_playwright``: ``factory().start()`` yields a FakePlaywright."""

    def __init__(self, fail: Optional[Set[str]] = None):
        self.recorder = Recorder(fail)
        self.instances: List[FakePlaywright] = []

    @property
    def events(self) -> List[str]:
        return self.recorder.events

    def __call__(self) -> "FakePlaywrightFactory":
        return self

    async def start(self) -> FakePlaywright:
        self.recorder.record("playwright.start")
        playwright = FakePlaywright(self.recorder)
        self.instances.append(playwright)
        return playwright

    @property
    def browser(self) -> FakeBrowser:
        return self.instances[-1].chromium.browsers[-1]

    @property
    def context(self) -> FakeContext:
        return self.browser.contexts[-1]
