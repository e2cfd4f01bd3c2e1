"""
================================================================================
Browser Manager
================================================================================

Per-test browser lifecycle for UI automation.

Every test gets its own Playwright driver, browser, context and page. The
handles live on an explicit ``BrowserSession`` object that the test receives,
and are released in reverse acquisition order when the session closes.

Features:
    - Configurable browser type, headless mode, viewport and slow-mo
    - Optional video recording and Playwright tracing per context
    - Screenshot helper with a resolved-once output directory
    - Best-effort teardown that reports the first failure

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from loguru import logger
from playwright.async_api import (
    APIRequestContext,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

from autotest_tools.common import ensure_directory
from autotest_tools.common.config_loader import ConfigLoader
from autotest_tools.report_tools.allure_utils import attach_screenshot

from .resource_stack import ResourceStack, TeardownError


DEFAULT_SCREENSHOT_DIR = "screenshots/"
DEFAULT_VIDEO_DIR = "test-videos/"
DEFAULT_TRACE_DIR = "traces/"
DEFAULT_VIEWPORT: Dict[str, int] = {"width": 1280, "height": 720}

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserSetupError(Exception):
    """Raised when the driver, browser, context or page cannot be created."""
    pass


def sanitize_test_name(name: str) -> str:
    """
    Make a pytest node name safe for use in file names.

    >>> sanitize_test_name("test_search[chromium-Playwright C#]")
    'test_search_chromium-Playwright_C'
    """
    cleaned = re.sub(r"[^\w.-]+", "_", name).strip("_")
    return cleaned or "test"


def _optional_int(value: Any) -> Optional[int]:
    # Timeouts may arrive as strings from the environment; None keeps Playwright's default
    return None if value is None else int(value)


@dataclass
class BrowserSettings:
    """
    Launch and context options for one test session.

    Attributes:
        browser_type: 'chromium', 'firefox' or 'webkit'
        headless: Run without a visible window
        viewport: Context viewport size
        slow_mo: Delay between Playwright operations (ms)
        default_timeout: Per-action timeout override (ms), None keeps Playwright's
        navigation_timeout: Navigation timeout override (ms)
        screenshot_dir: Configured screenshot directory (None = not configured)
        record_video: Record a video per context into ``video_dir``
        trace: Record a Playwright trace per context into ``trace_dir``
    """
    browser_type: str = "chromium"
    headless: bool = True
    viewport: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_VIEWPORT))
    slow_mo: int = 0
    default_timeout: Optional[int] = None
    navigation_timeout: Optional[int] = None
    screenshot_dir: Optional[str] = None
    record_video: bool = False
    video_dir: str = DEFAULT_VIDEO_DIR
    trace: bool = False
    trace_dir: str = DEFAULT_TRACE_DIR

    def __post_init__(self) -> None:
        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{self.browser_type}'. "
                f"Expected one of: {', '.join(SUPPORTED_BROWSERS)}"
            )

    @classmethod
    def from_config(
        cls,
        config: Optional[ConfigLoader] = None,
        **overrides: Any,
    ) -> "BrowserSettings":
        """
        Build settings from ``ui.*`` configuration keys.

        Keyword overrides (e.g. from pytest command line options) win over
        configuration; ``None`` overrides are ignored.
        """
        config = config or ConfigLoader()
        values: Dict[str, Any] = {
            "browser_type": config.get("ui.browser", "chromium"),
            "headless": config.get("ui.headless", True),
            "viewport": {
                "width": config.get("ui.viewport.width", DEFAULT_VIEWPORT["width"]),
                "height": config.get("ui.viewport.height", DEFAULT_VIEWPORT["height"]),
            },
            "slow_mo": config.get("ui.slow_mo", 0),
            "default_timeout": _optional_int(config.get("ui.default_timeout")),
            "navigation_timeout": _optional_int(config.get("ui.navigation_timeout")),
            "screenshot_dir": config.get("ui.screenshot_dir"),
            "record_video": config.get("ui.record_video", False),
            "video_dir": config.get("ui.video_dir", DEFAULT_VIDEO_DIR),
            "trace": config.get("ui.trace", False),
            "trace_dir": config.get("ui.trace_dir", DEFAULT_TRACE_DIR),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class BrowserSession:
    """
    Handles owned by a single test.

    Created by ``BrowserManager.setup()``; closed exactly once by
    ``close()`` (or by leaving ``async with session:``).
    """
    test_name: str
    screenshot_dir: Path
    playwright: Optional[Playwright] = None
    browser: Optional[Browser] = None
    context: Optional[BrowserContext] = None
    page: Optional[Page] = None
    video_dir: Optional[Path] = None
    trace_path: Optional[Path] = None
    _stack: ResourceStack = field(default_factory=ResourceStack, repr=False)
    _closed: bool = field(default=False, repr=False)

    async def __aenter__(self) -> "BrowserSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def request(self) -> APIRequestContext:
        """HTTP client sharing this context's cookies, for non-UI checks."""
        if self.context is None:
            raise RuntimeError("Browser context is not available.")
        return self.context.request

    def screenshot_path(self, name: str) -> Path:
        """Return ``{screenshot_dir}/{test_name}_{name}.png``."""
        return self.screenshot_dir / f"{self.test_name}_{name}.png"

    async def take_screenshot(
        self,
        name: str,
        full_page: bool = False,
    ) -> Optional[Path]:
        """
        Capture the current viewport.

        Repeated calls with the same name overwrite the previous file.

        Args:
            name: Label appended to the test name
            full_page: Capture the full scrollable page instead of the viewport

        Returns:
            Path to the saved image, or None when no page is active
        """
        if self.page is None:
            logger.debug(f"No active page, screenshot '{name}' skipped")
            return None

        ensure_directory(str(self.screenshot_dir))
        filepath = self.screenshot_path(name)
        await self.page.screenshot(path=str(filepath), full_page=full_page)
        attach_screenshot(filepath, name=name)

        logger.info(f"Screenshot saved: {filepath}")
        return filepath

    async def close(self) -> None:
        """
        Release page, context, browser and driver in that order.

        Raises:
            TeardownError: first release failure, after all releases ran
        """
        if self._closed:
            return
        self._closed = True

        try:
            await self._stack.unwind()
        finally:
            self.page = None
            self.context = None
            self.browser = None
            self.playwright = None
            logger.debug(f"Session closed: {self.test_name}")


class BrowserManager:
    """
    Creates and tears down ``BrowserSession`` objects.

    Screenshot directory precedence, resolved once per setup:
        1. ``screenshot_dir`` argument to ``setup()`` (per-run parameter)
        2. ``SCREENSHOT_DIR`` class attribute on a subclass
        3. ``settings.screenshot_dir`` (config ``ui.screenshot_dir``)
        4. ``DEFAULT_SCREENSHOT_DIR``

    Usage:
        manager = BrowserManager(BrowserSettings(headless=False))
        async with await manager.setup("test_homepage") as session:
            await session.page.goto("https://playwright.dev")
            await session.take_screenshot("homepage")
    """

    # Override in subclasses to pin a suite-specific screenshot directory
    SCREENSHOT_DIR: Optional[str] = None

    def __init__(
        self,
        settings: Optional[BrowserSettings] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        """
        Initialize browser manager.

        Args:
            settings: Launch/context options (defaults to ``BrowserSettings()``)
            playwright_factory: Callable returning an object whose async
                ``start()`` yields a Playwright driver
        """
        self.settings = settings or BrowserSettings()
        self._playwright_factory = playwright_factory

    def resolve_screenshot_dir(self, explicit: Optional[str] = None) -> Path:
        """Apply the screenshot directory precedence."""
        for candidate in (explicit, self.SCREENSHOT_DIR, self.settings.screenshot_dir):
            if candidate:
                return Path(candidate)
        return Path(DEFAULT_SCREENSHOT_DIR)

    def _context_options(self, video_dir: Optional[Path]) -> Dict[str, Any]:
        options: Dict[str, Any] = {"viewport": dict(self.settings.viewport)}
        if video_dir is not None:
            options["record_video_dir"] = str(video_dir)
            options["record_video_size"] = dict(self.settings.viewport)
        return options

    async def setup(
        self,
        test_name: str,
        screenshot_dir: Optional[str] = None,
    ) -> BrowserSession:
        """
        Start driver, browser, context and page for one test.

        Args:
            test_name: Used to name screenshots and traces
            screenshot_dir: Per-run screenshot directory override

        Returns:
            Ready-to-use BrowserSession

        Raises:
            BrowserSetupError: any failure while acquiring resources; already
                acquired resources are released first
        """
        name = sanitize_test_name(test_name)
        settings = self.settings
        session = BrowserSession(
            test_name=name,
            screenshot_dir=self.resolve_screenshot_dir(screenshot_dir),
        )
        stack = session._stack

        try:
            session.playwright = await self._playwright_factory().start()
            stack.push("playwright", session.playwright.stop)

            launcher = getattr(session.playwright, settings.browser_type)
            session.browser = await launcher.launch(
                headless=settings.headless,
                slow_mo=settings.slow_mo,
            )
            stack.push("browser", session.browser.close)

            if settings.record_video:
                session.video_dir = Path(settings.video_dir)
            session.context = await session.browser.new_context(
                **self._context_options(session.video_dir)
            )
            stack.push("context", session.context.close)

            if settings.default_timeout:
                session.context.set_default_timeout(settings.default_timeout)
            if settings.navigation_timeout:
                session.context.set_default_navigation_timeout(settings.navigation_timeout)

            if settings.trace:
                session.trace_path = Path(settings.trace_dir) / f"{name}.zip"
                await session.context.tracing.start(
                    screenshots=True,
                    snapshots=True,
                    sources=True,
                )
                stack.push("tracing", self._trace_stopper(session))

            session.page = await session.context.new_page()
            stack.push("page", session.page.close)
        except Exception as e:
            logger.error(f"Browser setup failed for {name}: {e!r}")
            try:
                await session.close()
            except TeardownError as teardown_error:
                logger.warning(f"Cleanup after failed setup also failed: {teardown_error}")
            raise BrowserSetupError(f"Could not set up browser for '{name}': {e}") from e

        logger.debug(
            f"Session ready: {name} ({settings.browser_type}, "
            f"headless={settings.headless}, viewport={settings.viewport})"
        )
        return session

    @staticmethod
    def _trace_stopper(session: BrowserSession) -> Callable[[], Any]:
        async def stop_tracing() -> None:
            ensure_directory(str(session.trace_path.parent))
            await session.context.tracing.stop(path=str(session.trace_path))
            logger.info(f"Trace saved: {session.trace_path}")

        return stop_tracing

    async def teardown(self, session: BrowserSession) -> None:
        """Close the session; see ``BrowserSession.close``."""
        await session.close()


__all__ = [
    "BrowserManager",
    "BrowserSession",
    "BrowserSettings",
    "BrowserSetupError",
    "DEFAULT_SCREENSHOT_DIR",
    "DEFAULT_TRACE_DIR",
    "DEFAULT_VIDEO_DIR",
    "sanitize_test_name",
]
