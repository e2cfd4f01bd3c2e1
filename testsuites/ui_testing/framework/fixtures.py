"""
================================================================================
Browser Session Fixtures (pytest plugin)
================================================================================

Loaded from the root conftest through ``pytest_plugins``. Provides the UI
command line options, the settings fixtures and the per-test browser session.

Key Features:
- One driver/browser/context/page per test (BrowserSession)
- Teardown always runs, Page -> Context -> Browser -> driver
- Screenshot + URL attached to Allure when a test fails
- Teardown errors never hide the test's own failure

================================================================================
"""

from typing import AsyncGenerator

import pytest
from loguru import logger
from playwright.async_api import Page

from autotest_tools.common.config_loader import ConfigLoader
from autotest_tools.report_tools.allure_utils import attach_text

from .browser_manager import BrowserManager, BrowserSession, BrowserSettings
from .resource_stack import TeardownError


def pytest_addoption(parser):
    """UI suite options (names chosen not to clash with pytest-playwright)."""
    group = parser.getgroup("ui", "Browser UI tests")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run tests marked e2e against live websites (or set UI_RUN_E2E=1)",
    )
    group.addoption(
        "--screenshot-dir",
        default=None,
        help="Directory for screenshots; wins over config and class overrides",
    )
    group.addoption(
        "--ui-browser",
        choices=["chromium", "firefox", "webkit"],
        default=None,
        help="Browser engine for UI tests (default: ui.browser from config)",
    )
    group.addoption(
        "--ui-headed",
        action="store_true",
        default=False,
        help="Show the browser window",
    )
    group.addoption(
        "--record-video",
        action="store_true",
        default=False,
        help="Record one video per test context into ui.video_dir",
    )
    group.addoption(
        "--ui-trace",
        action="store_true",
        default=False,
        help="Record a Playwright trace per test into ui.trace_dir",
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (rep_setup / rep_call / rep_teardown)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_config() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture(scope="session")
def browser_settings(request, ui_config: ConfigLoader) -> BrowserSettings:
    """
    Launch/context settings: config file and env, overridden by CLI options.
    """
    option = request.config.getoption
    return BrowserSettings.from_config(
        ui_config,
        browser_type=option("--ui-browser"),
        headless=False if option("--ui-headed") else None,
        record_video=True if option("--record-video") else None,
        trace=True if option("--ui-trace") else None,
    )


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
def browser_manager(browser_settings: BrowserSettings) -> BrowserManager:
    return BrowserManager(browser_settings)


@pytest.fixture
async def browser_session(
    request,
    browser_manager: BrowserManager,
) -> AsyncGenerator[BrowserSession, None]:
    """
    Function-scoped session: fresh driver, browser, context and page.

    A setup failure raises BrowserSetupError, which pytest reports as an
    error rather than a test failure.
    """
    session = await browser_manager.setup(
        request.node.name,
        screenshot_dir=request.config.getoption("--screenshot-dir"),
    )
    yield session

    report = getattr(request.node, "rep_call", None)
    test_failed = report is not None and report.failed

    if test_failed and session.page is not None:
        try:
            await session.take_screenshot("failure")
            attach_text(session.page.url, name="Current URL")
        except Exception as e:
            # Log but don't fail if screenshot capture fails
            logger.warning(f"Failed to capture screenshot on failure: {e}")

    try:
        await browser_manager.teardown(session)
    except TeardownError as e:
        if test_failed:
            logger.error(f"Teardown error after failed test (not re-raised): {e}")
        else:
            raise


@pytest.fixture
def page(browser_session: BrowserSession) -> Page:
    """The session's page."""
    return browser_session.page
