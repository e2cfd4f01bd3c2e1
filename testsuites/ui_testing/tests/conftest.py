"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Site URLs, page object fixtures and test data. Browser session fixtures come
from ``testsuites.ui_testing.framework.fixtures`` (registered in the root
conftest).

================================================================================
"""

import pytest
from playwright.async_api import Page

from autotest_tools.common.config_loader import ConfigLoader
from testsuites.ui_testing.pages.home_page import HomePage


# ================================================================================
# Site Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def search_base_url(ui_config: ConfigLoader) -> str:
    return ui_config.get("ui.search_base_url", "https://www.bing.com")


@pytest.fixture(scope="session")
def docs_base_url(ui_config: ConfigLoader) -> str:
    return ui_config.get("ui.docs_base_url", "https://playwright.dev").rstrip("/")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(page: Page, search_base_url: str) -> HomePage:
    """
    Provides HomePage instance (not yet navigated).
    """
    return HomePage(page, base_url=search_base_url)


# ================================================================================
# Test Data
# ================================================================================

@pytest.fixture
def test_data():
    """
    Provides common test data for UI tests.
    """
    return {
        "queries": {
            "google": "Playwright testing",
            "bing": "Playwright C#",
        },
        "docs_search": "test",
    }
